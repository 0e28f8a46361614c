"""
The calculator session: one strategy, its current state and the history log.
"""

import logging

from tapcalc.history import HistoryLog
from tapcalc.strategies import ExpressionStrategy

logger = logging.getLogger(__name__)


class CalculatorSession:
    """Everything the window needs to drive the calculator

    Each press_* method applies one input event and returns the new
    display text.
    """

    def __init__(self, strategy=None, history=None):
        self.strategy = strategy if strategy is not None else ExpressionStrategy()
        self.history = history if history is not None else HistoryLog()
        self.state = self.strategy.initial_state()

    def _apply(self, transition):
        self.state = transition.state
        if transition.record is not None:
            self.history.append(transition.record)
        return self.display

    @property
    def mode(self):
        return self.strategy.name

    @property
    def display(self):
        return self.state.display

    @property
    def expression(self):
        return self.strategy.expression_of(self.state)

    @property
    def pending_operator(self):
        return self.strategy.pending_operator(self.state)

    def press_digit(self, token):
        """Digit 0-9 or decimal point"""
        return self._apply(self.strategy.append_digit(self.state, str(token)))

    def press_operator(self, op):
        return self._apply(self.strategy.append_operator(self.state, op))

    def press_parenthesis(self):
        return self._apply(self.strategy.append_parenthesis(self.state))

    def backspace(self):
        return self._apply(self.strategy.backspace(self.state))

    def clear(self):
        """All clear; history is kept"""
        return self._apply(self.strategy.clear(self.state))

    def evaluate(self):
        return self._apply(self.strategy.evaluate(self.state))

    def recall(self, index):
        """Reuse the result of a history entry as the next input"""
        return self._apply(self.strategy.recall(self.state, self.history[index]))

    def clear_history(self):
        self.history.clear()

    def switch_strategy(self, strategy):
        """Change calculator mode, starting from a cleared state"""
        if strategy.name == self.strategy.name:
            return self.display
        logger.info("Switching calculator mode: %s -> %s", self.strategy.name, strategy.name)
        self.strategy = strategy
        self.state = strategy.initial_state()
        return self.display
