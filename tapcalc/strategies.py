"""
Input tracking and evaluation.

Two interchangeable ways of turning taps into results:

- ExpressionStrategy builds a free-form infix expression ("12+3×(4-1)")
  and evaluates it all at once with the parser.
- AccumulatorStrategy keeps one pending operation (previous value,
  operator, current value), like a pocket calculator.

States are immutable. Every operation takes a state and returns a
Transition holding the new state and the history entry that step produced,
if any.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from tapcalc import parser
from tapcalc.formatting import ERROR, format_result, parse_result
from tapcalc.history import HistoryEntry

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
DECIMAL_POINT = "."


@dataclass(frozen=True)
class ExpressionState:
    expression: str = ""
    display: str = "0"
    fresh: bool = True


@dataclass(frozen=True)
class AccumulatorState:
    previous: float = 0.0
    operator: Optional[str] = None
    current: float = 0.0
    entry: str = "0"
    display: str = "0"
    fresh: bool = True


@dataclass(frozen=True)
class Transition:
    state: object
    record: Optional[HistoryEntry] = None


def _check_digit(token):
    if len(token) != 1 or token not in DIGITS + DECIMAL_POINT:
        raise ValueError(f"Not a digit or decimal point: {token!r}")


def _trailing_number(text):
    """The run of digits and decimal points at the end of text"""
    i = len(text)
    while i > 0 and (text[i - 1] in DIGITS or text[i - 1] == DECIMAL_POINT):
        i -= 1
    return text[i:]


class EvaluationStrategy:
    """Interface shared by both calculator modes"""

    name = None
    supports_parentheses = False

    def initial_state(self):
        raise NotImplementedError

    def append_digit(self, state, token):
        raise NotImplementedError

    def append_operator(self, state, op):
        raise NotImplementedError

    def append_parenthesis(self, state):
        return Transition(state)

    def backspace(self, state):
        raise NotImplementedError

    def clear(self, state):
        return Transition(self.initial_state())

    def evaluate(self, state):
        raise NotImplementedError

    def recall(self, state, entry):
        raise NotImplementedError

    def expression_of(self, state):
        """Text for the secondary line above the display"""
        return ""

    def pending_operator(self, state):
        return None


class ExpressionStrategy(EvaluationStrategy):
    """Build the whole infix expression, evaluate it on '='"""

    name = "expression"
    supports_parentheses = True

    def initial_state(self):
        return ExpressionState()

    @staticmethod
    def _show(expression):
        return expression if expression else "0"

    def append_digit(self, state, token):
        _check_digit(token)

        if state.fresh:
            expression = "0." if token == DECIMAL_POINT else token
        else:
            if token == DECIMAL_POINT and DECIMAL_POINT in _trailing_number(state.expression):
                return Transition(state)
            expression = state.expression + token

        return Transition(ExpressionState(expression, self._show(expression), fresh=False))

    def append_operator(self, state, op):
        op = parser.normalize_operator(op)
        expression = state.expression

        # Only after a digit or a closing parenthesis
        if not expression or not (expression[-1] in DIGITS or expression[-1] == ")"):
            return Transition(state)

        expression += op
        return Transition(ExpressionState(expression, expression, fresh=False))

    def append_parenthesis(self, state):
        expression = state.expression
        opened = expression.count("(")
        closed = expression.count(")")

        if not expression or expression[-1] in parser.OPERATORS or expression[-1] == "(":
            expression += "("
        elif opened > closed:
            expression += ")"
        elif expression[-1] != parser.MULTIPLY:
            expression += parser.MULTIPLY + "("
        else:
            expression += "("

        return Transition(ExpressionState(expression, expression, fresh=False))

    def backspace(self, state):
        if not state.expression:
            return Transition(replace(state, display="0"))
        expression = state.expression[:-1]
        return Transition(replace(state, expression=expression, display=self._show(expression)))

    def evaluate(self, state):
        if not state.expression or state.fresh:
            return Transition(state)

        try:
            value = parser.evaluate(state.expression)
        except parser.ExpressionError as e:
            logger.debug("Could not evaluate %r: %s", state.expression, e)
            record = HistoryEntry(state.expression, ERROR)
            # Keep the expression so it can still be corrected
            return Transition(replace(state, display=ERROR), record)

        result = format_result(value)
        logger.debug("%s = %s", state.expression, result)
        record = HistoryEntry(state.expression, result)
        # Nothing can be appended to the error sentinel
        expression = "" if result == ERROR else result
        return Transition(ExpressionState(expression, result, fresh=True), record)

    def recall(self, state, entry):
        if entry.result == ERROR:
            return Transition(self.initial_state())
        return Transition(ExpressionState(entry.result, entry.result, fresh=True))

    def expression_of(self, state):
        return state.expression


class AccumulatorStrategy(EvaluationStrategy):
    """Apply one pending binary operation at a time"""

    name = "accumulator"

    def initial_state(self):
        return AccumulatorState()

    @staticmethod
    def _format(value):
        return format_result(value, integers_plain=True)

    def append_digit(self, state, token):
        _check_digit(token)

        if state.fresh:
            entry = "0." if token == DECIMAL_POINT else token
        elif token == DECIMAL_POINT:
            if DECIMAL_POINT in state.entry:
                return Transition(state)
            entry = state.entry + token
        elif state.entry == "0":
            entry = token
        else:
            entry = state.entry + token

        return Transition(replace(
            state, entry=entry, display=entry, current=parse_result(entry), fresh=False,
        ))

    def append_operator(self, state, op):
        op = parser.normalize_operator(op)
        record = None

        # 2 + 3 + ... applies the first pair before taking the next operator
        if state.operator is not None and not state.fresh:
            step = self.evaluate(state)
            state, record = step.state, step.record

        state = replace(state, previous=state.current, operator=op, fresh=True)
        return Transition(state, record)

    def backspace(self, state):
        if not state.fresh and len(state.entry) > 1:
            entry = state.entry[:-1]
            return Transition(replace(
                state, entry=entry, display=entry, current=parse_result(entry),
            ))
        return Transition(replace(state, entry="0", display="0", current=0.0, fresh=True))

    def evaluate(self, state):
        if state.operator is None:
            text = self._format(state.current)
            return Transition(replace(state, entry=text, display=text, fresh=True))

        value = parser.apply(state.operator, state.previous, state.current)
        result = self._format(value)
        description = (
            f"{self._format(state.previous)} {state.operator} {self._format(state.current)}"
        )
        logger.debug("%s = %s", description, result)

        state = AccumulatorState(
            previous=0.0,
            operator=None,
            current=value,
            entry=result,
            display=result,
            fresh=True,
        )
        return Transition(state, HistoryEntry(description, result))

    def recall(self, state, entry):
        if entry.result == ERROR:
            return Transition(self.initial_state())
        value = parse_result(entry.result)
        return Transition(AccumulatorState(
            current=value, entry=entry.result, display=entry.result, fresh=True,
        ))

    def expression_of(self, state):
        if state.operator is None:
            return ""
        return f"{self._format(state.previous)} {state.operator}"

    def pending_operator(self, state):
        return state.operator


STRATEGIES = {
    ExpressionStrategy.name: ExpressionStrategy,
    AccumulatorStrategy.name: AccumulatorStrategy,
}


def get_strategy(name):
    """Instantiate a strategy by its configured name"""
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"Unknown calculator mode: {name!r}") from None
