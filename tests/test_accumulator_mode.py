"""Accumulator mode: one pending operation at a time."""

import pytest

from tapcalc.formatting import ERROR
from tapcalc.history import HistoryEntry
from tapcalc.strategies import AccumulatorStrategy


@pytest.fixture
def strategy():
    return AccumulatorStrategy()


def press(strategy, keys, state=None):
    state = state or strategy.initial_state()
    records = []
    for key in keys:
        if key == "=":
            step = strategy.evaluate(state)
        elif key == "()":
            step = strategy.append_parenthesis(state)
        elif key == "<":
            step = strategy.backspace(state)
        elif key == "C":
            step = strategy.clear(state)
        elif key in "+-×÷":
            step = strategy.append_operator(state, key)
        else:
            step = strategy.append_digit(state, key)
        state = step.state
        if step.record is not None:
            records.append(step.record)
    return state, records


class TestDigits:
    def test_number_entry(self, strategy):
        state, _ = press(strategy, ["4", "2"])
        assert state.display == "42"
        assert state.current == 42.0

    def test_leading_zero_replaced(self, strategy):
        state, _ = press(strategy, ["0", "5"])
        assert state.display == "5"

    def test_leading_dot(self, strategy):
        state, _ = press(strategy, [".", "5"])
        assert state.display == "0.5"
        assert state.current == 0.5

    def test_zero_then_dot(self, strategy):
        state, _ = press(strategy, ["0", "."])
        assert state.display == "0."

    def test_second_dot_ignored(self, strategy):
        state, _ = press(strategy, ["1", ".", "2", "."])
        assert state.display == "1.2"

    def test_parenthesis_unsupported(self, strategy):
        state, _ = press(strategy, ["4"])
        assert strategy.append_parenthesis(state).state == state
        assert not strategy.supports_parentheses


class TestOperations:
    def test_simple(self, strategy):
        state, records = press(strategy, ["7", "×", "6", "="])
        assert state.display == "42"
        assert records == [HistoryEntry("7 × 6", "42")]

    def test_operator_keeps_display(self, strategy):
        state, _ = press(strategy, ["7", "×"])
        assert state.display == "7"
        assert state.operator == "×"
        assert strategy.expression_of(state) == "7 ×"
        assert strategy.pending_operator(state) == "×"

    def test_next_digit_starts_new_number(self, strategy):
        state, _ = press(strategy, ["7", "×", "6"])
        assert state.display == "6"
        assert state.previous == 7.0

    def test_chaining(self, strategy):
        state, records = press(strategy, ["2", "+", "3", "+", "4", "="])
        assert records == [
            HistoryEntry("2 + 3", "5"),
            HistoryEntry("5 + 4", "9"),
        ]
        assert state.display == "9"

    def test_chaining_shows_intermediate(self, strategy):
        state, _ = press(strategy, ["2", "+", "3", "+"])
        assert state.display == "5"
        assert state.previous == 5.0
        assert state.operator == "+"

    def test_changing_operator(self, strategy):
        state, records = press(strategy, ["8", "+", "-", "3", "="])
        assert records == [HistoryEntry("8 - 3", "5")]

    def test_decimal_result(self, strategy):
        state, _ = press(strategy, ["1", "÷", "4", "="])
        assert state.display == "0.25"

    def test_equals_without_operator(self, strategy):
        state, records = press(strategy, ["5", ".", "="])
        assert state.display == "5"
        assert state.current == 5.0
        assert records == []

    def test_repeated_equals(self, strategy):
        state, records = press(strategy, ["2", "×", "3", "=", "=", "="])
        assert state.display == "6"
        assert len(records) == 1

    def test_operator_after_result(self, strategy):
        state, records = press(strategy, ["2", "×", "3", "=", "+", "1", "="])
        assert state.display == "7"
        assert records[-1] == HistoryEntry("6 + 1", "7")

    def test_digit_after_result_starts_over(self, strategy):
        state, _ = press(strategy, ["2", "×", "3", "=", "9"])
        assert state.display == "9"
        assert state.operator is None

    def test_division_by_zero(self, strategy):
        state, records = press(strategy, ["5", "÷", "0", "="])
        assert state.display == ERROR
        assert records == [HistoryEntry("5 ÷ 0", ERROR)]

    def test_usable_after_error(self, strategy):
        state, _ = press(strategy, ["5", "÷", "0", "=", "3", "+", "1", "="])
        assert state.display == "4"


class TestBackspace:
    def test_drops_last_digit(self, strategy):
        state, _ = press(strategy, ["1", "2", "3", "<"])
        assert state.display == "12"
        assert state.current == 12.0

    def test_single_digit_resets(self, strategy):
        state, _ = press(strategy, ["7", "<"])
        assert state.display == "0"
        assert state.fresh

    def test_on_zero_does_not_underflow(self, strategy):
        state, _ = press(strategy, ["<", "<"])
        assert state.display == "0"
        assert state.current == 0.0

    def test_on_result_resets(self, strategy):
        state, _ = press(strategy, ["1", "2", "+", "3", "=", "<"])
        assert state.display == "0"


class TestClearAndRecall:
    def test_clear(self, strategy):
        state, _ = press(strategy, ["1", "+", "2", "C"])
        assert state == strategy.initial_state()

    def test_recall_drops_pending_operator(self, strategy):
        state, _ = press(strategy, ["1", "+"])
        state = strategy.recall(state, HistoryEntry("2 × 3", "6")).state
        assert state.operator is None
        assert state.current == 6.0
        assert state.display == "6"

        state, _ = press(strategy, ["="], state)
        assert state.display == "6"

    def test_recall_then_operator(self, strategy):
        state = strategy.recall(strategy.initial_state(), HistoryEntry("1 ÷ 4", "0.25")).state
        state, records = press(strategy, ["×", "4", "="], state)
        assert records == [HistoryEntry("0.25 × 4", "1")]

    def test_recall_error(self, strategy):
        state, _ = press(strategy, ["9"])
        state = strategy.recall(state, HistoryEntry("1 ÷ 0", ERROR)).state
        assert state == strategy.initial_state()
