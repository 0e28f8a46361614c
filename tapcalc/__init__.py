"""
TapCalc - calculator core and PyQt6 front end.
"""

from tapcalc.formatting import ERROR, format_result
from tapcalc.history import HistoryEntry, HistoryLog
from tapcalc.parser import ExpressionError, evaluate
from tapcalc.session import CalculatorSession
from tapcalc.strategies import (
    AccumulatorStrategy, EvaluationStrategy, ExpressionStrategy, get_strategy
)

__version__ = "1.0.0"

__all__ = [
    "ERROR", "format_result",
    "HistoryEntry", "HistoryLog",
    "ExpressionError", "evaluate",
    "CalculatorSession",
    "EvaluationStrategy", "ExpressionStrategy", "AccumulatorStrategy", "get_strategy",
]
