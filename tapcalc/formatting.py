"""
Result formatting for the display and the history panel.
"""

import math

ERROR = "Error"
DECIMALS = 8


def format_result(value, integers_plain=False):
    """Format a float for display, or the error sentinel if it is not finite"""
    if math.isnan(value) or math.isinf(value):
        return ERROR

    if integers_plain and float(value).is_integer():
        return str(int(value))

    text = f"{value:.{DECIMALS}f}".rstrip("0").rstrip(".")

    # -0.000000001 rounds to "-0"
    if text == "-0":
        return "0"
    return text


def parse_result(text):
    """Turn a displayed result back into a number; the error sentinel reads as 0"""
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0
