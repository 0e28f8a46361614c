"""
Infix expression evaluation.

A small recursive-descent parser for the four arithmetic operators and
parentheses. The display symbols (× and ÷) and their ASCII spellings are
both accepted.

    expression := term (("+" | "-") term)*
    term       := unary (("×" | "÷") unary)*
    unary      := ("+" | "-") unary | primary
    primary    := NUMBER | "(" expression ")"
"""

import math
import operator
import re

ADD = "+"
SUBTRACT = "-"
MULTIPLY = "×"
DIVIDE = "÷"

OPERATORS = (ADD, SUBTRACT, MULTIPLY, DIVIDE)

# Alternative spellings accepted on input
ALIASES = {"*": MULTIPLY, "/": DIVIDE, "−": SUBTRACT}

_NUMBER = re.compile(r"\d+\.?\d*|\.\d+")


class ExpressionError(ValueError):
    """Raised for input that is not a well-formed arithmetic expression"""

    def __init__(self, message, position=None):
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)
        self.position = position


def divide(a, b):
    """Divide, yielding inf/-inf (or NaN for 0/0) instead of raising"""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


BINARY = {
    ADD: operator.add,
    SUBTRACT: operator.sub,
    MULTIPLY: operator.mul,
    DIVIDE: divide,
}


def normalize_operator(symbol):
    """Map an operator spelling to its display symbol"""
    symbol = ALIASES.get(symbol, symbol)
    if symbol not in BINARY:
        raise ValueError(f"Unknown operator: {symbol!r}")
    return symbol


def apply(op, a, b):
    """Apply a binary operator given by symbol"""
    return BINARY[normalize_operator(op)](a, b)


def tokenize(text):
    """Split an expression into (position, token) pairs"""
    tokens = []
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char.isspace():
            pos += 1
            continue

        match = _NUMBER.match(text, pos)
        if match:
            tokens.append((pos, match.group()))
            pos = match.end()
            continue

        char = ALIASES.get(char, char)
        if char in BINARY or char in "()":
            tokens.append((pos, char))
            pos += 1
            continue

        raise ExpressionError(f"Unexpected character {text[pos]!r}", pos)

    return tokens


class _Parser:
    def __init__(self, text):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0

    def peek(self):
        if self.index < len(self.tokens):
            return self.tokens[self.index][1]
        return None

    def position(self):
        if self.index < len(self.tokens):
            return self.tokens[self.index][0]
        return len(self.text)

    def take(self):
        token = self.tokens[self.index][1]
        self.index += 1
        return token

    def parse(self):
        if not self.tokens:
            raise ExpressionError("Empty expression")
        value = self.expression()
        if self.peek() is not None:
            raise ExpressionError(f"Unexpected {self.peek()!r}", self.position())
        return value

    def expression(self):
        value = self.term()
        while self.peek() in (ADD, SUBTRACT):
            op = self.take()
            value = BINARY[op](value, self.term())
        return value

    def term(self):
        value = self.unary()
        while self.peek() in (MULTIPLY, DIVIDE):
            op = self.take()
            value = BINARY[op](value, self.unary())
        return value

    def unary(self):
        if self.peek() == SUBTRACT:
            self.take()
            return -self.unary()
        if self.peek() == ADD:
            self.take()
            return self.unary()
        return self.primary()

    def primary(self):
        token = self.peek()
        if token is None:
            raise ExpressionError("Unexpected end of expression", self.position())

        if token == "(":
            start = self.position()
            self.take()
            if self.peek() == ")":
                raise ExpressionError("Empty parentheses", start)
            value = self.expression()
            if self.peek() != ")":
                raise ExpressionError("Unbalanced parenthesis", start)
            self.take()
            return value

        if token in BINARY or token == ")":
            raise ExpressionError(f"Unexpected {token!r}", self.position())

        self.take()
        return float(token)


def evaluate(text):
    """Evaluate an infix expression to a float

    Raises ExpressionError for malformed input. Division by zero is not an
    error here; it gives a non-finite result.
    """
    return _Parser(text).parse()
