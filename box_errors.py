"""Failure conditions raised by the BoxScript core."""

from __future__ import annotations


class BoxScriptError(RuntimeError):
    pass


class InvalidBounds(BoxScriptError, ValueError):
    pass


# ---------- Parsing ----------


class ParseError(BoxScriptError):
    pass


class InvalidCharacter(ParseError):
    pass


class MalformedExpression(ParseError):
    pass


class MissingLeftParenthesis(ParseError):
    pass


class MissingRightParenthesis(ParseError):
    pass


# ---------- Evaluation ----------


class EvalError(BoxScriptError):
    pass


class DivisionByZero(EvalError):
    pass


class InvalidModulus(EvalError):
    pass


class NotInvertible(EvalError):
    pass


class NegativeShiftAmount(EvalError):
    pass


class ArithmeticOverflow(EvalError):
    pass
