"""Leaf expression engine: glyph tokenizer, validator, sorter and evaluator.

An expression is a run of block glyphs. Numerals are written in binary with
``▀`` (one) and ``▄`` (zero); the first glyph of a numeral is its sign
(``▀`` negative), the rest its magnitude, most significant bit first. Every
other recognised glyph is a single operator or parenthesis.

Evaluation goes tokenize -> validate -> sort (infix to postfix) -> execute
on an operand stack. A ``Molecule`` caches its validation and postfix form,
so running it again against a changed memory re-parses nothing.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Dict, List, Optional, Sequence, TextIO, Tuple

from box_domain import I128, IntDomain
from box_errors import (
    InvalidCharacter,
    MalformedExpression,
    MissingLeftParenthesis,
    MissingRightParenthesis,
)
from box_math import divide, inv_modulo, modulo


logger = logging.getLogger(f"boxscript.{__name__}")

ONE = "▀"
ZERO = "▄"
REPLACEMENT = "\ufffd"
MAX_CODE_POINT = 0x10FFFF


class Kind(Enum):
    DATA = "data"
    GREATER = "greater"
    LESS = "less"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    ASSIGN = "assign"
    NOT = "not"
    MEMORY = "memory"
    OUTPUT = "output"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"
    INVERSE_MODULO = "inverse_modulo"
    LEFT_SHIFT = "left_shift"
    RIGHT_SHIFT = "right_shift"
    AND = "and"
    OR = "or"
    XOR = "xor"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"


@dataclass(frozen=True)
class Atom:
    kind: Kind
    value: int = 0

    def __repr__(self) -> str:
        if self.kind is Kind.DATA:
            return f"Data({self.value})"
        return self.kind.name.title().replace("_", "")


def data(value: int) -> Atom:
    return Atom(Kind.DATA, value)


GLYPHS: Dict[str, Kind] = {
    "▷": Kind.GREATER,
    "◁": Kind.LESS,
    "▣": Kind.EQUAL,
    "▢": Kind.NOT_EQUAL,
    "◈": Kind.ASSIGN,
    "▔": Kind.NOT,
    "◇": Kind.MEMORY,
    "▭": Kind.OUTPUT,
    "▐": Kind.ADD,
    "▌": Kind.SUBTRACT,
    "▚": Kind.MULTIPLY,
    "▞": Kind.DIVIDE,
    "▙": Kind.MODULO,
    "▟": Kind.INVERSE_MODULO,
    "◀": Kind.LEFT_SHIFT,
    "▶": Kind.RIGHT_SHIFT,
    "▓": Kind.AND,
    "░": Kind.OR,
    "▒": Kind.XOR,
    "▛": Kind.LEFT_PAREN,
    "▜": Kind.RIGHT_PAREN,
}
GLYPH_OF: Dict[Kind, str] = {kind: glyph for glyph, kind in GLYPHS.items()}

PRECEDENCE: Dict[Kind, int] = {
    Kind.OUTPUT: 1,
    Kind.ASSIGN: 1,
    Kind.GREATER: 2,
    Kind.LESS: 2,
    Kind.EQUAL: 2,
    Kind.NOT_EQUAL: 2,
    Kind.OR: 3,
    Kind.XOR: 4,
    Kind.AND: 5,
    Kind.LEFT_SHIFT: 6,
    Kind.RIGHT_SHIFT: 6,
    Kind.ADD: 7,
    Kind.SUBTRACT: 7,
    Kind.MULTIPLY: 8,
    Kind.DIVIDE: 8,
    Kind.MODULO: 8,
    Kind.INVERSE_MODULO: 8,
    Kind.MEMORY: 9,
    Kind.NOT: 9,
}

UNARY_KINDS = frozenset({Kind.NOT, Kind.MEMORY, Kind.OUTPUT})
PARENS = frozenset({Kind.LEFT_PAREN, Kind.RIGHT_PAREN})

NUMBER = "number"
UNARY = "unary"
BINARY = "binary"


def precedence(atom: Atom) -> int:
    return PRECEDENCE.get(atom.kind, 0)


def classify(atom: Atom) -> Optional[str]:
    if atom.kind is Kind.DATA:
        return NUMBER
    if atom.kind in UNARY_KINDS:
        return UNARY
    if atom.kind in PARENS:
        return None
    return BINARY


# ---------- Tokenizing ----------


def parse_numeral(run: str) -> int:
    magnitude = 0
    for ch in run[1:]:
        magnitude = (magnitude << 1) | (ch == ONE)
    return -magnitude if run[0] == ONE else magnitude


def tokenize(expr: str, *, domain: Optional[IntDomain] = None) -> List[Atom]:
    if domain is None:
        domain = I128
    atoms = []
    i = 0
    while i < len(expr):
        ch = expr[i]
        if ch.isspace():
            i += 1
            continue
        if ch in (ONE, ZERO):
            j = i
            while j < len(expr) and expr[j] in (ONE, ZERO):
                j += 1
            atoms.append(data(domain.check(parse_numeral(expr[i:j]), "numeral")))
            i = j
            continue
        kind = GLYPHS.get(ch)
        if kind is None:
            raise InvalidCharacter(f"invalid character {ch!r} at {i}")
        atoms.append(Atom(kind))
        i += 1
    return atoms


def format_numeral(value: int) -> str:
    sign = ONE if value < 0 else ZERO
    if value == 0:
        return sign
    bits = format(abs(value), "b")
    return sign + bits.replace("1", ONE).replace("0", ZERO)


def untokenize(atoms: Sequence[Atom]) -> str:
    """Render atoms as glyphs, space separated so adjacent numerals survive."""
    parts = []
    for atom in atoms:
        if atom.kind is Kind.DATA:
            parts.append(format_numeral(atom.value))
        else:
            parts.append(GLYPH_OF[atom.kind])
    return " ".join(parts)


# ---------- Validation ----------


def validate(atoms: Sequence[Atom]) -> None:
    classes = [c for c in map(classify, atoms) if c is not None]
    n = len(classes)
    if n == 0:
        return
    if n == 1:
        if classes[0] != NUMBER:
            raise MalformedExpression(f"lone {classes[0]} operator")
        return
    if n == 2:
        if classes != [UNARY, NUMBER]:
            raise MalformedExpression(f"{classes[0]} followed by {classes[1]}")
        return

    first, second = classes[0], classes[1]
    if not (
        (first == NUMBER and second == BINARY)
        or (first == UNARY and second != BINARY)
    ):
        raise MalformedExpression(f"expression starts with {first} then {second}")
    if not (classes[-1] == NUMBER and classes[-2] in (BINARY, UNARY)):
        raise MalformedExpression(
            f"expression ends with {classes[-2]} then {classes[-1]}"
        )
    for i in range(1, n - 1):
        prev, cur, nxt = classes[i - 1], classes[i], classes[i + 1]
        if cur == NUMBER and NUMBER in (prev, nxt):
            raise MalformedExpression(f"adjacent numbers at token {i}")
        if cur == UNARY and nxt == BINARY:
            raise MalformedExpression(f"unary operator at token {i} has no operand")
        if cur == BINARY and (prev != NUMBER or nxt == BINARY):
            raise MalformedExpression(f"binary operator at token {i} lacks an operand")


# ---------- Sorting ----------


def to_postfix(atoms: Sequence[Atom]) -> List[Atom]:
    output: List[Atom] = []
    stack: List[Atom] = []
    for atom in atoms:
        kind = atom.kind
        if kind is Kind.DATA:
            output.append(atom)
        elif kind is Kind.LEFT_PAREN or kind in UNARY_KINDS:
            # prefix operators have no pending left operand to flush
            stack.append(atom)
        elif kind is Kind.RIGHT_PAREN:
            while stack and stack[-1].kind is not Kind.LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                raise MissingLeftParenthesis("unmatched right parenthesis")
            stack.pop()
        else:
            prec = precedence(atom)
            while stack:
                top = precedence(stack[-1])
                # assignment chains right to left
                if top > prec or (top == prec and kind is not Kind.ASSIGN):
                    output.append(stack.pop())
                else:
                    break
            stack.append(atom)
    while stack:
        atom = stack.pop()
        if atom.kind is Kind.LEFT_PAREN:
            raise MissingRightParenthesis("unmatched left parenthesis")
        output.append(atom)
    return output


# ---------- Evaluation ----------


def to_char(value: int) -> str:
    if 0 <= value <= MAX_CODE_POINT and not 0xD800 <= value <= 0xDFFF:
        return chr(value)
    return REPLACEMENT


def apply_binary(kind: Kind, a: int, b: int, domain: IntDomain) -> int:
    if kind is Kind.GREATER:
        return int(a > b)
    if kind is Kind.LESS:
        return int(a < b)
    if kind is Kind.EQUAL:
        return int(a == b)
    if kind is Kind.NOT_EQUAL:
        return int(a != b)
    if kind is Kind.ASSIGN:
        return b
    if kind is Kind.ADD:
        return domain.add(a, b)
    if kind is Kind.SUBTRACT:
        return domain.sub(a, b)
    if kind is Kind.MULTIPLY:
        return domain.mul(a, b)
    if kind is Kind.DIVIDE:
        return divide(a, b, domain)
    if kind is Kind.MODULO:
        return modulo(a, b)
    if kind is Kind.INVERSE_MODULO:
        return inv_modulo(a, b)
    if kind is Kind.LEFT_SHIFT:
        return domain.shift_left(a, b)
    if kind is Kind.RIGHT_SHIFT:
        return domain.shift_right(a, b)
    if kind is Kind.AND:
        return a & b
    if kind is Kind.OR:
        return a | b
    if kind is Kind.XOR:
        return a ^ b
    raise MalformedExpression(f"{kind.name} is not a binary operator")


def execute(
    postfix: Sequence[Atom],
    memory: Dict[int, int],
    out: TextIO,
    domain: IntDomain = I128,
) -> int:
    stack: List[int] = []

    def pop() -> int:
        if not stack:
            raise MalformedExpression("operand stack underflow")
        return stack.pop()

    for atom in postfix:
        kind = atom.kind
        if kind is Kind.DATA:
            stack.append(atom.value)
        elif kind is Kind.MEMORY:
            stack.append(memory.get(pop(), 0))
        elif kind is Kind.NOT:
            stack.append(domain.complement(pop()))
        elif kind is Kind.OUTPUT:
            a = pop()
            out.write(to_char(a))
            stack.append(a)
        else:
            b = pop()
            a = pop()
            if kind is Kind.ASSIGN:
                memory[a] = b
            stack.append(apply_binary(kind, a, b, domain))

    if not stack:
        return 0
    if len(stack) > 1:
        raise MalformedExpression(f"{len(stack)} values left on the stack")
    return stack[0]


@dataclass
class Molecule:
    children: Tuple[Atom, ...]
    domain: IntDomain = field(default=I128, compare=False)

    def __post_init__(self):
        self.children = tuple(self.children)

    @classmethod
    def parse(cls, expr: str, *, domain: IntDomain = I128) -> Molecule:
        return cls(tokenize(expr, domain=domain), domain)

    # cached_property stores nothing when the getter raises, so a failed
    # check is simply repeated on the next call

    @cached_property
    def valid(self) -> bool:
        validate(self.children)
        return True

    @cached_property
    def postfix(self) -> Tuple[Atom, ...]:
        output = tuple(to_postfix(self.children))
        logger.debug("sorted %d atoms into %d postfix atoms", len(self.children), len(output))
        return output

    def validate(self) -> bool:
        return self.valid

    def sort(self) -> Tuple[Atom, ...]:
        return self.postfix

    def run(
        self,
        memory: Dict[int, int],
        out: Optional[io.StringIO] = None,
    ) -> Tuple[int, str]:
        if out is None:
            out = io.StringIO()
        self.validate()
        result = execute(self.sort(), memory, out, self.domain)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s -> %d", untokenize(self.children), result)
        return result, out.getvalue()


def evaluate(
    expr: str,
    memory: Optional[Dict[int, int]] = None,
    out: Optional[io.StringIO] = None,
    *,
    domain: IntDomain = I128,
) -> Tuple[int, str]:
    if memory is None:
        memory = {}
    return Molecule.parse(expr, domain=domain).run(memory, out)
