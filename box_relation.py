"""Geometric relations between the rectangular boxes of a program grid.

Containment gives the nesting hierarchy; row extents give execution order.
Only rows matter for ordering: a box that ends above another runs before
it, and boxes whose row ranges overlap carry no implied order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from box_errors import InvalidBounds


class Genus(Enum):
    LOOP = "loop"
    CONDITION = "condition"
    EXECUTION = "execution"
    NOOP = "noop"  # comment


class Relation(Enum):
    PARENT = "parent"
    CHILD = "child"
    OTHER = "other"


class Ordering(Enum):
    BEFORE = "before"
    AFTER = "after"
    SIMULTANEOUS = "simultaneous"


@dataclass(frozen=True)
class Loc:
    x: int
    y: int


@dataclass(frozen=True)
class Box:
    start: Loc
    end: Loc
    genus: Genus = Genus.EXECUTION

    def __post_init__(self):
        if self.start.x > self.end.x or self.start.y > self.end.y:
            raise InvalidBounds(
                f"box start ({self.start.x}, {self.start.y}) is past "
                f"end ({self.end.x}, {self.end.y})"
            )

    @property
    def width(self) -> int:
        return self.end.x - self.start.x + 1

    @property
    def height(self) -> int:
        return self.end.y - self.start.y + 1

    def inside(self, other: Box) -> bool:
        return (
            self.start.x >= other.start.x
            and self.end.x <= other.end.x
            and self.start.y >= other.start.y
            and self.end.y <= other.end.y
        )

    def contains(self, other: Box) -> bool:
        return other.inside(self)


def relationship(a: Box, b: Box) -> Relation:
    # identical rectangles satisfy both containments and report CHILD
    if a.inside(b):
        return Relation.CHILD
    if a.contains(b):
        return Relation.PARENT
    return Relation.OTHER


def before(a: Box, b: Box) -> bool:
    return a.end.y < b.start.y


def after(a: Box, b: Box) -> bool:
    return a.start.y > b.end.y


def simultaneous(a: Box, b: Box) -> bool:
    return a.end.y >= b.start.y and a.start.y <= b.end.y


def order(a: Box, b: Box) -> Ordering:
    if before(a, b):
        return Ordering.BEFORE
    if after(a, b):
        return Ordering.AFTER
    return Ordering.SIMULTANEOUS


# ---------- Hierarchy ----------


def enclosing(box: Box, boxes: Iterable[Box]) -> Optional[Box]:
    """Return the smallest box in ``boxes`` that strictly contains ``box``.

    Boxes with the same rectangle as ``box`` are never its parent. Ties in
    area keep the first candidate seen.
    """
    best = None
    for other in boxes:
        if other is box or not other.contains(box):
            continue
        if (other.start, other.end) == (box.start, box.end):
            continue
        if best is None or other.width * other.height < best.width * best.height:
            best = other
    return best


def siblings(a: Box, b: Box, boxes: Iterable[Box]) -> bool:
    """True when two distinct, non-nested boxes share the same parent."""
    if a is b or relationship(a, b) is not Relation.OTHER:
        return False
    boxes = list(boxes)
    return enclosing(a, boxes) == enclosing(b, boxes)
