"""Rectangular character grid of a BoxScript source file."""

from __future__ import annotations

from typing import Dict, List, Union

from box_relation import Loc


NULL = "\0"

Grid = List[List[str]]


def chars(source: str) -> Grid:
    # only "\n" ends a row; other control characters stay in the cell
    lines = source.split("\n")
    last = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if last:
        lines.append(last)
    if not lines:
        return []
    width = max(len(line) for line in lines)
    return [list(line.ljust(width, NULL)) for line in lines]


def cell(grid: Grid, x: int, y: int) -> str:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return NULL


def neighboring(source: Union[str, Grid], loc: Loc) -> Dict[str, str]:
    """Characters north, south, east and west of ``loc``.

    ``source`` is either raw text or a grid already built by ``chars``.
    ``loc.x`` is the column and ``loc.y`` the row; cells off the grid read
    as NUL.
    """
    grid = chars(source) if isinstance(source, str) else source
    x, y = loc.x, loc.y
    return {
        "N": cell(grid, x, y - 1),
        "S": cell(grid, x, y + 1),
        "E": cell(grid, x + 1, y),
        "W": cell(grid, x - 1, y),
    }
