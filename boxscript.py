#!/usr/bin/env python3
"""BoxScript driver: show a program grid and evaluate leaf expressions.

Examples:
  python3 boxscript.py program.bs
  python3 boxscript.py program.bs --eval "▄▀ ◈ ▄▀▀▄▄▄▄" --eval "▭ ◇ ▄▀"
  python3 boxscript.py program.bs --memory 0=48 --eval "▭◇▀" --postfix
"""

from __future__ import annotations

import argparse
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from box_domain import DEFAULT_BITS, WIDTHS, IntDomain
from box_errors import BoxScriptError
from box_expr import Molecule, untokenize
from box_grid import NULL, Grid, chars
from box_logging import setup_logging


logger = logging.getLogger(f"boxscript.{__name__}")


def load_program(path: str) -> str:
    if not Path(path).is_file():
        raise SystemExit(f"no file exists at `{path}`")
    return Path(path).read_text(encoding="utf-8")


def parse_memory(items: Sequence[str]) -> Dict[int, int]:
    memory = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep:
            raise SystemExit(f"memory cell must be KEY=VALUE, got {item!r}")
        try:
            memory[int(key)] = int(value)
        except ValueError:
            raise SystemExit(f"memory cell must hold integers, got {item!r}") from None
    return memory


def grid_to_str(grid: Grid) -> str:
    return "\n".join("".join(row).replace(NULL, " ") for row in grid)


def run_expressions(
    exprs: Sequence[str],
    memory: Dict[int, int],
    domain: IntDomain,
    *,
    show_postfix: bool = False,
) -> List[str]:
    lines = []
    out = io.StringIO()
    for expr in exprs:
        molecule = Molecule.parse(expr, domain=domain)
        result, _ = molecule.run(memory, out)
        if show_postfix:
            lines.append(f"postfix: {untokenize(molecule.sort())}")
        lines.append(f"result: {result}")
    lines.append(f"output: {out.getvalue()}")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("program")
    parser.add_argument(
        "--eval",
        dest="exprs",
        action="append",
        default=[],
        metavar="EXPR",
        help="leaf expression to evaluate (repeatable, shares memory)",
    )
    parser.add_argument(
        "--memory",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="initial memory cell (repeatable)",
    )
    parser.add_argument("--bits", type=int, choices=WIDTHS, default=DEFAULT_BITS)
    parser.add_argument(
        "--postfix",
        action="store_true",
        help="print the sorted form of each expression",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    parser.add_argument("--log-file", default=None)
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level), args.log_file)

    text = load_program(args.program)
    grid = chars(text)
    logger.info("loaded %s: %d rows", args.program, len(grid))
    print(grid_to_str(grid))

    if not args.exprs:
        return
    memory = parse_memory(args.memory)
    try:
        lines = run_expressions(
            args.exprs,
            memory,
            IntDomain(args.bits),
            show_postfix=args.postfix,
        )
    except BoxScriptError as exc:
        raise SystemExit(f"{type(exc).__name__}: {exc}") from None
    for line in lines:
        print(line)


if __name__ == "__main__":
    main()
