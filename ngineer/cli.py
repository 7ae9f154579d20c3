"""Command line entry point: solve a nodal analysis model stored as JSON."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence
from pathlib import Path

from ngineer.model import NodalAnalysisModel
from ngineer.study import NodalAnalysisStudyBuilder

_PREFIX = "[neapolitan]"
_DEFAULT_PRECISION = 0.0001
_DEFAULT_ITERATIONS = 100


class _CliError(Exception):
    def __init__(self, *lines: str) -> None:
        super().__init__(*lines)
        self.lines = lines


def _parse_float(text: str) -> float:
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid float literal: {text!r}")
    return float(text)


def _parse_count(text: str) -> int:
    if not re.fullmatch(r"\+?[0-9]+", text):
        raise ValueError(f"invalid digit found in string: {text!r}")
    return int(text)


def _option_value(args: Sequence[str], index: int, what: str) -> str:
    try:
        return args[index + 1]
    except IndexError:
        raise _CliError(
            f"failed to parse {what} argument!", f"missing value for {args[index]}"
        ) from None


def _run(args: list[str]) -> None:
    if not args:
        raise _CliError("no model file was given!", "usage: neapolitan <MODEL.json> [OPTIONS]")
    model_path = args[0]

    try:
        model_json = Path(model_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise _CliError("could not find the specified filepath!", str(exc)) from None

    precision = _DEFAULT_PRECISION
    iteration_limit = _DEFAULT_ITERATIONS

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--precision", "-p"):
            value = _option_value(args, i, "precision")
            try:
                precision = _parse_float(value)
            except ValueError as exc:
                raise _CliError("failed to parse precision argument!", str(exc)) from None
            print(f"{_PREFIX}......... solver precision is: {precision}")
            i += 1
        elif arg in ("--iterations", "-i"):
            value = _option_value(args, i, "iteration limit")
            try:
                iteration_limit = _parse_count(value)
            except ValueError as exc:
                raise _CliError(
                    "failed to parse iteration limit argument!", str(exc)
                ) from None
            print(f"{_PREFIX}......... solver iteration limit is: {iteration_limit}")
            i += 1
        i += 1

    try:
        model = NodalAnalysisModel.from_json(model_json)
    except ValueError as exc:
        raise _CliError("failed to read model from json file!", str(exc)) from None

    try:
        solution = NodalAnalysisStudyBuilder.from_model_with_default_config(
            model
        ).run_study(precision, iteration_limit)
    except (ArithmeticError, LookupError, RuntimeError, ValueError) as exc:
        raise _CliError("failed to solve the given model!", str(exc)) from None

    solution_json = solution.to_json()

    solution_file = model_path.replace(".json", ".soln.json")
    try:
        Path(solution_file).write_text(solution_json, encoding="utf-8")
    except OSError as exc:
        raise _CliError(
            "neapolitan could not write to the output file!", str(exc)
        ) from None


def main(argv: Sequence[str] | None = None) -> int:
    """Solve the model file named first in ``argv``; returns the exit status.

    The solution is written next to the model, with ``.json`` replaced by
    ``.soln.json``.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        _run(args)
    except _CliError as exc:
        for line in exc.lines:
            print(f"{_PREFIX}.....ERR: {line}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())