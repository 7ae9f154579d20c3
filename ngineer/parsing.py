"""Preprocessing of plain-text equation systems before they are solved."""

from __future__ import annotations

import re

from ngineer.errors import ConditionFormatError

LEGAL_VAR_PATTERN = r"[a-z][a-z0-9_]*"
LEGAL_NUM_PATTERN = r"-? ?[0-9]+\.?[0-9]*"

_COMPARATORS = ("==", "<=", ">=", "<", ">", "!=")


def _nexsys_regex(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern`` with ``@N`` and ``@V`` standing for numbers and names."""
    return re.compile(
        pattern.replace("@N", LEGAL_NUM_PATTERN).replace("@V", LEGAL_VAR_PATTERN)
    )


_GUESS_RE = _nexsys_regex(r"(?i)guess +(@N) +for +(@V)")
_DOMAIN_RE = _nexsys_regex(r"(?i)keep +(@V) +on +\[ *(@N), *(@N) *\]")
_COMMENT_RE = _nexsys_regex(r"//[^\n]*")
_CONDITIONAL_RE = _nexsys_regex(
    "(?m)^[ \\t]*if [^<>=]+[<>=]{1,2}[^<>=]+:$\n"
    "^.*$\n"
    "^[ \\t]*else:$\n"
    "^.*$\n"
    "^[ \\t]*end"
)


def _parse_number(literal: str, what: str) -> float:
    try:
        return float(literal)
    except ValueError:
        raise ValueError(f"failed to parse number {literal!r} in {what}") from None


def guess_values(text: str) -> tuple[str, dict[str, float]]:
    """Strip ``guess <number> for <name>`` declarations from ``text``.

    Returns the remaining text and the guesses by variable name.
    """
    remaining = text
    guesses: dict[str, float] = {}
    for match in _GUESS_RE.finditer(text):
        remaining = remaining.replace(match.group(0), "")
        guesses[match.group(2)] = _parse_number(match.group(1), "guess declaration")
    return remaining, guesses


def domains(text: str) -> tuple[str, dict[str, tuple[float, float]]]:
    """Strip ``keep <name> on [<low>, <high>]`` declarations from ``text``.

    Returns the remaining text and the bounds by variable name.
    """
    remaining = text
    bounds: dict[str, tuple[float, float]] = {}
    for match in _DOMAIN_RE.finditer(text):
        remaining = remaining.replace(match.group(0), "")
        bounds[match.group(1)] = (
            _parse_number(match.group(2), "domain declaration"),
            _parse_number(match.group(3), "domain declaration"),
        )
    return remaining, bounds


def comments(text: str) -> str:
    """Remove ``//`` line comments from ``text``."""
    return _COMMENT_RE.sub("", text)


def _format_conditional(cndl: str) -> str:
    """Turn an ``if``/``else``/``end`` block into an ``if(...) = 0`` equation."""
    args = (
        cndl.replace("if ", "if(")
        .replace(" ", "")
        .replace("\n", "")
        .replace(":", ",")
        .replace("else", "")
        .replace("end", ")")
    )

    if not any(op in args for op in _COMPARATORS):
        raise ConditionFormatError(ConditionFormatError.Kind.CONDITIONAL_SYNTAX)

    args = args.replace("==", ",1.0,").replace("<=", ",2.0,").replace(">=", ",3.0,")
    if "<" in args:
        if "=<" in args:
            raise ConditionFormatError(ConditionFormatError.Kind.COMPARATOR)
        args = args.replace("<", ",4.0,")
    if ">" in args:
        if "=>" in args:
            raise ConditionFormatError(ConditionFormatError.Kind.COMPARATOR)
        args = args.replace(">", ",5.0,")
    args = args.replace("!=", ",6.0,")

    return args + " = 0"


def _as_residual(row: str) -> str:
    if "=" not in row:
        return row
    lhs, rhs = row.split("=")[:2]
    if rhs.replace(" ", "") == "0":
        return lhs
    return f"{lhs} - ({rhs})"


def conditionals(text: str) -> str:
    """Replace every ``if``/``else``/``end`` block in ``text`` with an equation.

    Nested blocks are handled from the innermost outwards. Raises
    ``ConditionFormatError`` for a block with no valid comparison operator.
    """
    output = text
    while True:
        found = [match.group(0) for match in _CONDITIONAL_RE.finditer(output)]
        if not found:
            return output
        for raw in found:
            rows = raw.split("\n")
            for r in (1, 3):
                rows[r] = _as_residual(rows[r])
            output = output.replace(raw, _format_conditional("\n".join(rows)))