"""Compile text with embedded ``{{ expr }}`` actions into a single expression."""

import re
from typing import List, Optional

from minicomponents.compiler.escape import quote_string

OPEN_DELIM = "{{"
CLOSE_DELIM = "}}"
TRIM_LEFT = "- "
TRIM_RIGHT = "-"
COMMENT_PREFIX = "/*"
ARGS_SHORTHAND = "$@"
ARGS_PATH = "$.Args."

# Actions that open, continue or close a block. They cannot be evaluated as
# values, so text containing them has to become a template of its own.
CONTROL_KEYWORDS = frozenset(
    {
        "if",
        "else",
        "range",
        "break",
        "continue",
        "with",
        "end",
        "template",
        "block",
        "define",
    }
)

_ASSIGNMENT_RE = re.compile(r":=|\$\w*\s*=")
_BARE_PATH_RE = re.compile(r"^[A-Za-z0-9_.]+$")


def expand_args_shorthand(text: str) -> str:
    """Expand the ``$@name`` shorthand to ``$.Args.name``."""
    return text.replace(ARGS_SHORTHAND, ARGS_PATH)


def is_comment(expr: str) -> bool:
    return expr.startswith(COMMENT_PREFIX)


def is_control_action(expr: str) -> bool:
    """Return True if ``expr`` cannot be used as a value inside ``print``."""
    if _ASSIGNMENT_RE.search(expr):
        return True
    words = expr.strip().split(None, 1)
    return bool(words) and words[0] in CONTROL_KEYWORDS


def parenthesize_if_necessary(expr: str) -> str:
    if _BARE_PATH_RE.match(expr):
        return expr
    return f"({expr})"


def compile_interpolation(text: str) -> Optional[str]:
    """
    Turn interpolated text into one expression of the host template language.

    Plain text becomes a quoted literal. Text with actions becomes a ``print``
    call over the literal segments and the action expressions:

        ba{{.v}}r  ->  (print "ba" .v "r")

    ``{{-`` and ``-}}`` trim whitespace from the neighbouring literals, and
    ``{{/* ... */}}`` comments are dropped.

    Returns None when the text holds control actions (``if``, ``range``,
    assignments, ...) and so cannot be inlined.
    """
    if OPEN_DELIM not in text:
        return quote_string(text)

    operands: List[str] = []
    rest = text
    while True:
        prefix, found, remainder = rest.partition(OPEN_DELIM)
        if not found:
            break

        trim_prefix = remainder.startswith(TRIM_LEFT)
        if trim_prefix:
            remainder = remainder[len(TRIM_LEFT) :]
            prefix = prefix.rstrip()
        if prefix:
            operands.append(quote_string(prefix))

        expr, closed, suffix = remainder.partition(CLOSE_DELIM)
        if not closed:
            # Unterminated action: keep it as literal text.
            rest = OPEN_DELIM + (TRIM_LEFT if trim_prefix else "") + remainder
            break

        trim_suffix = expr.endswith(TRIM_RIGHT)
        if trim_suffix:
            expr = expr[: -len(TRIM_RIGHT)]
        expr = expr.strip()

        if not is_comment(expr):
            if is_control_action(expr):
                return None
            operands.append(parenthesize_if_necessary(expr))

        if trim_suffix:
            suffix = suffix.lstrip()
        rest = suffix

    if rest:
        operands.append(quote_string(rest))

    return "(print" + "".join(" " + op for op in operands) + ")"
