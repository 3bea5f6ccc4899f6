"""Attribute grammar for component tags."""

import enum
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from minicomponents.compiler.components import Arg
from minicomponents.compiler.escape import quote_string
from minicomponents.compiler.interpolation import (
    compile_interpolation,
    expand_args_shorthand,
)

WHITESPACE = " \t\n"

_SPACE = r"[\t\n\f\r ]"

_TAG_END_RE = re.compile(r"/?>")
_ATTR_START_RE = re.compile(r"([a-z0-9-]+)([=\t\n\f\r />])", re.IGNORECASE)
_QUOTED_VALUE_RE = re.compile(r'"([^"]*)"')
_SINGLE_QUOTED_VALUE_RE = re.compile(r"'([^']*)'")
_ACTION_VALUE_RE = re.compile(r"\{\{(.+?)\}\}")
_NAKED_VALUE_RE = re.compile(r"""[^\t\n\f\r /<>"']+""")
_BROKEN_ATTR_END_RE = re.compile(_SPACE + r"|/?>")

TRUE_VALUE = "true"
NULL_VALUE = "nil"


class ScanMode(enum.Enum):
    # Attributes are parsed one after another, the tag end must follow directly.
    NORMAL = "normal"
    # Syntax is broken: skip ahead to the first tag end found anywhere.
    RESYNC = "resync"


@dataclass
class ParsedAttributes:
    args: List[Arg] = field(default_factory=list)
    end: int = 0
    self_closed: bool = False
    # (offset, message) of the first problem found in this tag.
    error: Optional[Tuple[int, str]] = None

    def fail(self, pos: int, message: str) -> None:
        if self.error is None:
            self.error = (pos, message)


def skip_space(text: str, pos: int) -> Tuple[int, bool]:
    """Skip whitespace from ``pos``; also report whether any was skipped."""
    end = pos
    while end < len(text) and text[end] in WHITESPACE:
        end += 1
    return end, end != pos


class AttributeParser:
    """Parses the inside of a tag, from after its name up to ``>`` or ``/>``."""

    def __init__(self, text: str) -> None:
        self.text = text

    def parse(self, pos: int, preceded_by_space: bool) -> ParsedAttributes:
        text = self.text
        result = ParsedAttributes()
        mode = ScanMode.NORMAL

        while True:
            end = self._match_end(mode, pos)
            if end is not None:
                result.self_closed = end.group(0) == "/>"
                pos = end.end()
                break

            start = _ATTR_START_RE.match(text, pos)
            if preceded_by_space and start is not None:
                name, sep = start.group(1), start.group(2)
                if sep == "=":
                    pos, _ = skip_space(text, start.end())
                    parsed = self._parse_value(name, pos, result)
                    if parsed is None:
                        mode = ScanMode.RESYNC
                        preceded_by_space = False
                        continue
                    pos, value = parsed
                else:
                    # Bare attribute name: <c-x disabled/>
                    pos = start.start(2)
                    value = TRUE_VALUE
                pos, preceded_by_space = skip_space(text, pos)
                result.args.append(Arg(name, value))
            elif mode is ScanMode.RESYNC:
                result.fail(pos, "missing end of tag")
                break
            else:
                result.fail(pos, "invalid syntax or missing end of tag")
                mode = ScanMode.RESYNC

        result.end = pos
        return result

    def _match_end(self, mode: ScanMode, pos: int) -> Optional["re.Match[str]"]:
        if mode is ScanMode.RESYNC:
            return _TAG_END_RE.search(self.text, pos)
        return _TAG_END_RE.match(self.text, pos)

    def _parse_value(
        self, name: str, pos: int, result: ParsedAttributes
    ) -> Optional[Tuple[int, str]]:
        """Parse the value after ``name=``; None means the syntax is beyond repair."""
        text = self.text

        quoted = _QUOTED_VALUE_RE.match(text, pos) or _SINGLE_QUOTED_VALUE_RE.match(
            text, pos
        )
        if quoted is not None:
            raw = quoted.group(1)
            value = compile_interpolation(expand_args_shorthand(raw))
            if value is None:
                result.fail(
                    quoted.end(),
                    f"cannot represent attr {quote_string(name)} value {raw} as a single call",
                )
                value = NULL_VALUE
            return quoted.end(), value

        action = _ACTION_VALUE_RE.match(text, pos)
        if action is not None:
            return action.end(), "(" + expand_args_shorthand(action.group(1)) + ")"

        naked = _NAKED_VALUE_RE.match(text, pos)
        if naked is not None:
            return naked.end(), quote_string(expand_args_shorthand(naked.group(0)))

        broken = _BROKEN_ATTR_END_RE.search(text, pos)
        if broken is not None:
            result.fail(pos, f"missing value for attr {name}")
            return broken.start(), NULL_VALUE

        result.fail(pos, f"invalid syntax of attr {name}")
        return None
