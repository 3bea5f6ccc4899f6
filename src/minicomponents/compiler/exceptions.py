"""Errors reported while rewriting component tags."""

from typing import Optional


class ComponentSyntaxError(Exception):
    """A malformed or unknown component tag.

    The rewriter never raises this; it returns the first one it records and
    keeps going, so callers still get usable output.
    """

    def __init__(
        self,
        message: str,
        tag: str = "",
        pos: int = 0,
        line: int = 1,
        file_path: Optional[str] = None,
    ) -> None:
        self.message = message
        self.tag = tag
        self.pos = pos
        self.line = line
        self.file_path = file_path
        super().__init__(str(self))

    def __str__(self) -> str:
        text = f"line {self.line}: {self.message}"
        if self.tag:
            text = f"{self.tag}: {text}"
        if self.file_path:
            text = f"{self.file_path}: {text}"
        return text

    @classmethod
    def at(
        cls, source: str, pos: int, message: str, tag: str = ""
    ) -> "ComponentSyntaxError":
        """Build an error for offset ``pos`` of ``source``, deriving the line."""
        line = 1 + source.count("\n", 0, pos)
        return cls(message, tag=tag, pos=pos, line=line)
