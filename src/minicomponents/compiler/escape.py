"""String literal quoting for the host template language."""

from typing import Any

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def quote_string(value: Any) -> str:
    """Quote a value as a double-quoted template string literal.

    Follows the escaping rules of Go's ``strconv.Quote``: printable
    characters are kept as-is, everything else is escaped.

    Args:
        value: Any value to quote (will be converted to string first)

    Returns:
        The literal, including the surrounding double quotes
    """
    s = str(value)
    out = ['"']
    for ch in s:
        escaped = _SIMPLE_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ch.isprintable():
            out.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code <= 0xFFFF:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)
