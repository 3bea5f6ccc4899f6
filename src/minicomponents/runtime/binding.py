"""Python side of the ``$.Bind`` contract used by rewritten templates."""

from dataclasses import dataclass, field
from typing import Any, Dict


def _pairs_to_dict(pairs: tuple) -> Dict[str, Any]:
    n = len(pairs)
    if n % 2 != 0:
        raise ValueError(f"odd number of arguments {n}: {pairs!r}")
    result: Dict[str, Any] = {}
    for i in range(0, n, 2):
        key, value = pairs[i], pairs[i + 1]
        if not isinstance(key, str):
            raise TypeError(
                f"argument {i} must be a string, got {type(key).__name__}: {key!r}"
            )
        result[key] = value
    return result


@dataclass
class RenderData:
    """What a component template sees as ``.``: its data plus named args."""

    data: Any = None
    args: Dict[str, Any] = field(default_factory=dict)

    def bind(self, value: Any, *pairs: Any) -> "RenderData":
        """``($.Bind DATA "k1" v1 "k2" v2 ...)``"""
        return RenderData(data=value, args=_pairs_to_dict(pairs))


def args(*pairs: Any) -> Dict[str, Any]:
    """Build an args dict from alternating keys and values.

    The host engine treats an empty map as falsy, so an empty result carries a
    placeholder key.
    """
    result = _pairs_to_dict(pairs)
    if not result:
        result["__dummy"] = True
    return result
