import pytest
from minicomponents.runtime.binding import RenderData, args


def test_bind_pairs_args() -> None:
    root = RenderData(data={"Good": True})
    bound = root.bind("hello", "first", 1, "second", "two")
    assert bound.data == "hello"
    assert bound.args == {"first": 1, "second": "two"}
    # The receiver is left untouched.
    assert root.args == {}


def test_bind_without_args() -> None:
    assert RenderData().bind(None) == RenderData(data=None, args={})


def test_bind_rejects_odd_arguments() -> None:
    with pytest.raises(ValueError, match="odd number of arguments 3"):
        RenderData().bind(None, "a", 1, "b")


def test_bind_rejects_non_string_keys() -> None:
    with pytest.raises(TypeError, match="argument 2 must be a string, got int"):
        RenderData().bind(None, "a", 1, 2, 3)


def test_args() -> None:
    assert args("a", 1) == {"a": 1}
    assert args() == {"__dummy": True}
