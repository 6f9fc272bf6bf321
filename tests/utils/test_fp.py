import pytest
from polychart.utils.fp import compact, fit_length, get_in, has_in, try_or


def test_try_or_default_on_listed_errors():
    @try_or(-1)
    def to_int(x):
        return int(x)

    assert to_int("3") == 3
    assert to_int("x") == -1
    assert to_int(None) == -1


def test_try_or_lets_other_errors_through():
    @try_or(0, KeyError)
    def lookup(d):
        return d["k"]

    assert lookup({}) == 0
    with pytest.raises(TypeError):
        lookup(None)


def test_get_in_and_has_in():
    d = {"a": {"b": [10, 20]}, "n": None}
    assert get_in(["a", "b", 1], d) == 20
    assert get_in(["a", "x"], d, "dflt") == "dflt"
    assert get_in(["a", "b", "c"], d) is None
    assert has_in(["n"], d) is True
    assert has_in(["a", "missing"], d) is False


@pytest.mark.parametrize("seq,n,expected", [
    ([], 2, ["#0", "#1"]),
    (["a"], 3, ["a", "#1", "#2"]),
    (["a", "b"], 2, ["a", "b"]),
    (["a", "b", "c"], 1, ["a"]),
    (["a"], 0, []),
])
def test_fit_length(seq, n, expected):
    assert fit_length(seq, n, lambda i: f"#{i}") == expected


def test_compact_drops_none_only():
    assert compact({"a": None, "b": 0, "c": False, "d": ""}) == {"b": 0, "c": False, "d": ""}
