from lijnstatus.components.choose import choose
from lijnstatus.components.map import map_values
from lijnstatus.components.split import split
from lijnstatus.core.context import Context
from lijnstatus.typing import NOTHING, Some, filter_present


def half_if_even(x):
    return Some(x // 2) if x % 2 == 0 else NOTHING


def test_choose_keeps_present_values():
    results, _ = choose(half_if_even).collect([1, 2, 3, 4])
    assert results == [1, 2]


def test_choose_counts_dropped_items():
    results, context = choose(half_if_even, counter="odd").collect([1, 2, 3])
    assert results == [1]
    assert context.get("odd") == 2


def test_choose_passes_context_when_asked():
    def scaled(context: Context, x):
        return Some(x * context.config.get("scale", 1))

    results, _ = choose(scaled).collect([1, 2], config={"scale": 10})
    assert results == [10, 20]


def test_split_with_function():
    results, _ = split(str.split).collect(["a b", "c"])
    assert results == ["a", "b", "c"]


def test_split_without_function_flattens_lists_only():
    results, _ = split().collect([[1, 2], "ab", (3, 4)])
    assert results == [1, 2, "ab", 3, 4]


def test_map_values_names():
    def shout(s):
        return s.upper()

    assert map_values(shout).name == "shout"
    assert map_values(lambda s: s).name == "map"
    assert map_values(shout, name="loud").name == "loud"
    results, _ = map_values(shout).collect(["a"])
    assert results == ["A"]


def test_choose_matches_filter_present_over_mapped_items():
    items = [1, 2, 3, 4, 5, 6]
    results, _ = choose(half_if_even).collect(items)
    assert results == list(filter_present(half_if_even(x) for x in items))
