from polychart.chart.families import ChartFamily
from polychart.chart.store import PLACEHOLDER, RuntimeSeriesStore


def test_category_values_fill_by_position():
    store = RuntimeSeriesStore()
    store.add_categories(["Q1", "Q2", "Q3"])
    store.add_series_category_value("Sales", "Q2", 15)
    assert store.series["Sales"].data == [PLACEHOLDER, 15, PLACEHOLDER]

    store.add_series_category_value("Sales", "Q1", 10)
    assert store.series["Sales"].data == [10, 15, PLACEHOLDER]


def test_unknown_category_is_a_no_op():
    store = RuntimeSeriesStore()
    store.add_categories(["Q1"])
    store.add_series_category_value("Sales", "Q1", 3)
    store.add_series_category_value("Sales", "Q9", 99)
    assert store.series["Sales"].data == [3]


def test_added_category_is_padded_at_materialization():
    store = RuntimeSeriesStore()
    store.add_categories(["a", "b"])
    store.add_series_category_value("S", "a", 1)
    store.add_category("c")
    # the stored array is not resized
    assert store.series["S"].data == [1, PLACEHOLDER]
    assert store.materialize(ChartFamily.CARTESIAN) == [{"name": "S", "data": [1, PLACEHOLDER, PLACEHOLDER]}]

    store.add_series_category_value("S", "c", 7)
    assert store.series["S"].data == [1, PLACEHOLDER, 7]


def test_add_series_value_replaces_record_and_color():
    store = RuntimeSeriesStore()
    store.add_series("Desktop", "#008FFB", 44)
    store.add_series_value("Desktop", 50)
    assert store.series["Desktop"].data == 50
    assert store.series["Desktop"].color is None


def test_add_xy_and_set_color():
    store = RuntimeSeriesStore()
    store.add_xy("Mobile", 23)
    store.set_series_color("Mobile", "#00E396")
    store.set_series_color("missing", "#000")
    assert store.materialize(ChartFamily.CIRCULAR) == [{"name": "Mobile", "data": 23, "color": "#00E396"}]
    assert "missing" not in store.series


def test_scalar_materialization_takes_first_element():
    store = RuntimeSeriesStore()
    store.add_series("A", None, [5, 6])
    store.add_series("B", None, 3)
    assert [s["data"] for s in store.materialize(ChartFamily.RADIAL)] == [5, 3]


def test_categories_and_colors_only_accept_lists():
    store = RuntimeSeriesStore()
    store.add_categories("not a list")
    store.add_colors({"a": 1})
    store.add_colors(["#111", "#222"])
    assert store.categories == []
    assert store.colors == ["#111", "#222"]


def test_clear_resets_everything():
    store = RuntimeSeriesStore()
    store.add_series("A", "#111", [1])
    store.add_categories(["x"])
    store.add_colors(["#fff"])
    store.clear()
    assert len(store) == 0
    assert store.categories == [] and store.colors == []


def test_series_colors_in_insertion_order():
    store = RuntimeSeriesStore()
    store.add_series("A", "#111", [1])
    store.add_series("B", None, [2])
    store.add_series("C", "#333", [3])
    assert store.series_colors() == ["#111", "#333"]


def test_add_series_copies_the_callers_list():
    store = RuntimeSeriesStore()
    store.add_categories(["Q1", "Q2"])
    values = [1, 2]
    store.add_series("Sales", None, values)
    store.add_series_category_value("Sales", "Q2", 9)
    assert values == [1, 2]
    assert store.series["Sales"].data == [1, 9]
