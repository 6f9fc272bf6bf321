import json
import pytest

from polychart.chart.attributes import AttributeState
from polychart.chart.builder import ChartBuilder
from polychart.chart.errors import EmptyDataError, UnsupportedChartTypeError
from polychart.chart.formatters import AxisLabelFormatter


def build(cfg, attrs):
    state = AttributeState({k: json.dumps(v) if not isinstance(v, str) else v for k, v in attrs.items()})
    return ChartBuilder(cfg).build(state)


LINE_TWO = [{"name": "A", "data": [1, 2]}, {"name": "B", "data": [3, 4], "dashed": True}]


# ---------- scenarios ----------

def test_pie_pairs_give_values_and_labels(cfg):
    res = build(cfg, {"type": "pie", "data": [["Desktop", 44], ["Mobile", 23]]})
    assert res.render_series == [44, 23]
    assert res.labels == ["Desktop", "Mobile"]
    assert res.config["labels"] == ["Desktop", "Mobile"]
    assert res.config["chart"]["type"] == "pie"


def test_line_object_payload(cfg):
    res = build(cfg, {"type": "line", "data": {"Jan": 100, "Feb": 120}})
    assert res.render_series == [{"name": "Series 1", "data": [{"x": "Jan", "y": 100}, {"x": "Feb", "y": 120}]}]


def test_money_axis_formatter(cfg):
    res = build(cfg, {"data": [1, 2], "y-axis-output-format": "money", "x-axis-output-format": "bogus"})
    formatter = res.config["yaxis"]["labels"]["formatter"]
    assert isinstance(formatter, AxisLabelFormatter)
    assert formatter(1234.5) == "1,234.50"
    assert "formatter" not in res.config["xaxis"].get("labels", {})


# ---------- defaults and layering ----------

def test_type_defaults_to_line(cfg):
    res = build(cfg, {"data": [1, 2, 3]})
    assert res.chart_type == "line"
    assert res.config["chart"]["height"] == 350
    assert res.config["stroke"]["curve"] == "smooth"
    assert res.config["stroke"]["width"] == 3
    assert res.config["markers"]["size"] == 6
    assert res.config["legend"]["position"] == "bottom"
    assert res.config["fill"] == {"type": "gradient"}


def test_area_height_default_and_bad_height(cfg):
    assert build(cfg, {"type": "area", "data": [1]}).config["chart"]["height"] == 400
    assert build(cfg, {"type": "line", "data": [1], "height": "abc"}).config["chart"]["height"] == 350
    assert build(cfg, {"type": "line", "data": [1], "height": "0"}).config["chart"]["height"] == 350
    assert build(cfg, {"type": "line", "data": [1], "height": "280px"}).config["chart"]["height"] == 280


def test_user_options_win_but_cannot_change_type(cfg):
    res = build(cfg, {
        "data": [1, 2],
        "title": "from attribute",
        "options": {"chart": {"type": "pie", "height": 500}, "title": {"text": "from options"}},
    })
    assert res.config["chart"]["type"] == "line"
    assert res.config["chart"]["height"] == 500
    assert res.config["title"]["text"] == "from options"
    # sibling keys from lower layers survive
    assert res.config["title"]["align"] == "left"


def test_invalid_options_json_falls_back_to_empty(cfg):
    res = build(cfg, {"data": [1, 2], "options": "{not json"})
    assert res.config["chart"]["height"] == 350


def test_gradient_opt_out(cfg):
    assert "fill" not in build(cfg, {"data": [1], "gradient": "false"}).config
    assert build(cfg, {"data": [1], "gradient": "no"}).config["fill"] == {"type": "gradient"}


# ---------- legend ----------

@pytest.mark.parametrize("attrs,expected", [
    ({"data": [1, 2]}, False),
    ({"data": [1, 2], "show-legend": "true"}, True),
    ({"data": LINE_TWO}, True),
    ({"data": LINE_TWO, "show-legend": "false"}, False),
    ({"type": "pie", "data": {"a": 1}}, True),
    ({"type": "pie", "data": {"a": 1}, "show-legend": "false"}, False),
    ({"type": "radialBar", "data": [50]}, False),
    ({"type": "radialBar", "data": [50], "show-legend": "true"}, True),
    ({"type": "radialBar", "data": [50], "show-legend": "true", "legend-position": "hidden"}, False),
])
def test_legend_policy(cfg, attrs, expected):
    assert build(cfg, attrs).config["legend"]["show"] is expected


def test_legend_position_sets_vertical_align(cfg):
    legend = build(cfg, {"data": LINE_TWO, "legend-position": "top"}).config["legend"]
    assert legend["position"] == "top"
    assert legend["verticalAlign"] == "top"


# ---------- series-derived fragments ----------

def test_dash_array_from_dashed_flags(cfg):
    assert build(cfg, {"data": LINE_TWO}).config["stroke"]["dashArray"] == [0, 5]


def test_series_colors_promoted_unless_user_supplied(cfg):
    data = [{"name": "A", "data": [1], "color": "#111"}, {"name": "B", "data": [2]}]
    res = build(cfg, {"data": data})
    assert res.config["colors"] == ["#111"]
    assert res.config["legend"]["labels"]["useSeriesColors"] is True

    res = build(cfg, {"data": data, "options": {"colors": ["#abc"]}})
    assert res.config["colors"] == ["#abc"]
    assert res.config["legend"]["labels"]["useSeriesColors"] is False


def test_colors_attribute_preferred_over_series_colors(cfg):
    data = [{"name": "A", "data": 1, "color": "#111"}, {"name": "B", "data": 2, "color": "#222"}]
    res = build(cfg, {"type": "polarArea", "data": data, "colors": ["#f00", "#0f0"]})
    assert res.config["colors"] == ["#f00", "#0f0"]


# ---------- axes ----------

def test_axis_titles_and_rotation(cfg):
    res = build(cfg, {
        "data": [1, 2],
        "x-axis-title": "Month",
        "y-axis-title": "Revenue",
        "x-axis-label-rotate": "-45",
    })
    xaxis = res.config["xaxis"]
    assert xaxis["title"]["text"] == "Month"
    assert xaxis["title"]["offsetY"] == 2
    assert xaxis["labels"] == {"rotate": -45, "rotateAlways": True, "offsetY": 25}
    assert res.config["yaxis"]["title"]["text"] == "Revenue"


def test_zero_rotation_is_ignored(cfg):
    assert "labels" not in build(cfg, {"data": [1], "x-axis-label-rotate": "0"}).config["xaxis"]


def test_categories_go_to_x_axis_for_columns(cfg):
    res = build(cfg, {"type": "column", "data": [1, 2], "categories": ["a", "b"]})
    assert res.config["xaxis"]["categories"] == ["a", "b"]
    assert res.config["plotOptions"]["bar"]["horizontal"] is False
    assert res.config["chart"]["type"] == "bar"


def test_horizontal_column_moves_categories_to_y_axis(cfg):
    res = build(cfg, {"type": "column", "data": [1, 2], "categories": ["a", "b"], "bar-orientation": "horizontal"})
    assert res.config["yaxis"]["categories"] == ["a", "b"]
    assert "categories" not in res.config["xaxis"]
    assert res.config["plotOptions"]["bar"]["horizontal"] is True


def test_bar_uses_both_axes_and_rounded_corners(cfg):
    res = build(cfg, {"type": "bar", "data": [1, 2], "categories": ["a", "b"], "border-radius": "8", "column-width": "55%"})
    assert res.config["xaxis"]["categories"] == ["a", "b"]
    assert res.config["yaxis"]["categories"] == ["a", "b"]
    bar = res.config["plotOptions"]["bar"]
    assert bar["horizontal"] is True
    assert bar["borderRadius"] == 8
    assert bar["borderRadiusApplication"] == "around"
    assert bar["columnWidth"] == "55%"
    assert res.config["dataLabels"]["offsetX"] == 0


def test_bar_data_label_offset_when_not_centered(cfg):
    res = build(cfg, {"type": "bar", "data": [1], "data-label-position": "top"})
    assert res.config["dataLabels"]["offsetX"] == 30
    assert res.config["plotOptions"]["bar"]["dataLabels"]["position"] == "top"


def test_negative_border_radius_uses_default(cfg):
    assert build(cfg, {"type": "column", "data": [1], "border-radius": "-3"}).config["plotOptions"]["bar"]["borderRadius"] == 4


# ---------- structural adjustments ----------

def test_realtime_suppresses_labels_and_markers(cfg):
    res = build(cfg, {"data": [1, 2], "realtime": "true", "show-data-labels": "true"})
    assert res.config["dataLabels"]["enabled"] is False
    assert res.config["markers"]["size"] == 0
    assert res.config["chart"]["animations"]["easing"] == "linear"
    assert res.config["chart"]["zoom"]["enabled"] is False


def test_stacking_rounds_all_segments(cfg):
    res = build(cfg, {"type": "column", "data": LINE_TWO, "stacked": "true"})
    assert res.config["chart"]["stacked"] is True
    assert res.config["plotOptions"]["bar"]["borderRadiusWhenStacked"] == "all"


def test_stacking_ignored_for_non_cartesian(cfg):
    assert "stacked" not in build(cfg, {"type": "pie", "data": [1, 2], "stacked": "true"}).config["chart"]


def test_axis_formatter_never_overrides_user_formatter(cfg):
    res = build(cfg, {
        "data": [1],
        "x-axis-output-format": "date",
        "options": {"xaxis": {"labels": {"formatter": "custom"}}},
    })
    assert res.config["xaxis"]["labels"]["formatter"] == "custom"


def test_axis_formatter_applied_to_each_y_axis(cfg):
    res = build(cfg, {
        "data": [1],
        "y-axis-output-format": "thousand",
        "options": {"yaxis": [{"title": {"text": "left"}}, {"labels": {"formatter": "keep"}}]},
    })
    left, right = res.config["yaxis"]
    assert left["labels"]["formatter"] == AxisLabelFormatter("thousand", "UTC")
    assert left["title"]["text"] == "left"
    assert right["labels"]["formatter"] == "keep"


def test_data_label_orientation_only_when_present(cfg):
    assert "plotOptions" not in build(cfg, {"data": [1]}).config
    res = build(cfg, {"type": "column", "data": [1], "data-label-orientation": "vertical"})
    assert res.config["plotOptions"]["bar"]["dataLabels"]["orientation"] == "vertical"


# ---------- circular / radial / polar / radar ----------

@pytest.mark.parametrize("categories,expected", [
    ([], ["a", "b", "c"]),
    (["x"], ["x", "Item 2", "Item 3"]),
    (["x", "y", "z"], ["x", "y", "z"]),
    (["x", "y", "z", "w"], ["x", "y", "z"]),
])
def test_labels_fitted_to_series_count(cfg, categories, expected):
    attrs = {"type": "donut", "data": {"a": 1, "b": 2, "c": 3}}
    if categories:
        attrs["categories"] = categories
    res = build(cfg, attrs)
    assert res.labels == expected
    assert len(res.labels) == len(res.render_series)


def test_flat_values_get_item_labels(cfg):
    assert build(cfg, {"type": "pie", "data": [5, 6]}).labels == ["Item 1", "Item 2"]


def test_named_items_label_circular_series(cfg):
    data = [{"name": "Desktop", "data": 44, "color": "#008FFB"}, {"name": "Mobile", "data": 23}]
    res = build(cfg, {"type": "pie", "data": data})
    assert res.labels == ["Desktop", "Mobile"]
    assert res.render_series == [44, 23]
    assert res.config["colors"] == ["#008FFB"]


def test_polar_area_sorted_by_value_descending(cfg):
    data = [
        {"name": "a", "data": 1, "color": "#111"},
        {"name": "b", "data": 3, "color": "#333"},
        {"name": "c", "data": 2},
    ]
    attrs = AttributeState({"type": "polarArea", "data": json.dumps(data)})
    res = ChartBuilder(cfg).build(attrs)
    assert res.render_series == [3, 2, 1]
    assert res.labels == ["b", "c", "a"]
    assert res.config["colors"] == ["#333", "#111"]
    # stored attribute untouched
    assert json.loads(attrs.get("data")) == data


def test_polar_area_ties_keep_input_order(cfg):
    res = build(cfg, {"type": "polarArea", "data": {"x": 2, "y": 2, "z": 5}})
    assert res.labels == ["z", "x", "y"]


def test_donut_fragment(cfg):
    res = build(cfg, {
        "type": "donut", "data": [1, 2],
        "show-data-labels": "true", "donut-show-total": "false", "hollow-size": "65%",
        "start-angle": "-90", "end-angle": "90",
    })
    pie = res.config["plotOptions"]["pie"]
    assert pie["donut"] == {"labels": {"show": True, "total": {"show": False}}, "size": "65%"}
    assert pie["startAngle"] == -90 and pie["endAngle"] == 90


def test_radial_bar_fragment(cfg):
    res = build(cfg, {"type": "radialBar", "data": [70, 40], "dashed-radial": "true", "bar-labels": "true"})
    radial = res.config["plotOptions"]["radialBar"]
    assert radial["hollow"] == {"size": "50%"}
    assert radial["track"] == {"strokeWidth": "97%"}
    assert radial["startAngle"] == 0 and radial["endAngle"] == 360
    assert radial["barLabels"]["enabled"] is True
    assert radial["barLabels"]["useSeriesColors"] is True
    assert res.config["stroke"]["dashArray"] == 4


def test_radar_object_payload(cfg):
    res = build(cfg, {"type": "radar", "data": {"Speed": 80, "Power": 60}, "title": "Car"})
    assert res.render_series == [{"name": "Car", "data": [80, 60]}]
    assert res.config["xaxis"]["categories"] == ["Speed", "Power"]


def test_radar_categories_attribute_wins(cfg):
    data = [{"name": "A", "data": {"x": 1, "y": 2}}]
    res = build(cfg, {"type": "radar", "data": data, "categories": ["one", "two"]})
    assert res.config["xaxis"]["categories"] == ["one", "two"]


# ---------- errors ----------

def test_unknown_type_raises(cfg):
    with pytest.raises(UnsupportedChartTypeError, match='Chart type "heatmap" is not supported yet'):
        build(cfg, {"type": "heatmap", "data": [1]})


@pytest.mark.parametrize("data", [None, "not json", "[]", "{}"])
def test_empty_data_raises(cfg, data):
    attrs = AttributeState({"type": "line"})
    if data is not None:
        attrs.set("data", data)
    with pytest.raises(EmptyDataError, match="No data provided for chart"):
        ChartBuilder(cfg).build(attrs)


# ---------- incremental fragments ----------

def test_visual_fragment_only_covers_visual_attributes(cfg):
    from polychart.chart.families import resolve
    frag = ChartBuilder(cfg).visual_fragment(resolve("line"), {
        "title": "T", "height": "x", "show-legend": "true", "legend-position": "top", "curve": "straight",
    })
    assert frag == {
        "title": {"text": "T"},
        "chart": {"height": 350},
        "legend": {"show": True, "position": "top"},
    }


def test_style_fragment_restricted_to_names(cfg):
    from polychart.chart.families import resolve
    attrs = AttributeState({"curve": "straight", "line-width": "5", "title": "T"})
    b = ChartBuilder(cfg)
    assert b.style_fragment(resolve("line"), attrs, only=["curve"]) == {"stroke": {"curve": "straight"}}
    full = b.style_fragment(resolve("line"), attrs)
    assert full["stroke"] == {"curve": "straight", "width": 5}
    assert full["title"] == {"text": "T"}


def test_style_fragment_for_bars_and_donut(cfg):
    from polychart.chart.families import resolve
    b = ChartBuilder(cfg)
    attrs = AttributeState({"bar-orientation": "horizontal", "stacked": "true", "border-radius": "6"})
    assert b.style_fragment(resolve("column"), attrs) == {
        "plotOptions": {"bar": {"horizontal": True, "borderRadius": 6}},
        "chart": {"stacked": True},
    }
    donut = AttributeState({"hollow-size": "70%", "donut-show-total": "false"})
    frag = b.style_fragment(resolve("donut"), donut)
    assert frag["plotOptions"]["pie"]["donut"] == {"size": "70%", "labels": {"total": {"show": False}}}


def test_build_config_shortcut_uses_builtin_defaults():
    from polychart.chart.builder import build_config
    res = build_config(AttributeState({"data": "[1, 2]"}))
    assert res.chart_type == "line"
    assert res.config["chart"]["height"] == 350
