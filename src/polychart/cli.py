from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .chart.attributes import AttributeState
from .chart.builder import ChartBuilder
from .chart.errors import ChartError
from .chart.formatters import AxisLabelFormatter
from .chart.renderer import PlotlyRenderer
from .config_model.model import load_config
from .utils.log import configure_from_cfg


def _json_default(obj: Any) -> Any:
    if isinstance(obj, AxisLabelFormatter):
        return {"formatter": obj.code}
    raise TypeError(f"not JSON serializable: {type(obj).__name__}")


def _read_arg(value: Optional[str]) -> Optional[str]:
    """Accept inline JSON or @path/to/file.json."""
    if value and value.startswith("@"):
        return Path(value[1:]).read_text(encoding="utf-8")
    return value


def collect_attributes(args: argparse.Namespace) -> Dict[str, str]:
    attrs: Dict[str, str] = {}
    if args.attrs_file:
        raw = json.loads(Path(args.attrs_file).read_text(encoding="utf-8"))
        attrs.update({k: v if isinstance(v, str) else json.dumps(v) for k, v in raw.items()})
    for pair in args.attr or []:
        name, sep, value = pair.partition("=")
        if not sep:
            raise SystemExit(f"--attr expects name=value, got {pair!r}")
        attrs[name.strip()] = value
    if args.type:
        attrs["type"] = args.type
    data = _read_arg(args.data)
    if data is not None:
        attrs["data"] = data
    options = _read_arg(args.options)
    if options is not None:
        attrs["options"] = options
    return attrs


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="polychart", description="Derive a chart configuration from attributes")
    ap.add_argument("--type", default=None, help="Chart type (line, area, column, bar, scatter, pie, donut, radialBar, polarArea, radar)")
    ap.add_argument("--data", default=None, help="JSON data payload, or @file.json")
    ap.add_argument("--options", default=None, help="JSON options object, or @file.json")
    ap.add_argument("--attr", action="append", metavar="NAME=VALUE", help="Any other attribute; repeatable")
    ap.add_argument("--attrs-file", default=None, help="JSON object of attribute name -> value")
    ap.add_argument("--config", default=None, help="Path to config.toml (defaults to $POLYCHART_CFG or config/config.toml)")
    ap.add_argument("--print-config", action="store_true", help="Print the derived configuration as JSON")
    ap.add_argument("-o", "--out", type=Path, default=None, help="Write an HTML rendering to this path")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config)
    log = configure_from_cfg(cfg.logging)

    attrs = AttributeState(collect_attributes(args))
    try:
        result = ChartBuilder(cfg).build(attrs)
    except ChartError as e:
        log.error(str(e))
        print(str(e), file=sys.stderr)
        return 1

    if args.print_config or not args.out:
        doc = {"config": result.config, "series": result.render_series}
        print(json.dumps(doc, indent=2, default=_json_default))

    if args.out:
        chart = PlotlyRenderer(cfg.renderer.include_plotlyjs).construct(result.config, result.render_series)
        chart.render()
        path = chart.export_html(str(args.out))
        log.info("wrote chart", extra={"path": str(path), "chart_type": result.chart_type})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
