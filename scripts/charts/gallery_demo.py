from __future__ import annotations
import argparse
import json
import random
from pathlib import Path
import pandas as pd

from polychart.chart.component import ChartComponent
from polychart.chart.families import CHART_TYPES
from polychart.chart.scheduler import ManualTimers
from polychart.config_model.model import load_config


# ---------------------------
# Data generators
# ---------------------------

def df_monthly(months: int = 6, series: int = 2) -> pd.DataFrame:
    idx = pd.date_range("2024-01-01", periods=months, freq="MS").strftime("%b")
    rows = []
    for j in range(series):
        base = random.uniform(40, 120)
        for m in idx:
            rows.append((f"Series {j+1}", m, round(base + random.gauss(0, 15), 1)))
    return pd.DataFrame(rows, columns=["series", "month", "value"])

def df_shares(n: int = 4) -> pd.DataFrame:
    names = ["Desktop", "Mobile", "Tablet", "Other", "TV", "Console"][:n]
    return pd.DataFrame({"label": names, "value": [random.randint(5, 60) for _ in names]})


def named_series(df: pd.DataFrame) -> list:
    return [
        {"name": name, "data": dict(zip(g["month"], g["value"]))}
        for name, g in df.groupby("series", sort=False)
    ]

def pairs(df: pd.DataFrame) -> list:
    return [[r.label, int(r.value)] for r in df.itertuples(index=False)]


def attributes_for(chart_type: str) -> dict:
    if chart_type in ("pie", "donut", "polarArea"):
        data = pairs(df_shares())
    elif chart_type == "radialBar":
        data = [random.randint(30, 95) for _ in range(3)]
    else:
        data = named_series(df_monthly())
    attrs = {"type": chart_type, "data": json.dumps(data), "title": f"{chart_type} demo"}
    if chart_type in ("line", "area", "column"):
        attrs["y-axis-output-format"] = "thousand"
    return attrs


# ---------------------------
# Main
# ---------------------------

def main():
    ap = argparse.ArgumentParser(description="One HTML file per supported chart type")
    ap.add_argument("-o", "--outdir", type=Path, required=True, help="Output directory")
    ap.add_argument("--theme", default=None, help="light or dark (defaults to config theme.name)")
    ap.add_argument("--seed", type=int, default=7, help="Random seed")
    args = ap.parse_args()

    cfg = load_config()
    random.seed(args.seed)
    outdir = args.outdir
    outdir.mkdir(parents=True, exist_ok=True)

    for chart_type in CHART_TYPES:
        attrs = attributes_for(chart_type)
        if args.theme:
            attrs["theme"] = args.theme
        comp = ChartComponent(attrs, cfg=cfg, timers=ManualTimers())
        comp.connect()
        if comp.error:
            print(f"[WARN] {chart_type}: {comp.error}")
            continue
        comp.export_html(str(outdir / f"{chart_type}.html"))

    print(f"Wrote chart gallery to: {outdir.resolve()}")


if __name__ == "__main__":
    main()
