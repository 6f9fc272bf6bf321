from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

TEMPLATE_PREFIX = "polychart_"


@dataclass(frozen=True)
class Theme:
    name: str
    paper_bg: str
    plot_bg: str
    font_color: str
    grid_color: str
    palette: Tuple[str, ...]


THEMES: Dict[str, Theme] = {
    "light": Theme(
        "light", "#ffffff", "#ffffff", "#333333", "#e7e7e7",
        ("#008FFB", "#00E396", "#FEB019", "#FF4560", "#775DD0", "#3F51B5", "#546E7A", "#D4526E"),
    ),
    "dark": Theme(
        "dark", "#1f2430", "#1f2430", "#e6e6e6", "#3a4050",
        ("#4DB6FF", "#3CF0B4", "#FFC74D", "#FF6F85", "#A08CFF", "#7986CB", "#90A4AE", "#F48FB1"),
    ),
}


def theme_from_cfg(name: Optional[str]) -> Theme:
    return THEMES.get(name or "light", THEMES["light"])


def template_name(theme: Theme) -> str:
    return f"{TEMPLATE_PREFIX}{theme.name}"


def colorway(theme: Theme, n: Optional[int] = None) -> List[str]:
    pal = list(theme.palette)
    if n is None:
        return pal
    return [pal[i % len(pal)] for i in range(max(n, 0))]


def default_template(theme: Theme, font_family: str = "inherit"):
    import plotly.graph_objects as go
    axis = dict(gridcolor=theme.grid_color, zerolinecolor=theme.grid_color, linecolor=theme.grid_color)
    return go.layout.Template(layout=dict(
        paper_bgcolor=theme.paper_bg,
        plot_bgcolor=theme.plot_bg,
        font=dict(color=theme.font_color, family=None if font_family == "inherit" else font_family),
        colorway=colorway(theme),
        xaxis=axis,
        yaxis=axis,
        polar=dict(bgcolor=theme.plot_bg, radialaxis=dict(gridcolor=theme.grid_color)),
    ))


def ensure_theme(font_family: str = "inherit") -> List[str]:
    """
    Register the package templates with plotly once per process.

    Presence in `plotly.io.templates` is the guard, so repeated calls (one per
    component) are no-ops. Returns the names that were newly registered.
    """
    import plotly.io as pio
    added = []
    for theme in THEMES.values():
        name = template_name(theme)
        if name in pio.templates:
            continue
        pio.templates[name] = default_template(theme, font_family)
        added.append(name)
    return added


def apply_theme(fig, theme: Theme, font_family: str = "inherit"):
    ensure_theme(font_family)
    fig.update_layout(template=template_name(theme))
    return fig
