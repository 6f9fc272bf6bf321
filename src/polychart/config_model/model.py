from __future__ import annotations
from typing import Literal, Optional
from pathlib import Path
import os
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

ENV_VAR = "POLYCHART_CFG"
DEFAULT_PATH = "config/config.toml"


# ---------- Leaf models ----------

class SchedulerCfg(BaseModel):
    update_delay_ms: int = 100

    @field_validator("update_delay_ms")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        return max(0, int(v))


class DefaultsCfg(BaseModel):
    """Fallbacks used when an attribute is absent or unparsable."""
    height: int = 350
    area_height: int = 400
    legend_position: str = "bottom"
    curve: str = "smooth"
    line_width: int = 3
    stroke_width: int = 2
    marker_size: int = 6
    border_radius: int = 4
    start_angle: int = 0
    end_angle: int = 360
    hollow_size: str = "50%"
    track_width: str = "97%"
    dash_length: int = 5
    radial_dash_length: int = 4
    x_title_offset_y: int = 2
    label_rotate_offset_y: int = 25
    responsive_breakpoint: int = 480
    responsive_height: int = 250


class FormattingCfg(BaseModel):
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _known_tz(cls, v: str) -> str:
        import pytz
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError:
            return "UTC"
        return v


class ThemeCfg(BaseModel):
    name: Literal["light", "dark"] = "light"
    font_family: str = "inherit"


class RendererCfg(BaseModel):
    backend: Literal["plotly"] = "plotly"
    include_plotlyjs: str = "cdn"


class LoggingCfg(BaseModel):
    level: str = "INFO"
    structured_json: bool = True


# ---------- Root ----------

class RootCfg(BaseModel):
    model_config = ConfigDict(extra="ignore")

    scheduler: SchedulerCfg = Field(default_factory=SchedulerCfg)
    defaults: DefaultsCfg = Field(default_factory=DefaultsCfg)
    formatting: FormattingCfg = Field(default_factory=FormattingCfg)
    theme: ThemeCfg = Field(default_factory=ThemeCfg)
    renderer: RendererCfg = Field(default_factory=RendererCfg)
    logging: LoggingCfg = Field(default_factory=LoggingCfg)

    # Private attribute (not a field); where the settings came from
    _source: Optional[Path] = PrivateAttr(default=None)

    @model_validator(mode="after")
    def _angles_ok(self):
        # a zero sweep renders nothing; fall back to the full circle
        if self.defaults.start_angle == self.defaults.end_angle:
            object.__setattr__(self.defaults, "end_angle", self.defaults.start_angle + 360)
        return self

    @property
    def source(self) -> Optional[Path]:
        return self._source

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str]) -> "RootCfg":
        try:
            import tomllib  # py>=3.11
        except ImportError:
            import tomli as tomllib

        p = Path(path)

        def _parse_raw_dict() -> dict:
            try:
                with p.open("rb") as f:
                    return tomllib.load(f)
            except tomllib.TOMLDecodeError:
                pass

            # Retry: strip BOM / zero-width chars and accidental code fences
            text = p.read_text(encoding="utf-8-sig", errors="replace")
            cleaned = text.strip()
            if cleaned.startswith("```"):
                cleaned = cleaned.lstrip("`").strip()
                if cleaned.endswith("```"):
                    cleaned = cleaned.rstrip("`").strip()
            cleaned = cleaned.lstrip("\ufeff\u200b\u200c\u200d\u2060")

            try:
                return tomllib.loads(cleaned)
            except tomllib.TOMLDecodeError as e:
                snippet = cleaned[:80].replace("\n", "\\n")
                raise RuntimeError(
                    f"Failed to parse TOML at {p} after BOM/cleanup. "
                    f"First chars: {snippet!r}"
                ) from e

        raw = _parse_raw_dict()
        for section in ("scheduler", "defaults", "formatting", "theme", "renderer", "logging"):
            raw.setdefault(section, {})

        cfg = cls(
            scheduler=SchedulerCfg(**raw["scheduler"]),
            defaults=DefaultsCfg(**raw["defaults"]),
            formatting=FormattingCfg(**raw["formatting"]),
            theme=ThemeCfg(**raw["theme"]),
            renderer=RendererCfg(**raw["renderer"]),
            logging=LoggingCfg(**raw["logging"]),
        )
        cfg._source = p.resolve()
        return cfg

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> "RootCfg":
        explicit = path or os.environ.get(ENV_VAR)
        final = Path(explicit or DEFAULT_PATH).resolve()
        if not final.exists():
            if explicit:
                raise FileNotFoundError(f"config file not found: {final}")
            return cls()
        return cls.from_toml(final)


def load_config(path: str | os.PathLike[str] | None = None) -> RootCfg:
    return RootCfg.load(path)
