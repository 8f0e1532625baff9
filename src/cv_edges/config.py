from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from cv_edges.errors import InvalidArgument
from cv_edges.features.blur import parse_combine
from cv_edges.features.threshold import validate_ratios


@dataclass(frozen=True, slots=True)
class CannyConfig:
    blur: bool = True
    kernel_size: int = 5
    min_ratio: float = 0.2
    max_ratio: float = 0.6
    blur_combine: str = "separable"

    def validate(self) -> CannyConfig:
        if self.kernel_size < 1 or self.kernel_size % 2 == 0:
            raise InvalidArgument(f"kernel_size must be a positive odd number, got {self.kernel_size}.")
        validate_ratios(self.min_ratio, self.max_ratio)
        parse_combine(self.blur_combine)
        return self

    def override(self, **values) -> CannyConfig:
        """Copy with the given fields replaced; ``None`` values are ignored."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})


def default_config_path() -> Path:
    root = Path(__file__).resolve().parents[2]
    return root / "configs" / "canny.default.yaml"


def _coerce(name: str, value, default):
    # bool is an int subclass; keep the two apart.
    if isinstance(default, bool):
        ok = isinstance(value, bool)
    elif isinstance(default, int):
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif isinstance(default, float):
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        value = float(value) if ok else value
    else:
        ok = isinstance(value, type(default))
    if not ok:
        raise InvalidArgument(
            f"Config key {name!r} must be {type(default).__name__}, got {type(value).__name__} ({value!r})."
        )
    return value


def load_canny_config(path: str | Path | None = None) -> CannyConfig:
    """Defaults overlaid with the keys of a YAML file. Unknown keys are ignored."""
    config = CannyConfig()
    p = Path(path) if path is not None else default_config_path()
    if not p.exists():
        return config

    with p.open("r", encoding="utf-8") as f:
        try:
            payload = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InvalidArgument(f"Config file {p} is not valid YAML: {exc}") from exc
    if not isinstance(payload, dict):
        raise InvalidArgument(f"Config file {p} must hold a mapping, got {type(payload).__name__}.")

    values = {}
    for fld in fields(CannyConfig):
        if fld.name in payload:
            values[fld.name] = _coerce(fld.name, payload[fld.name], getattr(config, fld.name))
    return replace(config, **values)
