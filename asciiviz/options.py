"""Load chart options from a YAML file.

A config file is a flat mapping of option names to values::

    title: Daily visits
    width: 80
    small_multiples: site
    fixed_scales: true

Formatter callbacks can only be passed from Python.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml

from asciiviz.errors import ConfigurationError

ChartType = Literal["bar", "dot", "line"]

_COMMON = {"width", "title"}
_BAR = _COMMON | {"total_label", "compact"}
_PLOT = _COMMON | {
    "height",
    "small_multiples",
    "fixed_scales",
    "small_multiples_per_row",
    "x_type",
}

OPTION_KEYS: dict[str, frozenset[str]] = {
    "bar": frozenset(_BAR),
    "dot": frozenset(_PLOT),
    "line": frozenset(_PLOT),
}


def load_options(path: str | Path, chart_type: ChartType) -> dict[str, Any]:
    """Read *path* and return keyword arguments for a ``log_*_chart`` call."""
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    return validate_options(raw or {}, chart_type)


def validate_options(raw: Any, chart_type: ChartType) -> dict[str, Any]:
    if chart_type not in OPTION_KEYS:
        raise ConfigurationError(f"Unknown chart type {chart_type!r}.")
    if not isinstance(raw, dict):
        raise ConfigurationError("Chart options must be a mapping of option names to values.")

    allowed = OPTION_KEYS[chart_type]
    unknown = sorted(str(k) for k in raw if k not in allowed)
    if unknown:
        raise ConfigurationError(
            f"Option(s) {', '.join(unknown)} not valid for a {chart_type} chart "
            f"(allowed: {', '.join(sorted(allowed))})."
        )
    return dict(raw)
