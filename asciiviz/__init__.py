"""Plain-text bar, dot and line charts for terminals and logs."""

from asciiviz.charts import log_bar_chart, log_dot_chart, log_line_chart
from asciiviz.datawrapper import (
    publish_chart_dw,
    update_annotations_dw,
    update_data_dw,
    update_notes_dw,
)
from asciiviz.errors import (
    AuthError,
    ChartError,
    ConfigurationError,
    InvalidDataError,
    NetworkError,
    RemoteError,
)
from asciiviz.export import save_chart

__all__ = [
    "AuthError",
    "ChartError",
    "ConfigurationError",
    "InvalidDataError",
    "NetworkError",
    "RemoteError",
    "log_bar_chart",
    "log_dot_chart",
    "log_line_chart",
    "publish_chart_dw",
    "save_chart",
    "update_annotations_dw",
    "update_data_dw",
    "update_notes_dw",
]
