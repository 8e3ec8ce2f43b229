"""CLI entry point: asciiviz bar|dot|line <data-file> ... or Datawrapper commands."""

import argparse
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from asciiviz import fmt
from asciiviz.charts import log_bar_chart, log_dot_chart, log_line_chart
from asciiviz.datawrapper import (
    DEFAULT_KEY_ENV,
    publish_chart_dw,
    update_annotations_dw,
    update_data_dw,
    update_notes_dw,
)
from asciiviz.db import DataLayer
from asciiviz.errors import ChartError, ConfigurationError
from asciiviz.export import save_chart
from asciiviz.options import load_options


def _find_env() -> Path | None:
    """Walk up from CWD looking for .env."""
    current = Path.cwd()
    for _ in range(6):
        candidate = current / ".env"
        if candidate.exists():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


def _load_records(args) -> list[dict]:
    if args.sql:
        with DataLayer(args.db) as dl:
            return dl.query(args.sql)
    if not args.source:
        raise ConfigurationError("Pass a data file, or --sql (optionally with --db).")
    with DataLayer() as dl:
        return dl.read_file(args.source)


def _chart_options(args, chart_type: str, flags: dict) -> dict:
    """Merge the --config file with command-line flags; flags win."""
    options = load_options(args.config, chart_type) if args.config else {}
    options.update({k: v for k, v in flags.items() if v is not None})
    return options


# ── Subcommands ───────────────────────────────────────────────────


def _cmd_bar(args) -> None:
    options = _chart_options(
        args,
        "bar",
        {
            "width": args.width,
            "title": args.title,
            "total_label": args.total_label,
            "compact": True if args.compact else None,
        },
    )
    log_bar_chart(_load_records(args), args.label, args.value, **options)


def _cmd_plot(args) -> None:
    options = _chart_options(
        args,
        args.command,
        {
            "width": args.width,
            "height": args.height,
            "title": args.title,
            "small_multiples": args.small_multiples,
            "fixed_scales": True if args.fixed_scales else None,
            "small_multiples_per_row": args.per_row,
            "x_type": args.x_type,
        },
    )
    chart = log_line_chart if args.command == "line" else log_dot_chart
    chart(_load_records(args), args.x, args.y, **options)


def _cmd_publish(args) -> None:
    publish_chart_dw(args.chart_id, api_key=args.api_key_env)
    print(fmt.success(f"Published {args.chart_id}."), file=sys.stderr)


def _cmd_update_data(args) -> None:
    path = Path(args.file)
    data_format = args.format or ("json" if path.suffix.lower() == ".json" else "csv")
    update_data_dw(
        args.chart_id,
        path.read_text(encoding="utf-8"),
        format=data_format,
        api_key=args.api_key_env,
    )
    print(fmt.success(f"Updated data of {args.chart_id}."), file=sys.stderr)


def _cmd_update_notes(args) -> None:
    update_notes_dw(args.chart_id, args.note, api_key=args.api_key_env)
    print(fmt.success(f"Updated notes of {args.chart_id}."), file=sys.stderr)


def _cmd_update_annotations(args) -> None:
    path = Path(args.file)
    # YAML is a superset of JSON, so one loader covers both
    try:
        annotations = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid annotations file {path}: {e}") from e
    if not isinstance(annotations, list):
        raise ConfigurationError("Annotations file must contain a list of annotations.")
    update_annotations_dw(args.chart_id, annotations, api_key=args.api_key_env)
    print(fmt.success(f"Updated annotations of {args.chart_id}."), file=sys.stderr)


def _cmd_save(args) -> None:
    markup = Path(args.markup).read_text(encoding="utf-8")
    path = save_chart(markup, args.output, dark=args.dark, style=args.style)
    print(fmt.success(f"Saved {path}."), file=sys.stderr)


# ── Parser ────────────────────────────────────────────────────────


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("source", nargs="?", help="CSV, Parquet or JSON file to chart.")
    parser.add_argument("--db", help="DuckDB file to run --sql against (default: in-memory).")
    parser.add_argument("--sql", help="Query whose rows are charted instead of a file.")
    parser.add_argument("--config", help="YAML file with chart options.")
    parser.add_argument("--title")
    parser.add_argument("--width", type=int)


def _add_key_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--api-key-env",
        default=DEFAULT_KEY_ENV,
        help=f"Environment variable holding the API key (default: {DEFAULT_KEY_ENV}).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asciiviz",
        description="Draw bar, dot and line charts as text, and manage Datawrapper charts.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    bar = sub.add_parser("bar", help="Horizontal bar chart.")
    _add_source_args(bar)
    bar.add_argument("--label", required=True, help="Field holding bar labels.")
    bar.add_argument("--value", required=True, help="Field holding bar values.")
    bar.add_argument("--total-label", help="Print the sum of all values under this label.")
    bar.add_argument("--compact", action="store_true", help="No blank line between bars.")
    bar.set_defaults(func=_cmd_bar)

    for name, help_text in (("dot", "Dot chart."), ("line", "Line chart.")):
        plot = sub.add_parser(name, help=help_text)
        _add_source_args(plot)
        plot.add_argument("--x", required=True, help="Field for the horizontal axis.")
        plot.add_argument("--y", required=True, help="Field for the vertical axis.")
        plot.add_argument("--height", type=int)
        plot.add_argument("--x-type", choices=["number", "date"])
        plot.add_argument("--small-multiples", help="Field to split the data by.")
        plot.add_argument("--fixed-scales", action="store_true", help="Share axes across small multiples.")
        plot.add_argument("--per-row", type=int, help="Small multiples per row (default: 3).")
        plot.set_defaults(func=_cmd_plot)

    publish = sub.add_parser("publish", help="Publish a Datawrapper chart.")
    publish.add_argument("chart_id")
    _add_key_arg(publish)
    publish.set_defaults(func=_cmd_publish)

    data = sub.add_parser("update-data", help="Upload CSV or JSON data to a Datawrapper chart.")
    data.add_argument("chart_id")
    data.add_argument("file", help="CSV or JSON file to upload.")
    data.add_argument(
        "--format",
        choices=["csv", "json"],
        help="Payload format (default: json for .json files, csv otherwise).",
    )
    _add_key_arg(data)
    data.set_defaults(func=_cmd_update_data)

    notes = sub.add_parser("update-notes", help="Set the notes of a Datawrapper chart.")
    notes.add_argument("chart_id")
    notes.add_argument("note")
    _add_key_arg(notes)
    notes.set_defaults(func=_cmd_update_notes)

    annotations = sub.add_parser("update-annotations", help="Replace a chart's text annotations.")
    annotations.add_argument("chart_id")
    annotations.add_argument("file", help="JSON or YAML list of annotations.")
    _add_key_arg(annotations)
    annotations.set_defaults(func=_cmd_update_annotations)

    save = sub.add_parser("save", help="Save SVG/HTML chart markup as .png, .jpeg or .svg.")
    save.add_argument("markup", help="File holding the chart markup.")
    save.add_argument("output")
    save.add_argument("--dark", action="store_true")
    save.add_argument("--style", help="Extra CSS for the rendered page.")
    save.set_defaults(func=_cmd_save)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # --- load .env from project root ---
    env_path = _find_env()
    if env_path:
        load_dotenv(env_path)

    try:
        args.func(args)
    except (ChartError, OSError) as e:
        print(fmt.error(str(e)), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
