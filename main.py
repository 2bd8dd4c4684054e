from __future__ import annotations

import argparse
import logging
from pathlib import Path

from livechart_core import ChartConfig, ChartConfigError, load_chart_config
from livechart_core.app import LiveChartApp
from livechart_plot.series import CHART_TYPES
from livechart_ui.style.theme import THEMES


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="livechart")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run the live chart headless on a real-time tick loop.")
    _add_chart_arguments(run)
    run.add_argument("--ticks", type=int, default=20, help="Number of ticks before exiting. Default: 20.")
    run.add_argument("--export", type=Path, default=None, help="Write the final chart canvas to this PNG.")

    export = sub.add_parser("export", help="Render ticks back to back (no waiting) and write a PNG.")
    _add_chart_arguments(export)
    export.add_argument("--ticks", type=int, default=50)
    export.add_argument("output", type=Path, nargs="?", default=Path("chart.png"))

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _resolve_config(args)
    except ChartConfigError as exc:
        parser.error(str(exc))
    if args.ticks <= 0:
        parser.error("--ticks must be > 0")

    app = LiveChartApp(config)
    if args.command == "run":
        ticks = app.run(max_ticks=args.ticks)
        if args.export is not None:
            app.export(args.export)
    elif args.command == "export":
        app.step(args.ticks)
        app.export(args.output)
        ticks = args.ticks
    else:
        raise RuntimeError(f"unsupported command: {args.command}")

    print(
        f"run complete: ticks={ticks} samples={app.session.ticks} "
        f"frames={app.matrix.revision} type={app.session.render_options.chart_type} theme={app.session.theme.name}"
    )
    if app.stats_panel.lines:
        print(app.stats_panel.text)
    return 0


def _add_chart_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, default=None, help="TOML file with chart settings.")
    parser.add_argument("--width", type=int, default=None, help="Window width including the sidebar.")
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--interval-ms", type=float, default=None)
    parser.add_argument("--chart-type", choices=list(CHART_TYPES), default=None)
    parser.add_argument("--theme", choices=sorted(THEMES), default=None)
    parser.add_argument("--grid", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--smooth", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--min", dest="value_min", type=float, default=None)
    parser.add_argument("--max", dest="value_max", type=float, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"], default="info")


def _resolve_config(args: argparse.Namespace) -> ChartConfig:
    return load_chart_config(
        args.config,
        overrides={
            "width": args.width,
            "height": args.height,
            "interval_ms": args.interval_ms,
            "chart_type": args.chart_type,
            "theme": args.theme,
            "grid": args.grid,
            "smoothing": args.smooth,
            "value_min": args.value_min,
            "value_max": args.value_max,
            "seed": args.seed,
        },
    )


if __name__ == "__main__":
    raise SystemExit(main())
