#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from web_traffic_forecasting.config import ProjectConfig
from web_traffic_forecasting.pipeline import run_pipeline


def main() -> None:
    ap = argparse.ArgumentParser(description='Cap spikes, fit Prophet, cross-validate, forecast and write results.')
    ap.add_argument('--data', type=str, default=str(ProjectConfig().data_path), help='Input CSV with Date, Clicks columns.')
    ap.add_argument('--out', type=str, default=str(ProjectConfig().forecast_out_path), help='Output CSV (ds, yhat, yhat_lower, yhat_upper).')
    ap.add_argument('--fig-dir', type=str, default=str(ProjectConfig().fig_dir))
    ap.add_argument('--test-days', type=int, default=ProjectConfig().test_days)
    ap.add_argument('--periods', type=int, default=ProjectConfig().forecast_periods, help='Days to forecast past the training data.')
    ap.add_argument('--png', action='store_true', help='Also write PNG figures (requires kaleido).')
    ap.add_argument('--no-figures', action='store_true')
    ap.add_argument('--log-level', type=str.upper, default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    args = ap.parse_args()

    console = Console()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(message)s',
        handlers=[RichHandler(console=console, show_path=False)],
    )
    logging.getLogger('cmdstanpy').setLevel(logging.WARNING)

    cfg = ProjectConfig(
        data_path=Path(args.data),
        forecast_out_path=Path(args.out),
        fig_dir=Path(args.fig_dir),
        test_days=args.test_days,
        forecast_periods=args.periods,
        save_png=args.png,
    )

    try:
        result = run_pipeline(cfg, make_figures=not args.no_figures, console=console)
    except (FileNotFoundError, ValueError) as e:
        raise SystemExit(str(e))

    for p in result.written:
        console.print(' -', p)
    console.print('[green]✓[/green] Script completed successfully.')


if __name__ == '__main__':
    main()
