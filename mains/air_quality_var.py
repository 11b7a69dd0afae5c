"""
VAR analysis of a daily air-quality series.

This script:
1. Reads a prepared daily CSV (date column first, numeric columns after, no gaps)
2. Holds out the last --horizon days
3. Runs Granger causality tests in both directions
4. Selects the lag order by information criteria
5. Fits the VAR, forecasts the held-out days and reports the MAE

Usage:
    python -m mains.air_quality_var data/processed/daily.csv --vars pm25 dewp --lag-max 10
"""

import sys
import logging
import argparse
from pathlib import Path

import pandas as pd
from colorama import init, Fore, Style

from varcast import Options, run_analysis
from varcast.utils import table_print

# Initialize colorama for colored console output
init(autoreset=True)


def load_daily_series(data_path: Path) -> pd.DataFrame:
    """Read a prepared daily series indexed by date."""
    df = pd.read_csv(data_path, index_col=0, parse_dates=True)
    df.index.name = 'date'
    if isinstance(df.index, pd.DatetimeIndex) and len(df) > 2:
        freq = pd.infer_freq(df.index)
        if freq is not None:
            # Gap-free input keeps every row
            df = df.asfreq(freq)
    return df


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='VAR lag selection, forecast and evaluation.')

    parser.add_argument('data_path', type=str, help='Prepared daily CSV file')
    parser.add_argument('--vars', nargs='+', default=None, help='Columns to model (default: all)')
    parser.add_argument('--lag-max', type=int, default=10, help='Largest lag order to test')
    parser.add_argument('--season', type=int, default=None, help='Seasonal period for dummy regressors')
    parser.add_argument('--ic', choices=['aic', 'hq', 'sc', 'fpe'], default='aic',
                        help='Criterion that picks the lag order')
    parser.add_argument('--horizon', type=int, default=14, help='Held-out days to forecast')
    parser.add_argument('--ci', type=float, default=0.95, help='Coverage of the interval forecasts')
    parser.add_argument('--causality-lag', type=int, default=2, help='Lag order of the Granger tests')
    parser.add_argument('--alpha', type=float, default=0.05, help='Significance level of the Granger tests')
    parser.add_argument('--log-level', default='WARNING', help='Logging level')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s:%(name)s:%(message)s")

    options = Options(
        lag_max=args.lag_max,
        season=args.season,
        ic=args.ic,
        horizon=args.horizon,
        ci=args.ci,
        causality_lag=args.causality_lag,
        alpha=args.alpha,
        vnames=args.vars,
    )

    print(f"{Fore.CYAN}Loading data from {args.data_path}...{Style.RESET_ALL}")
    data = load_daily_series(Path(args.data_path))
    print(f"Date range: {data.index.min()} to {data.index.max()}, {len(data)} observations")

    try:
        report = run_analysis(data, options)
    except ValueError as e:
        print(f"{Fore.RED}Analysis failed: {e}{Style.RESET_ALL}")
        return 1

    print(f"\n{Fore.CYAN}Granger causality (lag {options.causality_lag}){Style.RESET_ALL}")
    for row in report.causality.itertuples():
        colour = Fore.GREEN if row.rejects else Fore.YELLOW
        verdict = 'predictive' if row.rejects else 'no evidence'
        print(f"{colour}  {row.cause} -> {row.effect}: F={row.fstat:.3f}, p={row.pvalue:.4f} ({verdict}){Style.RESET_ALL}")

    print(f"\n{Fore.CYAN}Lag selection{Style.RESET_ALL}")
    print(report.selection)
    print(f"{Fore.GREEN}Using VAR({report.nlag}) chosen by {options.ic}{Style.RESET_ALL}")

    print(f"\n{Fore.CYAN}Estimation{Style.RESET_ALL}")
    print(report.model.summary())

    print(f"\n{Fore.CYAN}Forecast ({options.horizon} steps, {options.ci:.0%} intervals){Style.RESET_ALL}")
    fcst = report.forecast.to_frame()
    fcst.columns = [f"{var}:{kind}" for var, kind in fcst.columns]
    print(table_print(fcst, row_names=[str(i) for i in report.test.index]))

    print(f"\n{Fore.CYAN}Mean absolute error{Style.RESET_ALL}")
    for name, value in report.mae.items():
        print(f"{Fore.GREEN}  {name}: {value:.4f}{Style.RESET_ALL}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
