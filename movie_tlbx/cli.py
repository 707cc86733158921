"""Command line entry point: ``movie-report``.

Loads the movies table, runs :func:`movie_tlbx.report.run_report`, prints the
text summary, and optionally writes the figures.
"""

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from movie_tlbx.config import ReportConfig
from movie_tlbx.data.movie_dataset import MoviesDataset
from movie_tlbx.errors import MovieToolboxError
from movie_tlbx.report import run_report


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = ReportConfig()
    p = argparse.ArgumentParser(prog="movie-report", description="Movie rating comparison and regression report")
    p.add_argument("--csv", type=Path, default=None, help="Movies CSV (defaults to movies.csv in the data directory)")
    p.add_argument("--out", type=Path, default=None, help="Directory for figures (no figures when omitted)")
    p.add_argument("--text", type=Path, default=None, help="Also write the text summary to this file")
    p.add_argument("--alpha", type=float, default=defaults.alpha, help="Significance level of the rating comparison")
    p.add_argument("--level", type=float, default=defaults.level, help="Confidence level of the prediction interval")
    p.add_argument("--scale", type=float, default=defaults.scale, help="IMDb rating multiplier")
    p.add_argument("--criterion", choices=["aic", "bic"], default=defaults.criterion)
    p.add_argument("--direction", choices=["backward", "forward", "both"], default=defaults.direction)
    p.add_argument(
        "--on-collinear",
        choices=["raise", "drop"],
        default=defaults.on_collinear,
        help="Raise on linearly dependent columns or drop them before selection",
    )
    p.add_argument(
        "--na-indicator",
        action="store_true",
        help="Encode missing categorical values as their own level instead of dropping the row",
    )
    p.add_argument("--n-jobs", type=int, default=defaults.n_jobs, help="Parallel workers for candidate fits")
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return p


def main(argv: Iterable[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ReportConfig(
            scale=args.scale,
            alpha=args.alpha,
            level=args.level,
            criterion=args.criterion,
            direction=args.direction,
            on_collinear=args.on_collinear,
            na_indicator=args.na_indicator,
            n_jobs=args.n_jobs,
        )
        dataset = MoviesDataset.from_csv(csv_path=args.csv)
        report = run_report(dataset, config)
    except (MovieToolboxError, FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)  # noqa: TRY400
        return 1

    text = report.to_text()
    sys.stdout.write(text)
    if args.text is not None:
        args.text.parent.mkdir(parents=True, exist_ok=True)
        args.text.write_text(text, encoding="utf-8")
    if args.out is not None:
        report.save_figures(args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
