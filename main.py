#!/usr/bin/env python3
"""
Main script for running the airfoil lift analysis.
"""

# Pipeline overview:
# 1) Configure the sampling seed stream and canonical sample size.
# 2) Build each model's input distributions (Gaussian, uniform, empirical).
# 3) Propagate uncertainty through the Bernoulli and/or lift-equation model.
# 4) Decide the elevation trend on the mean of F_lift_adjusted.
# 5) Print the reports and export summary/sample CSVs and histogram figures.

import argparse
import logging
import os
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from aerolift.analysis import (
    MODELS,
    create_results_dataframe,
    print_report,
    run_model,
    summarize_trends,
)
from aerolift.errors import UncertaintyError
from aerolift.output import save_data_to_csv, save_samples_to_csv
from aerolift.plotting import plot_distributions
from aerolift.stats.sampling import DEFAULT_SAMPLE_SIZE, DEFAULT_SKIP_WARN_FRACTION, sampling

DEFAULT_OUTPUT_DIR = "output"


def _configure_logging(output_dir: str):
    """Send log records to stdout and ``<output_dir>/lift_analysis.log``."""
    os.makedirs(output_dir, exist_ok=True)
    handlers = [
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(os.path.join(output_dir, "lift_analysis.log"), mode="w"),
    ]
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    return handlers


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser."""
    parser = argparse.ArgumentParser(
        description="Estimate airfoil lift under input uncertainty."
    )
    parser.add_argument(
        "--model",
        choices=sorted(MODELS) + ["all"],
        default="all",
        help="Lift model to evaluate (default: all).",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLE_SIZE,
        help=f"Canonical Monte Carlo sample size (default: {DEFAULT_SAMPLE_SIZE}).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Root seed for reproducible sampling (default: OS entropy).",
    )
    parser.add_argument(
        "--skip-warn-fraction",
        type=float,
        default=DEFAULT_SKIP_WARN_FRACTION,
        help="Warn when more than this fraction of sample pairs is skipped.",
    )
    parser.add_argument(
        "--outdir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--plot", action="store_true", help="Write histogram figures."
    )
    parser.add_argument(
        "--no-csv", action="store_true", help="Skip CSV export."
    )
    return parser


def _run(args) -> int:
    start_time = time.time()
    logging.info("Initializing lift analysis pipeline")

    names = sorted(MODELS) if args.model == "all" else [args.model]
    logging.info(
        "Configured %d model(s) with %d samples (seed=%s)",
        len(names),
        args.samples,
        args.seed,
    )

    try:
        with sampling(
            sample_size=args.samples,
            seed=args.seed,
            skip_warn_fraction=args.skip_warn_fraction,
        ):
            results = []
            for name in names:
                step_start = time.time()
                results.append(run_model(name))
                logging.info(
                    "%s model evaluated in %.2f seconds", name, time.time() - step_start
                )

            for res in results:
                print()
                print_report(res)

            results_df = create_results_dataframe(results)
            trends_df = summarize_trends(results)
            logging.info("Results DataFrame shape: %s", results_df.shape)
            for _, row in trends_df.iterrows():
                logging.info(
                    "%s: %s (P(climb) = %.3f)", row["Model"], row["Trend"], row["P(climb)"]
                )

            written = []
            if not args.no_csv:
                written.append(save_data_to_csv(results_df, args.outdir))
                for res in results:
                    written.append(save_samples_to_csv(res, args.outdir))
            if args.plot:
                for res in results:
                    written.append(plot_distributions(res, args.outdir))
    except UncertaintyError as exc:
        logging.error("Lift analysis failed: %s", exc)
        return 1

    total_duration = time.time() - start_time
    logging.info("Total execution time: %.2f seconds", total_duration)
    logging.info("Analysis pipeline completed successfully")
    if written:
        logging.info("Generated output files:")
        for path in written:
            logging.info("  - %s", path)
    return 0


def main(argv=None):
    """Main execution function with technical logging."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    handlers = _configure_logging(args.outdir)
    try:
        return _run(args)
    finally:
        root = logging.getLogger()
        for handler in handlers:
            root.removeHandler(handler)
            handler.close()


if __name__ == "__main__":
    sys.exit(main())
