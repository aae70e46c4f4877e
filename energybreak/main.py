#!/usr/bin/env python3
"""
Main entry point for the energybreak package.

Supports two methods: E-Divisive changepoint detection and bootstrap impact
estimation.
"""

import argparse
import sys
import logging
from pathlib import Path
from typing import List, Optional

from .methods import METHODS
from .methods.base import CommonConfig
from .config import SIGNIFICANCE, PERMUTATIONS, MIN_SIZE, ITERATIONS, HALF_WINDOW


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="energybreak - changepoint and impact detection")

    # Method selection
    parser.add_argument('--method', '-m', type=str, default='edivisive',
                        choices=sorted(METHODS),
                        help='Detection method to use')

    # Input/Output paths
    parser.add_argument('--input', '-i', type=str,
                        default=CommonConfig.DEFAULT_INPUT_PATH,
                        help='Input parquet (or .csv) file path')
    parser.add_argument('--output-pred', '-op', type=str,
                        default=CommonConfig.DEFAULT_OUTPUT_PRED_PATH,
                        help='Output predictors file path')
    parser.add_argument('--output-meta', '-om', type=str,
                        default=CommonConfig.DEFAULT_OUTPUT_META_PATH,
                        help='Output metadata file path')

    # Common parameters
    parser.add_argument('--n-jobs', '-j', type=int, default=None,
                        help='Number of parallel jobs')
    parser.add_argument('--seed', '-s', type=int, default=CommonConfig.SEED,
                        help='Random seed')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose logging')
    parser.add_argument('--validate-only', action='store_true',
                        help='Validate config and exit')

    # E-Divisive parameters
    parser.add_argument('--significance', type=float, default=SIGNIFICANCE,
                        help='Significance level for accepting a changepoint (edivisive)')
    parser.add_argument('--permutations', '-R', type=int, default=PERMUTATIONS,
                        help='Permutations per significance test (edivisive)')
    parser.add_argument('--min-size', type=int, default=MIN_SIZE,
                        help='Minimum observations between changepoints (edivisive)')

    # Impact parameters
    parser.add_argument('--iterations', '-n', type=int, default=ITERATIONS,
                        help='Simulated random walks per series (impact)')
    parser.add_argument('--half-window', type=int, default=HALF_WINDOW,
                        help='Moving-average points on either side (impact)')

    return parser.parse_args(argv)


def get_method_config(args: argparse.Namespace) -> dict:
    """Get method-specific configuration from arguments."""
    config = {
        'seed': args.seed,
        'n_jobs': args.n_jobs or CommonConfig.N_JOBS
    }

    if args.method == 'edivisive':
        config.update({
            'significance': args.significance,
            'permutations': args.permutations,
            'min_size': args.min_size
        })
    elif args.method == 'impact':
        config.update({
            'iterations': args.iterations,
            'half_window': args.half_window
        })

    return config


def run_batch_processing(args: argparse.Namespace) -> int:
    """Run batch processing with selected method."""
    logger = logging.getLogger(__name__)

    config = get_method_config(args)
    CommonConfig.validate_common_config(config)
    method = METHODS[args.method](config)

    # Validate configuration
    method.validate_config()
    if args.validate_only:
        logger.info("Validation only - exiting")
        return 0

    # Check input file
    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file does not exist: {input_path}")
        return 1

    logger.info(f"Running {args.method} method with config: {config}")

    from .batch_processor import run_batch, get_processing_summary
    try:
        pred_df, meta_df = run_batch(
            input_path=str(input_path),
            out_pred_path=args.output_pred,
            out_meta_path=args.output_meta,
            method=args.method,
            config=config,
            n_jobs=config['n_jobs'],
            verbose=True
        )

        summary = get_processing_summary(pred_df, meta_df)
        logger.info(f"Processed {summary['n_series']} series")
        logger.info(f"Success: {summary['n_successful']}, Failed: {summary['n_failed']}")

        return 0

    except Exception as e:
        logger.error(f"Error during batch processing: {e}")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        logger.info(f"Starting detection with {args.method} method")
        return run_batch_processing(args)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
