"""
Fluency Ratings Analytics

CLI entry point for building an analytics report from a ratings snapshot.
"""

import argparse
import logging
import sys
from datetime import date

from src.orchestrator import AnalyticsOrchestrator
from src.models.analytics import AggregationWindow, ReferenceMonth
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fluency Ratings Analytics - trends, distributions and activity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Admin view of everything rated in the last 30 days
  python main.py --ratings data/ratings.json --window 30d

  # One rater's history, heatmap ending March 2025
  python main.py --ratings data/ratings.json --user-id 42 \\
                 --window all --reference-month 2025-03

  # Include a highlighted rating in the report
  python main.py --window 90d --selected-rating 9f1c...

Note: --ratings defaults to $RATINGS_SNAPSHOT or data/ratings.json.
        """
    )

    parser.add_argument(
        "--ratings",
        default=settings.RATINGS_SNAPSHOT_PATH,
        help="Ratings snapshot JSON (list of rows from the ratings table)"
    )

    parser.add_argument(
        "--window",
        default=settings.DEFAULT_WINDOW,
        choices=[w.value for w in AggregationWindow],
        help=f"Trailing time window (default: {settings.DEFAULT_WINDOW})"
    )

    parser.add_argument(
        "--reference-month",
        help="Heatmap reference month (YYYY-MM). Defaults to the current month"
    )

    parser.add_argument(
        "--user-id",
        help="Only include ratings by this rater (default: all raters)"
    )

    parser.add_argument(
        "--selected-rating",
        help="Rating id to include as the highlighted rating"
    )

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Data directory (default: {settings.DATA_ROOT})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        window = AggregationWindow.parse(args.window)
        if args.reference_month:
            reference_month = ReferenceMonth.parse(args.reference_month)
        else:
            reference_month = ReferenceMonth.from_date(date.today())
    except ValueError as e:
        logger.error(str(e))
        sys.exit(2)

    print("=" * 60)
    print("Fluency Ratings Analytics")
    print("=" * 60)
    print(f"Snapshot: {args.ratings}")
    print(f"Window: {window.value}")
    print(f"Reference month: {reference_month.label}")
    print(f"Scope: {'user ' + args.user_id if args.user_id else 'all raters'}")
    print("=" * 60)
    print()

    try:
        orchestrator = AnalyticsOrchestrator(
            data_root=args.data_root,
            output_dir=args.output_dir
        )

        report_path = orchestrator.run(
            snapshot_path=args.ratings,
            window=window,
            reference_month=reference_month,
            user_id=args.user_id,
            selected_rating_id=args.selected_rating
        )

        print()
        print("=" * 60)
        print("✅ Report generated")
        print("=" * 60)
        print(f"Report: {report_path}")
        print(f"Trend CSV: {report_path.replace('.json', '_trend.csv')}")
        print(f"Activity CSV: {report_path.replace('.json', '_activity.csv')}")
        print("=" * 60)

        logger.info("Analytics report completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\n⚠️  Interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Report failed: {e}", exc_info=True)
        print(f"\n❌ Report failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()


# Design Rationale and Trade-offs:
#
# 1. Why exit code 2 for bad --window / --reference-month values?
#    - Matches argparse usage errors; 1 is reserved for failed runs
#
# 2. Why log to both stdout and file?
#    - stdout: Progress during the run
#    - file: Details after a failure
#    - Trade-off: Double I/O, but logs are small
