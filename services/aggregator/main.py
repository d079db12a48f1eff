"""
Aggregator Service - Main Entry Point

This is the command-line interface for the aggregator service. It runs one
aggregated search across every configured provider and prints the resulting
records as JSON on stdout.

Usage:
    python -m services.aggregator.main [OPTIONS]

Options:
    --query TEXT            Free-text search query
    --location TEXT         Free-text location
    --type TEXT             Job type filter (full-time, part-time, remote, hybrid, contract, all)
    --filter TEXT           Accessibility filter id (repeatable, combined with AND)
    --limit INTEGER         Maximum number of records to print
    --sources-config PATH   Provider configuration (default: config/sources.yml)
    --settings PATH         Aggregator settings (default: config/aggregator.yml)
    --verbose               Enable debug logging
    --help                  Show this message and exit

Examples:
    # Remote data entry jobs with flexible hours:
    python -m services.aggregator.main --query "data entry" --type remote --filter flexible-hours

    # Everything near Austin, first 10 records, with debug logging:
    python -m services.aggregator.main --location "Austin, TX" --limit 10 --verbose

Exit Codes:
    0: Success (including an empty result)
    2: Fatal error (missing or invalid configuration)
    130: Interrupted
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from services.common.models import JOB_TYPES
from services.filters.tag_filters import FILTER_TAXONOMY

from .aggregator import JobAggregator, create_aggregator

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='Search job providers and print aggregated, filtered records',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument('--query', type=str, help='Free-text search query', default=None)

    parser.add_argument('--location', type=str, help='Free-text location', default=None)

    parser.add_argument(
        '--type',
        type=str,
        choices=[*JOB_TYPES, 'all'],
        help='Job type filter',
        default=None,
        dest='job_type'
    )

    parser.add_argument(
        '--filter',
        action='append',
        help=f'Accessibility filter id, repeatable (known: {", ".join(f.filter_id for f in FILTER_TAXONOMY)})',
        default=[],
        dest='tag_filters'
    )

    parser.add_argument(
        '--limit',
        type=int,
        help='Maximum number of records to print',
        default=None
    )

    parser.add_argument(
        '--sources-config',
        type=str,
        help='Path to the providers YAML file',
        default=None,
        dest='sources_config'
    )

    parser.add_argument(
        '--settings',
        type=str,
        help='Path to the aggregator settings YAML file',
        default=None
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args(argv)


async def run_search(aggregator: JobAggregator, args: argparse.Namespace) -> list[dict]:
    """
    Run one aggregated search and return JSON-ready records.

    Args:
        aggregator: Configured JobAggregator
        args: Parsed CLI arguments

    Returns:
        List of record dictionaries, truncated to --limit when given
    """
    records = await aggregator.get_aggregated_records(
        query=args.query,
        location=args.location,
        job_type=args.job_type,
        tag_filters=args.tag_filters,
    )

    for status in aggregator.last_statuses:
        logger.info(
            "Provider status",
            extra={
                'source': status.source,
                'status': status.status,
                'reason': status.reason,
                'latency_ms': status.latency_ms,
            }
        )

    if args.limit is not None:
        records = records[:max(args.limit, 0)]

    return [record.to_dict() for record in records]


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the aggregator service.

    Returns:
        Exit code (0 = success, 2 = fatal error, 130 = interrupted)
    """
    args = parse_args(argv)

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")

    try:
        aggregator = create_aggregator(args.sources_config, args.settings)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 2  # Fatal error - cannot proceed without configuration

    try:
        records = asyncio.run(run_search(aggregator, args))

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # Standard Unix exit code for SIGINT

    except Exception as e:
        logger.error(
            "Unexpected fatal error",
            extra={
                'error': str(e),
                'error_type': type(e).__name__,
            },
            exc_info=True
        )
        return 2  # Fatal error

    json.dump(records, sys.stdout, indent=2)
    sys.stdout.write("\n")

    logger.info(f"Printed {len(records)} job records")
    return 0


if __name__ == '__main__':
    sys.exit(main())
