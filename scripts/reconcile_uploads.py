#!/usr/bin/env python3
"""Reconcile uploaded image files with the database.

Image files are written before their rows commit, so a failed or crashed
create can leave a file nobody references. Run this periodically (cron) to:
- delete upload files with no property_images row,
- report properties whose type-detail rows don't match their declared type.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from database import get_session_context
from logging_config import setup_logging
from services.image_store import ORPHAN_MIN_AGE_SECONDS, ImageStore
from services.listing_query import ListingQueryEngine

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--dry-run", action="store_true", help="List orphaned files without deleting them")
    parser.add_argument(
        "--min-age",
        type=float,
        default=ORPHAN_MIN_AGE_SECONDS,
        help="Skip files younger than this many seconds (default: %(default)s)",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    with get_session_context() as db:
        orphans = ImageStore.sweep_orphan_files(db, dry_run=args.dry_run, min_age_seconds=args.min_age)
        anomalies = ListingQueryEngine.find_integrity_anomalies(db)

    action = "found" if args.dry_run else "removed"
    logger.info("%d orphaned upload(s) %s", len(orphans), action)
    logger.info("%d property integrity anomaly(ies)", len(anomalies))
    return 1 if anomalies else 0


if __name__ == "__main__":
    sys.exit(main())
