# scripts/run_rent_automation.py
"""
Daily rent automation job.

Marks past-due charges overdue, sends rent reminders and applies late
fees for every landlord. Schedule it once a day (cron, Azure WebJob):

    python -m scripts.run_rent_automation
    python -m scripts.run_rent_automation --date 2026-03-05
"""
import argparse
import logging
import sys
from datetime import date

from config import config
from database import get_session_context
from services.rent_automation_service import RentAutomationService

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the daily rent automation job")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Run as if today were this date (YYYY-MM-DD)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    args = parse_args(argv)
    try:
        with get_session_context() as db:
            summary = RentAutomationService.run_daily(db, today=args.date)
    except Exception:
        logger.exception("Rent automation run failed")
        return 1
    logger.info("Rent automation finished: %s", summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
