"""Utility script to generate the daily statistics rollup for one day."""

from __future__ import annotations

import argparse
from datetime import date, timedelta

from sqlalchemy.exc import SQLAlchemyError

from kickstart.application.use_cases.statistics import generate_daily_statistics
from kickstart.infrastructure.database import SessionLocal, initialize_database
from kickstart.utils import now_in_app_timezone


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the rollup run."""

    parser = argparse.ArgumentParser(
        description="Generate the daily statistics rollup for the Kickstart API.",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Day to aggregate as YYYY-MM-DD (default: yesterday)",
    )
    parser.add_argument(
        "--user-id",
        type=int,
        default=None,
        help="Id recorded as the user who triggered the run (optional)",
    )
    return parser.parse_args()


def main() -> None:
    """Generate statistics using the provided command line arguments."""

    args = parse_args()
    day = args.date or (now_in_app_timezone().date() - timedelta(days=1))

    initialize_database()

    session = SessionLocal()
    try:
        statistics = generate_daily_statistics(session, day, triggered_by=args.user_id)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the statistics: {exc}") from exc
    else:
        print(
            f"Statistics for {statistics.date.isoformat()}:\n"
            f"  User registrations: {statistics.user_registrations}\n"
            f"  Emails sent: {statistics.emails_sent}\n"
            f"  Login attempts: {statistics.login_attempts}\n"
            f"  Tasks executed: {statistics.tasks_executed}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
