"""Utility script to redeliver failed email notifications."""

from __future__ import annotations

import argparse
from datetime import timedelta

from kickstart.application.use_cases.emails import retry_failed_emails
from kickstart.domain.entities import EmailStatus
from kickstart.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Retry email notifications whose last delivery failed.",
    )
    parser.add_argument(
        "--older-than-minutes",
        type=int,
        default=None,
        help="Only retry emails created at least this many minutes ago "
        "(default: EMAIL_RETRY_AFTER_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    older_than = (
        timedelta(minutes=args.older_than_minutes)
        if args.older_than_minutes is not None
        else None
    )

    initialize_database()

    session = SessionLocal()
    try:
        results = retry_failed_emails(session, older_than=older_than)
    finally:
        session.close()

    sent = sum(1 for item in results if item.status is EmailStatus.SENT)
    print(f"Retried {len(results)} email(s): {sent} sent, {len(results) - sent} failed")


if __name__ == "__main__":
    main()
