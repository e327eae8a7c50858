"""
utils/time_utils.py

Purpose: Date helpers

- Submission date of a transaction
"""

from datetime import date, datetime, timezone


def submission_date() -> date:
    """
    Returns the date stamped on a transaction submitted now (UTC calendar day).
    """
    return datetime.now(timezone.utc).date()
