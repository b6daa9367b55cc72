# app/utils/rollover.py
"""
Month rollover reconciliation.

UserSettings keeps the last period the user was seen in. When a
reconciliation runs in a later month, the previous period is flagged for a
month-end report and the marker moves forward. Nothing is archived or
deleted: expenses and bill payments are already keyed by date/period.
"""
import logging
from datetime import date
from typing import Any, Optional

from app.utils.periods import period_key

logger = logging.getLogger(__name__)


def reconcile_month_rollover(user_settings: Any, today: date) -> Optional[str]:
    """
    Advance ``user_settings.last_seen_period`` to today's period.

    Returns the period that just closed, or None when still in the same month
    or on the very first reconciliation.
    """
    current = period_key(today)
    last_seen = user_settings.last_seen_period
    closed = None

    if last_seen and last_seen > current:
        # Clock went backwards; keep the later marker
        return None

    if last_seen and last_seen != current:
        closed = last_seen
        user_settings.month_end_report_period = closed
        logger.info(f"Month rollover for user {user_settings.user_id}: {closed} -> {current}")

    user_settings.last_seen_period = current
    return closed
