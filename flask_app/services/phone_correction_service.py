# flask_app/services/phone_correction_service.py
"""
Persist phone corrections discovered while reading volunteer records.
"""

from dataclasses import dataclass
from typing import Tuple

from flask import current_app
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from flask_app.models import User, db
from flask_app.volunteer_stats.phone import pending_correction


def apply_phone_correction(user_id, old_phone, new_phone):
    """
    Rewrite a user's stored phone from ``old_phone`` to its canonical form.

    The write is a single conditional UPDATE, so it only lands while the row
    still holds ``old_phone``; an edit made in the meantime is left alone. A
    row that already holds ``new_phone`` counts as corrected, so repeated or
    concurrent corrections are harmless. Database failures are logged and
    reported as False, never raised.
    """
    statement = (
        update(User)
        .where(User.id == user_id, User.phone == old_phone)
        .values(phone=new_phone)
        .execution_options(synchronize_session=False)
    )
    try:
        rows_updated = db.session.execute(statement).rowcount
        if rows_updated:
            db.session.commit()
            current_app.logger.info(f"Phone number {old_phone} corrected to {new_phone}.")
            return True

        stored = db.session.execute(select(User.phone).where(User.id == user_id)).first()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error correcting phone number for user {user_id}: {str(e)}")
        return False

    if stored is None:
        current_app.logger.warning(f"Phone correction skipped: user {user_id} not found")
        return False

    if stored.phone == new_phone:
        return True

    current_app.logger.info(
        f"Phone correction skipped for user {user_id}: stored value changed since it was read"
    )
    return False


@dataclass(frozen=True)
class PhoneHealSummary:
    """Outcome of a bulk phone correction pass"""

    rows_considered: int
    rows_corrected: int
    rows_failed: int
    dry_run: bool
    corrections: Tuple[Tuple[int, str, str], ...] = ()


def heal_stored_phones(dry_run=False):
    """
    Correct every stored phone that matches the U.S. pattern but is not yet
    canonical, without waiting for the records to be read.
    """
    users = User.query.filter(User.phone.isnot(None), User.phone != "").order_by(User.id).all()

    rows_corrected = 0
    rows_failed = 0
    corrections = []
    for user in users:
        canonical = pending_correction(user.phone)
        if canonical is None:
            continue
        corrections.append((user.id, user.phone, canonical))
        if dry_run:
            continue
        if apply_phone_correction(user.id, user.phone, canonical):
            rows_corrected += 1
        else:
            rows_failed += 1

    summary = PhoneHealSummary(
        rows_considered=len(users),
        rows_corrected=rows_corrected,
        rows_failed=rows_failed,
        dry_run=dry_run,
        corrections=tuple(corrections),
    )
    current_app.logger.info(
        "Stored phone correction pass finished",
        extra={
            "rows_considered": summary.rows_considered,
            "rows_corrected": summary.rows_corrected,
            "rows_failed": summary.rows_failed,
            "dry_run": dry_run,
        },
    )
    return summary
