"""
CLI commands for volunteer derived values (``flask volunteers ...``).
"""

from __future__ import annotations

import json

import click
from flask import current_app
from flask.cli import with_appcontext

from flask_app.models import User, db
from flask_app.services.phone_correction_service import heal_stored_phones
from flask_app.services.volunteer_profile_service import VolunteerProfileService


@click.group(name="volunteers")
def volunteers_cli():
    """Volunteer ranking and data maintenance commands."""


@volunteers_cli.command("rank")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum volunteers to list.")
@with_appcontext
def rank_command(limit: int | None):
    """Print volunteers ordered by outreach priority as JSON."""
    if limit is None:
        limit = current_app.config.get("VOLUNTEER_RANKING_DEFAULT_LIMIT", 25)
    ranked = VolunteerProfileService.rank_volunteers(limit=limit)
    click.echo(json.dumps([entry.as_dict() for entry in ranked], indent=2))


@volunteers_cli.command("heal-phones")
@click.option("--dry-run", is_flag=True, help="List corrections without writing them.")
@with_appcontext
def heal_phones_command(dry_run: bool):
    """Rewrite every legacy-formatted stored phone in canonical form."""
    summary = heal_stored_phones(dry_run=dry_run)
    for user_id, old_phone, new_phone in summary.corrections:
        click.echo(f"user {user_id}: {old_phone!r} -> {new_phone!r}")
    verb = "would correct" if dry_run else "corrected"
    count = len(summary.corrections) if dry_run else summary.rows_corrected
    click.echo(f"{summary.rows_considered} phones checked, {verb} {count}, {summary.rows_failed} failed.")
    if summary.rows_failed:
        raise click.ClickException(f"{summary.rows_failed} phone corrections failed; see logs.")


@volunteers_cli.command("hours")
@click.argument("user_id", type=int)
@with_appcontext
def hours_command(user_id: int):
    """Print a volunteer's verified session hours."""
    user = db.session.get(User, user_id)
    if user is None:
        raise click.ClickException(f"User {user_id} not found.")
    if not user.is_volunteer:
        raise click.ClickException(f"User {user_id} is not a volunteer.")
    hours = VolunteerProfileService.verified_hours(user)
    click.echo("unknown" if hours is None else f"{hours:.2f}")


def init_cli(app):
    """Register CLI command groups on the app"""
    # Avoid duplicate registrations when running tests
    if volunteers_cli.name in app.cli.commands:
        app.cli.commands.pop(volunteers_cli.name)
    app.cli.add_command(volunteers_cli)
