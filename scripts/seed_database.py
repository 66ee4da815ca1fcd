# scripts/seed_database.py
"""
Database seeding script.
Populates the database with volunteers, students, sessions and notifications
for development, including legacy-formatted phones and anomalous sessions.
"""

import argparse
import os
import random
import sys
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from faker import Faker  # noqa: E402

from app import app  # noqa: E402
from flask_app.models import Notification, Session, User, db  # noqa: E402

fake = Faker()

# Stored as users typed them before phones were normalized on write
LEGACY_PHONE_FORMATS = ("({area}) {prefix}-{line}", "{area}-{prefix}-{line}", "1 {area} {prefix} {line}")

stats = {"volunteers": 0, "students": 0, "sessions": 0, "notifications": 0}


def _random_phone(legacy_ratio):
    area, prefix, line = fake.numerify("###"), fake.numerify("###"), fake.numerify("####")
    if random.random() < 0.05:
        return f"+44{fake.numerify('##########')}"
    if random.random() < legacy_ratio:
        return random.choice(LEGACY_PHONE_FORMATS).format(area=area, prefix=prefix, line=line)
    return f"{area}{prefix}{line}"


def create_user(is_volunteer, now, legacy_ratio):
    user = User(
        email=fake.unique.email(),
        first_name=fake.first_name(),
        last_name=fake.last_name(),
        is_volunteer=is_volunteer,
        phone=_random_phone(legacy_ratio),
        volunteer_partner_org=random.choice([None, None, None, "example", "example-math"]) if is_volunteer else None,
        created_at=now - timedelta(days=random.randint(1, 365)),
    )
    db.session.add(user)
    stats["volunteers" if is_volunteer else "students"] += 1
    return user


def create_sessions(volunteer, students, now, count):
    for _ in range(count):
        created_at = fake.date_time_between(start_date=volunteer.created_at, end_date=now, tzinfo=timezone.utc)
        joined_at = created_at + timedelta(minutes=random.randint(1, 15))
        # Mostly real sessions, plus the glitches seen in production data
        roll = random.random()
        if roll < 0.05:
            ended_at = joined_at + timedelta(hours=random.randint(6, 48))  # stuck session
        elif roll < 0.08:
            ended_at = joined_at - timedelta(minutes=5)  # clock skew
        elif roll < 0.12:
            joined_at, ended_at = None, None  # volunteer never joined
        else:
            ended_at = joined_at + timedelta(minutes=random.randint(10, 120))

        student = random.choice(students)
        session = Session(
            student_id=student.id,
            volunteer_id=volunteer.id,
            type=random.choice(["math", "college"]),
            created_at=created_at,
            volunteer_joined_at=joined_at,
            ended_at=ended_at,
        )
        db.session.add(session)
        volunteer.past_sessions.append(session)
        student.past_sessions.append(session)
        stats["sessions"] += 1


def create_notifications(volunteer, now):
    for _ in range(random.randint(0, 4)):
        db.session.add(
            Notification(
                volunteer_id=volunteer.id,
                method=random.choice(["sms", "voice"]),
                sent_at=fake.date_time_between(start_date=volunteer.created_at, end_date=now, tzinfo=timezone.utc),
            )
        )
        stats["notifications"] += 1


def seed(volunteers, students, legacy_ratio, clear):
    now = datetime.now(timezone.utc)
    with app.app_context():
        if clear:
            print("Clearing existing data...")
            db.drop_all()
        db.create_all()

        student_rows = [create_user(False, now, legacy_ratio) for _ in range(students)]
        volunteer_rows = [create_user(True, now, legacy_ratio) for _ in range(volunteers)]
        db.session.flush()

        for volunteer in volunteer_rows:
            create_sessions(volunteer, student_rows, now, random.randint(0, 12))
            create_notifications(volunteer, now)

        db.session.commit()

    print("Seeding complete:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


def main():
    """Command-line interface"""
    parser = argparse.ArgumentParser(description="Seed the database with sample data")
    parser.add_argument("--clear", action="store_true", help="Clear existing data before seeding")
    parser.add_argument("--volunteers", type=int, default=50, help="Number of volunteers (default: 50)")
    parser.add_argument("--students", type=int, default=100, help="Number of students (default: 100)")
    parser.add_argument(
        "--legacy-phone-ratio",
        type=float,
        default=0.3,
        help="Share of phones stored in legacy formats (default: 0.3)",
    )
    args = parser.parse_args()
    if args.students < 1:
        parser.error("--students must be at least 1")
    seed(args.volunteers, args.students, args.legacy_phone_ratio, args.clear)


if __name__ == "__main__":
    main()
