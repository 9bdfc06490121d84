#!/usr/bin/env python3
"""
Seed script to create a demo user with a few weeks of sauna history.

Usage:
    # Optional: pick the demo principal
    export SEED_USER_ID="demo-user"
    export SEED_USER_NAME="Demo User"

    # Run the script
    python scripts/seed_demo_sessions.py

Prints a development token that the JSON API accepts as
`Authorization: Bearer <token>`.
"""
import os
import sys
from datetime import date, timedelta

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from saunalog.auth import create_session_token
from saunalog.database import Database
from saunalog.services.ledger import SessionLedger
from saunalog.services.users import save_user


# Day definitions: days ago -> (sessions, facility, condition, satisfaction)
DAYS = {
    0: ([10, 12, 8], "Sauna Shiki", 4, 5),
    2: ([9, 9], "Kitanoyu", 3, 4),
    5: ([12, 10, 10], "Sauna Shiki", 5, 5),
    9: ([8], None, None, 3),
    14: ([11, 11, 12], "Totonoi Lab", 4, 4),
}


def seed_demo_sessions():
    """Create the demo profile and replace its seeded days."""
    user_id = os.getenv("SEED_USER_ID", "demo-user")
    name = os.getenv("SEED_USER_NAME", "Demo User")

    database = Database()
    database.init_db()
    ledger = SessionLedger(database)
    seeded = []

    try:
        with database.transaction() as db:
            save_user(db, user_id, name)

        for days_ago, (sessions, facility, condition, satisfaction) in sorted(DAYS.items()):
            date_key = (date.today() - timedelta(days=days_ago)).isoformat()
            ledger.replace_all(user_id, date_key, [])
            ledger.append(user_id, date_key, sessions[0], {
                "facility_name": facility,
                "condition_rating": condition,
                "satisfaction_rating": satisfaction,
            })
            for minutes in sessions[1:]:
                ledger.append(user_id, date_key, minutes)
            seeded.append(f"{date_key}: {sessions} @ {facility or '-'}")

    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        database.dispose()

    # Print summary
    print("\n=== Demo Seed Summary ===\n")
    for item in seeded:
        print(f"  + {item}")

    print(f"\nOverall average: {ledger.overall_average(user_id):.1f} min")
    print(f"\nToken for {user_id}:\n  {create_session_token(user_id, name)}")


if __name__ == "__main__":
    seed_demo_sessions()
