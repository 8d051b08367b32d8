"""
Seed script to mirror the in-process badge catalog into the badges table.
Safe to run repeatedly: missing badges are created, existing ones refreshed.

    python scripts/seed_badges.py
"""
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.badges_config import ALL_BADGES
from config.database import SessionLocal
from database.init_db import init_db, seed_badges


def main():
    init_db()
    with SessionLocal() as db:
        created = seed_badges(db)
    print(f"Seeding {len(ALL_BADGES)} badges...")
    for badge in ALL_BADGES:
        print(f"  ✓ {badge.id}: {badge.name} ({badge.criteria})")
    print(f"\n✅ Done! {created} new badge(s) created")


if __name__ == "__main__":
    main()
