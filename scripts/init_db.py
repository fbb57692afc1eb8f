"""
Create the subscriptions schema on the configured database.

Usage:
  python scripts/init_db.py
"""
from __future__ import annotations

from sqlalchemy import func

from app.database import SessionLocal, init_db
from app.models import Subscription


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        total = db.query(func.count(Subscription.id)).scalar()
        print(f"subscriptions table ready rows={int(total or 0)}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
