"""
Create the owner, car, policy, claim and user tables for the car insurance
service. Tables that already exist are left as they are.

Usage: python setup_db.py
"""

import logging

from app.core.config import settings
from app.db.init_db import init_db

def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL)
    init_db()

if __name__ == "__main__":
    main()
