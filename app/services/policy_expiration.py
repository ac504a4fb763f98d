"""
Periodic scan that logs policies whose coverage ends today.
"""

import asyncio
import logging
from datetime import date
from typing import Callable, List, Optional, Set

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.repositories import policies as policy_repository

logger = logging.getLogger(__name__)

class PolicyExpirationChecker:
    """
    Logs each policy expiring today once.

    The ids already reported are kept on the instance so repeated runs on
    the same day stay quiet; reset() forgets them.
    """

    def __init__(self) -> None:
        self._notified: Set[int] = set()

    @property
    def notified_policy_ids(self) -> Set[int]:
        return set(self._notified)

    def check_expired_policies(self, db: Session, today: Optional[date] = None) -> List[int]:
        """Log policies ending on today's date. Returns the ids logged by this run."""
        logger.debug("Checking for expired policies...")

        today = today or date.today()
        expiring = policy_repository.list_expiring_on(db, today)

        newly_logged = []
        for policy in expiring:
            if policy.id in self._notified:
                continue
            logger.info(f"Policy {policy.id} for car {policy.car_id} expired on {policy.end_date}")
            self._notified.add(policy.id)
            newly_logged.append(policy.id)

        if expiring:
            logger.info(f"Found {len(expiring)} expired policies for {today}")
        return newly_logged

    def reset(self) -> None:
        self._notified.clear()

    def run_once(self, session_factory: Callable[[], Session]) -> List[int]:
        db = session_factory()
        try:
            return self.check_expired_policies(db)
        finally:
            db.close()

    async def run_forever(self, session_factory: Callable[[], Session], interval_seconds: int) -> None:
        """Run the check every interval_seconds until cancelled. A failed run is logged and retried next interval."""
        while True:
            try:
                await run_in_threadpool(self.run_once, session_factory)
            except Exception as e:
                logger.error(f"Policy expiration check failed: {e}")
            await asyncio.sleep(interval_seconds)
