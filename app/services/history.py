"""
Builds the chronological timeline of a car from its policies and claims.
"""

from datetime import datetime, time
from typing import Iterable, List

from app.models.claim import Claim
from app.models.insurance_policy import InsurancePolicy
from app.schemas.history import HistoryEvent, HistoryEventType

UNKNOWN_PROVIDER = "Unknown Provider"

def _start_of_day(day) -> datetime:
    return datetime.combine(day, time.min)

def _policy_events(policy: InsurancePolicy) -> List[HistoryEvent]:
    provider = policy.provider if policy.provider is not None else UNKNOWN_PROVIDER
    if policy.end_date is not None:
        started = f"Insurance policy started with {provider} (valid until {policy.end_date.isoformat()})"
    else:
        started = f"Insurance policy started with {provider} (no end date set)"

    events = [
        HistoryEvent(
            type=HistoryEventType.INSURANCE_POLICY,
            date=policy.start_date,
            description=started,
            timestamp=_start_of_day(policy.start_date),
        )
    ]
    if policy.end_date is not None:
        events.append(
            HistoryEvent(
                type=HistoryEventType.INSURANCE_POLICY,
                date=policy.end_date,
                description=f"Insurance policy with {provider} expired",
                timestamp=_start_of_day(policy.end_date),
            )
        )
    return events

def _claim_event(claim: Claim) -> HistoryEvent:
    # created_at is set on insert; an unsaved claim falls back to its claim day
    timestamp = claim.created_at or _start_of_day(claim.claim_date)
    return HistoryEvent(
        type=HistoryEventType.CLAIM,
        date=claim.claim_date,
        description=f"Claim filed: {claim.description} (Amount: ${claim.amount:.2f})",
        timestamp=timestamp,
    )

def build_history_events(
    policies: Iterable[InsurancePolicy],
    claims: Iterable[Claim],
) -> List[HistoryEvent]:
    """
    Merge policy and claim events into one list ordered by (date, timestamp).

    Each policy yields a "started" event and, when it has an end date, an
    "expired" event. Each claim yields one event. The sort is stable, so
    events that tie on both keys keep insertion order: a policy's start
    before its expiry, policies before claims.
    """
    events: List[HistoryEvent] = []
    for policy in policies:
        events.extend(_policy_events(policy))
    for claim in claims:
        events.append(_claim_event(claim))
    return sorted(events, key=lambda event: (event.date, event.timestamp))
