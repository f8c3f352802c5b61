from datetime import date
from typing import List, Optional, Sequence

from finplan.core.config import settings
from finplan.models.profile import UserProfile
from finplan.models.scenario import AssumptionBucket, LumpSumEvent, LumpSumEventType


def get_bucket_for_age(buckets: Sequence[AssumptionBucket], age: int) -> Optional[AssumptionBucket]:
    """
    Returns the bucket whose inclusive [startAge, endAge] range contains `age`,
    or None when no bucket covers it. Buckets are scanned in `order`.
    """
    for bucket in sorted(buckets, key=lambda b: b.order):
        if bucket.startAge <= age <= bucket.endAge:
            return bucket
    return None


def validate_buckets(buckets: Sequence[AssumptionBucket]) -> Optional[str]:
    """
    Checks that buckets tile the age range: order numbers run 0..n-1 and each
    bucket starts the year after the previous one ends.

    Returns an error message, or None when the buckets are valid.
    """
    if not buckets:
        return "Scenario must have at least one assumption bucket"

    sorted_buckets = sorted(buckets, key=lambda b: b.order)

    for i, bucket in enumerate(sorted_buckets):
        if bucket.order != i:
            return "Bucket order numbers must be sequential starting from 0"

    for i in range(len(sorted_buckets) - 1):
        current_bucket = sorted_buckets[i]
        next_bucket = sorted_buckets[i + 1]

        if current_bucket.endAge + 1 != next_bucket.startAge:
            if current_bucket.endAge >= next_bucket.startAge:
                return f"Buckets {i} and {i + 1} overlap"
            return f"Gap between buckets {i} and {i + 1}"

    return None


def lump_sum_total(events: Sequence[LumpSumEvent], event_type: LumpSumEventType, age: int) -> float:
    return sum(e.amount for e in events if e.type == event_type and e.age == age)


def calculate_projection_end_year(profile: UserProfile, end_age: int, as_of: Optional[date] = None) -> int:
    """
    Calendar year in which the projection reaches `end_age`, capped so the
    projection never runs longer than MAX_PROJECTION_YEARS from `as_of`.
    Uses the same age anchoring as the projection engine.
    """
    as_of = as_of or date.today()
    end_year = as_of.year + (end_age - profile.age_on(as_of))
    return max(as_of.year, min(end_year, as_of.year + settings.MAX_PROJECTION_YEARS))


def get_max_end_age(buckets: List[AssumptionBucket]) -> int:
    if not buckets:
        raise ValueError("Scenario must have at least one assumption bucket")
    return max(b.endAge for b in buckets)
