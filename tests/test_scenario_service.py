from datetime import date

import pytest
from pydantic import ValidationError

from finplan.models import AssumptionBucket, LumpSumEvent, LumpSumEventType, Scenario, UserProfile
from finplan.services.projection_service import calculate_scenario_projection
from finplan.services.scenario_service import (
    calculate_projection_end_year,
    get_bucket_for_age,
    get_max_end_age,
    lump_sum_total,
    validate_buckets
)
from tests.factories import AS_OF, profile_aged


def bucket(order, start_age, end_age):
    return AssumptionBucket(order=order, startAge=start_age, endAge=end_age)


@pytest.fixture
def life_stages():
    # Deliberately out of order in the list; resolution follows `order`
    return [bucket(2, 66, 999), bucket(0, 0, 55), bucket(1, 56, 65)]


@pytest.mark.parametrize(
    "age, expected_order",
    [
        (0, 0),
        (55, 0),
        (56, 1),
        (65, 1),
        (66, 2),
        (999, 2),
    ],
)
def test_bucket_bounds_are_inclusive(life_stages, age, expected_order):
    assert get_bucket_for_age(life_stages, age).order == expected_order


def test_no_bucket_for_uncovered_age():
    buckets = [bucket(0, 30, 39), bucket(1, 45, 60)]
    assert get_bucket_for_age(buckets, 42) is None
    assert get_bucket_for_age(buckets, 61) is None
    assert get_bucket_for_age([], 30) is None


def test_valid_buckets(life_stages):
    assert validate_buckets(life_stages) is None


def test_validate_requires_a_bucket():
    assert validate_buckets([]) == "Scenario must have at least one assumption bucket"


def test_validate_rejects_non_sequential_order():
    assert validate_buckets([bucket(0, 0, 50), bucket(2, 51, 999)]) == \
        "Bucket order numbers must be sequential starting from 0"


def test_validate_detects_overlap():
    assert validate_buckets([bucket(0, 0, 50), bucket(1, 50, 999)]) == "Buckets 0 and 1 overlap"


def test_validate_detects_gap():
    assert validate_buckets([bucket(0, 0, 50), bucket(1, 52, 999)]) == "Gap between buckets 0 and 1"


def test_bucket_model_rejects_inverted_range():
    with pytest.raises(ValidationError):
        AssumptionBucket(order=0, startAge=60, endAge=50)


def test_lump_sum_total_filters_type_and_age():
    events = [
        LumpSumEvent(type=LumpSumEventType.INCOME, age=50, amount=1000, description="Bonus"),
        LumpSumEvent(type=LumpSumEventType.INCOME, age=50, amount=2500, description="Sale"),
        LumpSumEvent(type=LumpSumEventType.EXPENSE, age=50, amount=700, description="Repair"),
        LumpSumEvent(type=LumpSumEventType.INCOME, age=51, amount=9000, description="Gift"),
    ]
    assert lump_sum_total(events, LumpSumEventType.INCOME, 50) == 3500
    assert lump_sum_total(events, LumpSumEventType.EXPENSE, 50) == 700
    assert lump_sum_total(events, LumpSumEventType.EXPENSE, 51) == 0


def test_projection_end_year_from_end_age():
    profile = profile_aged(40)
    assert calculate_projection_end_year(profile, 95, AS_OF) == AS_OF.year + 55


def test_projection_end_year_reaches_last_age_for_late_birthday():
    profile = UserProfile(dateOfBirth=date(1986, 12, 31))
    end_year = calculate_projection_end_year(profile, 90, AS_OF)

    scenario = Scenario(name="Lifetime", assumptionBuckets=[bucket(0, 0, 90)])
    result = calculate_scenario_projection(scenario, profile, [], AS_OF.year, end_year, as_of=AS_OF)

    assert end_year == 2077
    assert result.years[-1].age == 90


def test_projection_end_year_is_capped():
    profile = profile_aged(40)
    assert calculate_projection_end_year(profile, 999, AS_OF) == AS_OF.year + 100


def test_projection_end_year_never_before_reference_year():
    profile = profile_aged(90)
    assert calculate_projection_end_year(profile, 80, date(AS_OF.year, 1, 1)) == AS_OF.year


def test_max_end_age(life_stages):
    assert get_max_end_age(life_stages) == 999
    with pytest.raises(ValueError):
        get_max_end_age([])
