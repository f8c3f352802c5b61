import pytest
from fastapi.testclient import TestClient

from finplan.main import app
from tests.factories import AS_OF

YEAR = AS_OF.year


@pytest.fixture
def client():
    return TestClient(app)


def calculate_body(**overrides):
    body = {
        "scenario": {
            "name": "Working years",
            "assumptionBuckets": [
                {
                    "order": 0,
                    "startAge": 35,
                    "endAge": 999,
                    "assumptions": {
                        "annualIncome": 100000,
                        "annualSpending": 60000,
                        "contributions": {"401k": 20000},
                        "investmentReturnRate": 7,
                        "inflationRate": 3,
                    },
                }
            ],
            "lumpSumEvents": [],
        },
        "profile": {"dateOfBirth": f"{YEAR - 35}-01-01", "maritalStatus": "married", "numberOfDependents": 2},
        "accounts": [
            {"accountType": "checking", "accountName": "Everyday", "balance": 10000},
            {"accountType": "401k", "accountName": "Work 401k", "balance": 100000},
            {"accountType": "brokerage", "accountName": "Old", "balance": 5000, "status": "closed"},
        ],
        "startYear": YEAR,
        "endYear": YEAR,
        "asOf": AS_OF.isoformat(),
    }
    body.update(overrides)
    return body


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_calculate_projection(client):
    response = client.post("/api/projections/calculate", json=calculate_body())

    assert response.status_code == 200
    data = response.json()
    assert data["scenarioName"] == "Working years"
    assert data["startYear"] == YEAR
    years = data["projection"]["years"]
    assert len(years) == 1
    balances = years[0]["accountBalances"]["byAccountType"]
    assert set(balances) == {"401k", "traditional-ira", "roth-ira", "brokerage", "savings", "checking"}
    assert balances["401k"] == pytest.approx(127000)
    assert balances["brokerage"] == 0
    assert years[0]["contributions"]["byAccountType"]["401k"] == pytest.approx(20000)
    assert data["projection"]["summary"]["finalNetWorth"] == pytest.approx(165400)


def test_calculate_defaults_to_sixty_years(client):
    body = calculate_body()
    del body["startYear"]
    del body["endYear"]

    data = client.post("/api/projections/calculate", json=body).json()

    assert data["startYear"] == YEAR
    assert data["endYear"] == YEAR + 60
    assert len(data["projection"]["years"]) == 61


def test_calculate_default_end_is_anchored_on_reference_year(client):
    body = calculate_body(startYear=YEAR + 5)
    del body["endYear"]

    data = client.post("/api/projections/calculate", json=body).json()

    assert data["startYear"] == YEAR + 5
    assert data["endYear"] == YEAR + 60


def test_calculate_rejects_start_past_default_end(client):
    body = calculate_body(startYear=YEAR + 61)
    del body["endYear"]

    response = client.post("/api/projections/calculate", json=body)

    assert response.status_code == 400
    assert response.json()["detail"] == "Start year must be less than or equal to end year"


def test_calculated_at_is_timezone_aware(client):
    data = client.post("/api/projections/calculate", json=calculate_body()).json()
    assert data["calculatedAt"].endswith(("Z", "+00:00"))


def test_calculate_rejects_empty_buckets(client):
    body = calculate_body()
    body["scenario"]["assumptionBuckets"] = []

    response = client.post("/api/projections/calculate", json=body)

    assert response.status_code == 400
    assert response.json()["detail"] == "Scenario must have at least one assumption bucket"


def test_calculate_rejects_long_range(client):
    response = client.post("/api/projections/calculate", json=calculate_body(endYear=YEAR + 150))
    assert response.status_code == 400


def test_calculate_rejects_malformed_body(client):
    body = calculate_body()
    body["accounts"][0]["accountType"] = "piggy-bank"

    response = client.post("/api/projections/calculate", json=body)

    assert response.status_code == 422


def test_compare_round_trip(client):
    first = client.post("/api/projections/calculate", json=calculate_body()).json()
    second = client.post("/api/projections/calculate", json=calculate_body(endYear=YEAR + 1)).json()

    response = client.post("/api/projections/compare", json={"storedProjections": [first, second]})

    assert response.status_code == 200
    data = response.json()
    assert len(data["storedProjections"]) == 2
    assert [row["year"] for row in data["netWorthByYear"]] == [YEAR, YEAR + 1]
    assert data["bestProjectionId"] == second["id"]


def test_compare_requires_projections(client):
    response = client.post("/api/projections/compare", json={"storedProjections": []})
    assert response.status_code == 400


def test_validate_scenario(client):
    body = {
        "scenario": {
            "name": "Stages",
            "assumptionBuckets": [
                {"order": 0, "startAge": 0, "endAge": 64},
                {"order": 1, "startAge": 65, "endAge": 95},
            ],
        },
        "profile": {"dateOfBirth": f"{YEAR - 40}-01-01"},
        "asOf": AS_OF.isoformat(),
    }

    data = client.post("/api/scenarios/validate", json=body).json()

    assert data == {"valid": True, "error": None, "startYear": YEAR, "endYear": YEAR + 55}


def test_validate_scenario_with_late_birthday(client):
    body = {
        "scenario": {"name": "Lifetime", "assumptionBuckets": [{"order": 0, "startAge": 0, "endAge": 90}]},
        "profile": {"dateOfBirth": f"{YEAR - 40}-12-31"},
        "asOf": AS_OF.isoformat(),
    }

    data = client.post("/api/scenarios/validate", json=body).json()

    # Still 39 on the reference date, so age 90 is reached 51 years out
    assert data["endYear"] == YEAR + 51


def test_validate_scenario_reports_gap(client):
    body = {
        "scenario": {
            "name": "Gappy",
            "assumptionBuckets": [
                {"order": 0, "startAge": 0, "endAge": 60},
                {"order": 1, "startAge": 65, "endAge": 95},
            ],
        },
        "profile": {"dateOfBirth": "1980-05-05"},
    }

    data = client.post("/api/scenarios/validate", json=body).json()

    assert data["valid"] is False
    assert data["error"] == "Gap between buckets 0 and 1"


def test_mortgage_schedule(client):
    body = {"name": "Condo", "startDate": "2026-01-01", "loanAmount": 120000, "termYears": 10, "interestRate": 0}

    data = client.post("/api/mortgages/schedule", json=body).json()

    assert data["monthlyPayment"] == pytest.approx(1000)
    assert len(data["schedule"]) == 120
    assert len(data["annual"]) == 10
