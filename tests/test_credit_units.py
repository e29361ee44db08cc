import pytest

from connext.services.credit_units import calculate_cu


@pytest.mark.parametrize("minutes, expected", [
    (1, 0.25),
    (15, 0.25),
    (16, 0.5),
    (30, 0.5),
    (45, 0.75),
    (46, 1.0),
    (60, 1.0),
    (61, 1.25),
    (90, 1.5),
])
def test_quarter_hour_rounding(minutes, expected):
    assert calculate_cu(minutes) == expected


@pytest.mark.parametrize("minutes", [None, 0, -5])
def test_no_time_no_credits(minutes):
    assert calculate_cu(minutes) == 0.0


def test_calls_over_52_minutes_bill_at_least_one_unit():
    assert calculate_cu(52) == 1.0
    assert calculate_cu(53) == 1.0


def test_result_is_monotonic():
    values = [calculate_cu(m) for m in range(0, 240)]
    assert values == sorted(values)


def test_calculate_cu_endpoint(client):
    response = client.get("/api/calculate-cu", params={"minutes": 61})
    assert response.status_code == 200
    assert response.json() == {"minutes": 61, "cu": 1.25}


def test_calculate_cu_endpoint_defaults_to_zero(client):
    response = client.get("/api/calculate-cu")
    assert response.json() == {"minutes": 0, "cu": 0.0}
