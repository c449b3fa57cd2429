from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from settings import get_settings


@pytest.fixture
def api_client(monkeypatch) -> Iterator[TestClient]:
    monkeypatch.setenv("DEFAULT_WEIGHT_UNIT", "g")
    get_settings.cache_clear()

    app = create_app()
    with TestClient(app) as client:
        yield client

    get_settings.cache_clear()


def _weight(number: str, unit: str | None = "kg") -> dict:
    payload = {"number": number}
    if unit is not None:
        payload["unit"] = unit
    return payload


def test_healthcheck(api_client: TestClient) -> None:
    assert api_client.get("/health").json() == {"status": "ok"}
    assert api_client.get("/").json()["status"] == "ok"


def test_list_conditions(api_client: TestClient) -> None:
    response = api_client.get("/conditions")

    assert response.status_code == 200
    payload = response.json()
    assert [item["plugin_id"] for item in payload] == ["shipment_weight"]
    assert payload[0]["operators"]["> <"] == "Between (exclusive)"
    assert payload[0]["default_configuration"] is None


def test_get_condition_includes_defaults(api_client: TestClient) -> None:
    response = api_client.get("/conditions/shipment_weight")

    assert response.status_code == 200
    defaults = response.json()["default_configuration"]
    assert defaults == {"operator": ">", "weight": None, "max_weight": None}


def test_get_unknown_condition_returns_not_found(api_client: TestClient) -> None:
    response = api_client.get("/conditions/order_total")

    assert response.status_code == 404
    assert "order_total" in response.json()["detail"]


def test_configure_normalises_max_weight(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/configure",
        json={
            "operator": "> <",
            "weight": _weight("2"),
            "max_weight": _weight("10000", "g"),
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["operator"] == "> <"
    assert payload["max_weight"]["unit"] == "kg"
    assert Decimal(payload["max_weight"]["number"]) == Decimal("10")


def test_configure_drops_max_weight_for_single_bound(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/configure",
        json={"operator": ">=", "weight": _weight("2"), "max_weight": _weight("3")},
    )

    assert response.status_code == 200
    assert response.json()["max_weight"] is None


def test_configure_applies_default_unit(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/configure",
        json={"operator": "<", "weight": _weight("250", unit=None)},
    )

    assert response.status_code == 200
    assert response.json()["weight"]["unit"] == "g"


def test_configure_rejects_inverted_range(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/configure",
        json={"operator": "> <", "weight": _weight("5"), "max_weight": _weight("3")},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == {
        "field": "max_weight",
        "error": "InvalidRangeBound",
        "message": '"Max weight" cannot be less or equal to "Weight"',
    }


def test_configure_rejects_missing_range_bound(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/configure",
        json={"operator": ">= <=", "weight": _weight("5")},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "MissingRangeBound"


def test_configure_rejects_unknown_operator(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/configure",
        json={"operator": "!=", "weight": _weight("5")},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["field"] == "operator"


def test_configure_rejects_negative_weight(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/configure",
        json={"operator": ">", "weight": _weight("-1")},
    )

    assert response.status_code == 422


def test_evaluate_condition(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/evaluate",
        json={
            "configuration": {"operator": ">= <=", "weight": _weight("1"), "max_weight": _weight("1")},
            "weight": _weight("1000", "g"),
        },
    )

    assert response.status_code == 200
    assert response.json() == {"result": True}


def test_evaluate_without_subject_weight_is_false(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/evaluate",
        json={"configuration": {"operator": ">", "weight": _weight("0")}, "weight": None},
    )

    assert response.status_code == 200
    assert response.json() == {"result": False}


def test_evaluate_integrity_fault_hides_details(api_client: TestClient, caplog) -> None:
    with caplog.at_level("ERROR"):
        response = api_client.post(
            "/conditions/shipment_weight/evaluate",
            json={
                "configuration": {"operator": "> <", "weight": _weight("1")},
                "weight": _weight("2"),
            },
        )

    assert response.status_code == 500
    assert response.json() == {"detail": "Condition configuration is invalid."}
    assert any("integrity" in record.getMessage() for record in caplog.records)


def test_configure_returns_plain_decimal_numbers(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/configure",
        json={"operator": "> <", "weight": _weight("1", "mg"), "max_weight": _weight("1", "kg")},
    )

    assert response.status_code == 200
    assert response.json()["max_weight"] == {"number": "1000000", "unit": "mg"}


def test_configure_rejection_is_logged_at_info(api_client: TestClient, caplog) -> None:
    with caplog.at_level("INFO"):
        response = api_client.post(
            "/conditions/shipment_weight/configure",
            json={"operator": "> <", "weight": _weight("5"), "max_weight": _weight("3")},
        )

    assert response.status_code == 422
    rejections = [r for r in caplog.records if r.getMessage() == "Rejected condition configuration"]
    assert len(rejections) == 1
    assert rejections[0].levelname == "INFO"
    assert rejections[0].field == "max_weight"


def test_evaluation_is_logged_at_debug(api_client: TestClient, caplog) -> None:
    with caplog.at_level("DEBUG"):
        response = api_client.post(
            "/conditions/shipment_weight/evaluate",
            json={"configuration": {"operator": ">", "weight": _weight("5")}, "weight": _weight("6")},
        )

    assert response.status_code == 200
    evaluations = [r for r in caplog.records if r.getMessage() == "Evaluated weight condition"]
    assert len(evaluations) == 1
    assert evaluations[0].levelname == "DEBUG"
    assert evaluations[0].result is True


@pytest.mark.parametrize("operator", ["> <", ">= <="])
def test_evaluate_zero_max_weight_is_integrity_fault(api_client: TestClient, operator: str) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/evaluate",
        json={
            "configuration": {
                "operator": operator,
                "weight": _weight("1"),
                "max_weight": _weight("0"),
            },
            "weight": _weight("1"),
        },
    )

    assert response.status_code == 500
    assert response.json() == {"detail": "Condition configuration is invalid."}


def test_evaluate_rejects_subject_outside_decimal_range(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/evaluate",
        json={
            "configuration": {"operator": ">", "weight": _weight("1", "mg")},
            "weight": _weight("1E+999999", "kg"),
        },
    )

    assert response.status_code == 422
    assert "cannot be expressed" in response.json()["detail"]


def test_configure_rejects_max_weight_outside_decimal_range(api_client: TestClient) -> None:
    response = api_client.post(
        "/conditions/shipment_weight/configure",
        json={
            "operator": ">= <=",
            "weight": _weight("1", "mg"),
            "max_weight": _weight("1E+999999", "kg"),
        },
    )

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "InvalidRangeBound"
