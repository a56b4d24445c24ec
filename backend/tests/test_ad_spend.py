from __future__ import annotations

from decimal import Decimal

import pytest

from backend.app import models
from backend.app.errors import RecordNotFoundError, RecordValidationError
from backend.app.services import AdSpendService


def test_create_and_list_ad_spend(client, ticking_clock):
    for description, amount in (("Facebook Ads", "500.00"), ("Google Ads", "300.00")):
        response = client.post("/ad-spend/", json={"description": description, "amount": amount})
        assert response.status_code == 201, response.json()

    response = client.get("/ad-spend/")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [item["description"] for item in data["items"]] == ["Google Ads", "Facebook Ads"]

    cheapest_first = client.get("/ad-spend/", params={"order": "amount_asc"}).json()
    assert [Decimal(str(item["amount"])) for item in cheapest_first["items"]] == [
        Decimal("300.00"),
        Decimal("500.00"),
    ]

    search = client.get("/ad-spend/", params={"search": "google"}).json()
    assert search["total"] == 1


@pytest.mark.parametrize(
    "payload",
    [
        {"description": "Ads", "amount": "0"},
        {"description": "Ads", "amount": "-1"},
        {"description": "", "amount": "10"},
        {"amount": "10"},
    ],
)
def test_create_ad_spend_rejects_invalid_payload(client, db_session, payload):
    response = client.post("/ad-spend/", json=payload)

    assert response.status_code == 422
    assert db_session.query(models.AdSpend).count() == 0


def test_update_ad_spend(client):
    created = client.post("/ad-spend/", json={"description": "Ads", "amount": "50.00"}).json()

    response = client.patch(f"/ad-spend/{created['id']}", json={"description": "Instagram Ads"})
    assert response.status_code == 200
    assert response.json()["description"] == "Instagram Ads"
    assert Decimal(str(response.json()["amount"])) == Decimal("50.00")

    invalid = client.patch(f"/ad-spend/{created['id']}", json={"amount": "-5"})
    assert invalid.status_code == 422


def test_service_errors_for_ad_spend(db_session):
    with pytest.raises(RecordValidationError):
        AdSpendService.create_ad_spend(db_session, {"description": "Ads", "amount": "0"})
    with pytest.raises(RecordNotFoundError):
        AdSpendService.update_ad_spend(
            db_session, "00000000-0000-0000-0000-000000000000", {"amount": "10"}
        )
    assert db_session.query(models.AdSpend).count() == 0


def test_delete_ad_spend(client):
    created = client.post("/ad-spend/", json={"description": "Ads", "amount": "50.00"}).json()

    assert client.delete(f"/ad-spend/{created['id']}").status_code == 204
    assert client.delete(f"/ad-spend/{created['id']}").status_code == 404


def test_malformed_ad_spend_identifiers_are_rejected(client, db_session):
    assert client.get("/ad-spend/abc").status_code == 422
    assert client.delete("/ad-spend/abc").status_code == 422

    assert AdSpendService.get_ad_spend(db_session, "abc") is None
    with pytest.raises(RecordNotFoundError):
        AdSpendService.delete_ad_spend(db_session, "abc")
