from __future__ import annotations

from decimal import Decimal

import pytest

from backend.app import models
from backend.app.errors import RecordNotFoundError, RecordValidationError
from backend.app.services import SaleService


def _create_sale(client, **overrides):
    payload = {"name": "Ana", "plan": "Monthly", "amount": "150.00"}
    payload.update(overrides)
    response = client.post("/sales/", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()


def test_create_sale_defaults_to_one_time(client):
    created = _create_sale(client)

    assert created["name"] == "Ana"
    assert created["plan"] == models.SalePlan.MONTHLY.value
    assert created["kind"] == models.SaleKind.ONE_TIME.value
    assert Decimal(str(created["amount"])) == Decimal("150.00")
    assert created["id"]
    assert created["created_at"] == created["updated_at"]


def test_created_sales_get_distinct_identifiers(client):
    first = _create_sale(client)
    second = _create_sale(client)

    assert first["id"] != second["id"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": "0"},
        {"amount": "-10.00"},
        {"plan": "Weekly"},
        {"kind": "Lifetime"},
        {"name": "   "},
        {"name": None},
    ],
)
def test_create_sale_rejects_invalid_payload(client, db_session, overrides):
    payload = {"name": "Ana", "plan": "Monthly", "amount": "150.00", **overrides}

    response = client.post("/sales/", json=payload)

    assert response.status_code == 422
    assert db_session.query(models.Sale).count() == 0


def test_create_sale_rejects_missing_plan(client, db_session):
    response = client.post("/sales/", json={"name": "Ana", "amount": "150.00"})

    assert response.status_code == 422
    assert db_session.query(models.Sale).count() == 0


def test_service_validates_raw_payloads(db_session):
    with pytest.raises(RecordValidationError):
        SaleService.create_sale(db_session, {"name": "Ana", "plan": "Monthly", "amount": 0})
    with pytest.raises(RecordValidationError):
        SaleService.create_sale(db_session, {"name": "Ana", "plan": "Mensal", "amount": 10})

    assert db_session.query(models.Sale).count() == 0

    sale = SaleService.create_sale(
        db_session,
        {"name": "Bruno", "plan": "Four-monthly", "kind": "Recurring", "amount": "99.90"},
    )
    assert sale.plan is models.SalePlan.FOUR_MONTHLY
    assert sale.kind is models.SaleKind.RECURRING


def test_list_sales_orders_newest_first(client, ticking_clock):
    first = _create_sale(client, name="First")
    second = _create_sale(client, name="Second")
    third = _create_sale(client, name="Third")

    response = client.get("/sales/")
    assert response.status_code == 200
    data = response.json()

    assert data["total"] == 3
    assert [item["id"] for item in data["items"]] == [third["id"], second["id"], first["id"]]

    ascending = client.get("/sales/", params={"order": "created_at_asc"}).json()
    assert [item["id"] for item in ascending["items"]] == [first["id"], second["id"], third["id"]]


def test_list_sales_filters(client, ticking_clock):
    _create_sale(client, name="Ana Costa", plan="Monthly", amount="150.00")
    _create_sale(client, name="Pedro", plan="Annual", kind="Recurring", amount="1200.00")
    _create_sale(client, name="Mariana", plan="Monthly", amount="80.00")

    by_plan = client.get("/sales/", params={"plan": "Monthly"}).json()
    assert by_plan["total"] == 2

    by_kind = client.get("/sales/", params={"kind": "Recurring"}).json()
    assert [item["name"] for item in by_kind["items"]] == ["Pedro"]

    by_name = client.get("/sales/", params={"search": "ana"}).json()
    assert {item["name"] for item in by_name["items"]} == {"Ana Costa", "Mariana"}

    by_amount = client.get("/sales/", params={"min_amount": "100", "order": "amount_desc"}).json()
    assert [item["name"] for item in by_amount["items"]] == ["Pedro", "Ana Costa"]

    paged = client.get("/sales/", params={"limit": 1, "skip": 1}).json()
    assert paged["total"] == 3
    assert len(paged["items"]) == 1


def test_list_sales_rejects_inverted_ranges(client):
    response = client.get("/sales/", params={"min_amount": "10", "max_amount": "5"})
    assert response.status_code == 400

    response = client.get(
        "/sales/",
        params={"start_date": "2026-02-01T00:00:00", "end_date": "2026-01-01T00:00:00"},
    )
    assert response.status_code == 400


def test_update_sale_revalidates_fields(client):
    created = _create_sale(client)

    response = client.patch(f"/sales/{created['id']}", json={"plan": "Annual", "amount": "1200"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["plan"] == "Annual"
    assert Decimal(str(updated["amount"])) == Decimal("1200")
    assert updated["name"] == "Ana"

    invalid = client.patch(f"/sales/{created['id']}", json={"amount": "0"})
    assert invalid.status_code == 422

    unchanged = client.get(f"/sales/{created['id']}").json()
    assert Decimal(str(unchanged["amount"])) == Decimal("1200")


def test_update_sale_rejects_null_required_field(client, db_session):
    created = _create_sale(client)

    response = client.patch(f"/sales/{created['id']}", json={"plan": None})
    assert response.status_code == 400

    db_session.expire_all()
    stored = db_session.query(models.Sale).filter_by(id=created["id"]).one()
    assert stored.plan is models.SalePlan.MONTHLY


def test_update_and_delete_unknown_sale_return_not_found(client, db_session):
    missing = "00000000-0000-0000-0000-000000000000"

    assert client.get(f"/sales/{missing}").status_code == 404
    assert client.patch(f"/sales/{missing}", json={"amount": "10"}).status_code == 404
    assert client.delete(f"/sales/{missing}").status_code == 404

    with pytest.raises(RecordNotFoundError):
        SaleService.delete_sale(db_session, missing)


def test_delete_sale_removes_record(client):
    created = _create_sale(client)

    response = client.delete(f"/sales/{created['id']}")
    assert response.status_code == 204

    assert client.get(f"/sales/{created['id']}").status_code == 404
    assert client.get("/sales/").json()["total"] == 0


def test_malformed_sale_identifiers_are_rejected(client, db_session):
    assert client.get("/sales/not-a-uuid").status_code == 422
    assert client.patch("/sales/not-a-uuid", json={"amount": "10"}).status_code == 422
    assert client.delete("/sales/not-a-uuid").status_code == 422

    assert SaleService.get_sale(db_session, "not-a-uuid") is None
    with pytest.raises(RecordNotFoundError):
        SaleService.update_sale(db_session, "not-a-uuid", {"amount": "10"})
    with pytest.raises(RecordNotFoundError):
        SaleService.delete_sale(db_session, "not-a-uuid")


def test_sale_lookup_accepts_uppercase_identifiers(client):
    created = _create_sale(client)

    response = client.get(f"/sales/{created['id'].upper()}")

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]
