from __future__ import annotations

from datetime import datetime, timedelta, timezone

from backend.app import clock, models
from backend.app.services import AdSpendService, SaleService


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_created_at_is_expressed_in_application_timezone(client, frozen_clock):
    response = client.post("/sales/", json={"name": "Ana", "plan": "Monthly", "amount": "150.00"})
    assert response.status_code == 201

    created_at = _parse(response.json()["created_at"])
    assert created_at.utcoffset() == timedelta(hours=-3)
    assert created_at == datetime(2026, 1, 10, 9, 0, tzinfo=clock.app_timezone())


def test_update_moves_updated_at_forward(client, ticking_clock):
    created = client.post(
        "/sales/", json={"name": "Ana", "plan": "Monthly", "amount": "150.00"}
    ).json()

    updated = client.patch(f"/sales/{created['id']}", json={"amount": "175.00"}).json()

    assert _parse(updated["created_at"]) == _parse(created["created_at"])
    assert _parse(updated["updated_at"]) > _parse(created["updated_at"])
    assert _parse(updated["updated_at"]) >= _parse(updated["created_at"])


def test_updates_within_the_same_clock_tick_still_increase(db_session, frozen_clock):
    sale = SaleService.create_sale(db_session, {"name": "Ana", "plan": "Monthly", "amount": 150})
    first_stamp = sale.updated_at

    sale = SaleService.update_sale(db_session, sale.id, {"amount": 160})
    second_stamp = sale.updated_at
    sale = SaleService.update_sale(db_session, sale.id, {"amount": 170})
    third_stamp = sale.updated_at

    assert first_stamp == sale.created_at
    assert first_stamp < second_stamp < third_stamp
    assert second_stamp - first_stamp == timedelta(microseconds=1)


def test_empty_update_still_counts_as_modification(db_session, ticking_clock):
    spend = AdSpendService.create_ad_spend(db_session, {"description": "Ads", "amount": 50})
    before = spend.updated_at

    spend = AdSpendService.update_ad_spend(db_session, spend.id, {})

    assert spend.updated_at > before
    assert spend.description == "Ads"


def test_client_supplied_updated_at_is_ignored_by_api(client, frozen_clock):
    created = client.post("/ad-spend/", json={"description": "Ads", "amount": "50.00"}).json()

    frozen_clock(datetime(2026, 1, 11, 8, 30, tzinfo=clock.app_timezone()))
    response = client.patch(
        f"/ad-spend/{created['id']}",
        json={"description": "Google Ads", "updated_at": "1999-01-01T00:00:00+00:00"},
    )

    assert response.status_code == 200
    assert _parse(response.json()["updated_at"]) == datetime(
        2026, 1, 11, 8, 30, tzinfo=clock.app_timezone()
    )


def test_orm_assignment_of_updated_at_is_overridden(db_session, frozen_clock):
    sale = SaleService.create_sale(db_session, {"name": "Ana", "plan": "Annual", "amount": 1200})
    stale = datetime(2000, 1, 1, tzinfo=timezone.utc)

    frozen_clock(datetime(2026, 2, 1, 10, 0, tzinfo=clock.app_timezone()))
    sale.updated_at = stale
    db_session.commit()
    db_session.refresh(sale)

    assert sale.updated_at == datetime(2026, 2, 1, 10, 0, tzinfo=clock.app_timezone())
    assert sale.updated_at >= sale.created_at


def test_updated_at_never_precedes_created_at_when_clock_goes_back(db_session, frozen_clock):
    spend = AdSpendService.create_ad_spend(db_session, {"description": "Ads", "amount": 75})

    frozen_clock(datetime(2025, 12, 31, 23, 0, tzinfo=clock.app_timezone()))
    spend = AdSpendService.update_ad_spend(db_session, spend.id, {"amount": 80})

    assert spend.updated_at > spend.created_at
    stored = db_session.query(models.AdSpend).filter_by(id=spend.id).one()
    assert stored.updated_at == spend.updated_at
