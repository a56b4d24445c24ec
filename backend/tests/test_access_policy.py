from __future__ import annotations

import pytest

from backend.app.errors import AuthorizationError
from backend.app.security import AccessContext, AccessPolicy, Operation, Resource, access_policy


def test_default_policy_permits_every_operation():
    policy = AccessPolicy()

    for resource in Resource:
        for operation in Operation:
            context = policy.enforce(resource, operation)
            assert context.resource is resource
            assert context.operation is operation


def test_set_rule_only_affects_its_own_pair():
    policy = AccessPolicy()
    policy.set_rule(Resource.SALES, Operation.DELETE, lambda context: False)

    with pytest.raises(AuthorizationError):
        policy.enforce(Resource.SALES, Operation.DELETE)

    policy.enforce(Resource.SALES, Operation.SELECT)
    policy.enforce(Resource.AD_SPEND, Operation.DELETE)

    policy.reset()
    policy.enforce(Resource.SALES, Operation.DELETE)


def test_predicates_receive_request_context(client):
    seen: list[AccessContext] = []

    def record(context: AccessContext) -> bool:
        seen.append(context)
        return True

    access_policy.set_rule("ad_spend", "insert", record)

    response = client.post("/ad-spend/", json={"description": "Ads", "amount": "10.00"})

    assert response.status_code == 201
    assert len(seen) == 1
    assert seen[0].resource is Resource.AD_SPEND
    assert seen[0].operation is Operation.INSERT
    assert seen[0].client_host


def test_denied_operation_returns_forbidden(client):
    created = client.post("/sales/", json={"name": "Ana", "plan": "Monthly", "amount": "150.00"})
    sale_id = created.json()["id"]

    access_policy.set_rule(Resource.SALES, Operation.DELETE, lambda context: False)

    assert client.delete(f"/sales/{sale_id}").status_code == 403
    assert client.get(f"/sales/{sale_id}").status_code == 200
    assert client.patch(f"/sales/{sale_id}", json={"amount": "160.00"}).status_code == 200

    access_policy.reset()
    assert client.delete(f"/sales/{sale_id}").status_code == 204


def test_reports_require_select_on_both_resources(client):
    access_policy.set_rule(Resource.AD_SPEND, Operation.SELECT, lambda context: False)

    assert client.get("/reports/dashboard").status_code == 403
    assert client.get("/reports/dashboard-stats").status_code == 403
    assert client.get("/reports/ad-spend-summary").status_code == 403
    assert client.get("/reports/sales-summary").status_code == 200
    assert client.get("/reports/sales-by-plan/payload").status_code == 200
