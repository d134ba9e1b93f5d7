"""Integration tests for the health check endpoints."""

import httpx
import pytest
import respx
from httpx import ASGITransport, AsyncClient

from gulita.domain.services import CheckService
from gulita.infrastructure.api.app import create_app
from gulita.infrastructure.services import PredictionClient

PREFIX = "/api/v1/users/checks"
PREDICTION_URL = "http://inference.test/predict"
ANSWERS = {
    "bmi": 28.4,
    "age": 47,
    "income": 6,
    "phys_hlth": "low",
    "education": "college",
    "gen_hlth": "medium",
    "ment_hlth": "low",
}


@pytest.mark.asyncio
async def test_create_and_list_checks(client: AsyncClient, auth_headers):
    first = await client.post(PREFIX, json={**ANSWERS, "diabetes_result": "non-diabetic"}, headers=auth_headers)
    second = await client.post(PREFIX, json={**ANSWERS, "diabetes_result": "diabetic"}, headers=auth_headers)

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["data"]["check"]["diabetes_result"] == "non-diabetic"

    response = await client.get(PREFIX, headers=auth_headers)

    assert response.status_code == 200
    history = response.json()["data"]["history"]
    assert len(history) == 2
    assert {check["id"] for check in history} == {
        first.json()["data"]["check"]["id"],
        second.json()["data"]["check"]["id"],
    }


@pytest.mark.asyncio
async def test_checks_require_auth(client: AsyncClient):
    response = await client.get(PREFIX)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_missing_result_without_prediction_service(client: AsyncClient, auth_headers):
    response = await client.post(PREFIX, json=ANSWERS, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("field", "value"),
    [("bmi", -1), ("age", 0), ("phys_hlth", "terrible"), ("education", "phd")],
)
async def test_invalid_answers(client: AsyncClient, auth_headers, field, value):
    response = await client.post(
        PREFIX,
        json={**ANSWERS, field: value, "diabetes_result": "diabetic"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert field in {detail["field"] for detail in response.json()["details"]}


@pytest.mark.asyncio
async def test_delete_check(client: AsyncClient, auth_headers):
    created = await client.post(PREFIX, json={**ANSWERS, "diabetes_result": "diabetic"}, headers=auth_headers)
    check_id = created.json()["data"]["check"]["id"]

    response = await client.delete(f"{PREFIX}/{check_id}", headers=auth_headers)
    assert response.status_code == 200

    again = await client.delete(f"{PREFIX}/{check_id}", headers=auth_headers)
    assert again.status_code == 404
    assert again.json()["error"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_delete_other_users_check(client: AsyncClient, services, auth_headers):
    created = await client.post(PREFIX, json={**ANSWERS, "diabetes_result": "diabetic"}, headers=auth_headers)
    check_id = created.json()["data"]["check"]["id"]
    await services.auth.register("bob", "bob@example.com", "Password123!")
    bob = await services.auth.login("bob@example.com", "Password123!")

    response = await client.delete(
        f"{PREFIX}/{check_id}",
        headers={"Authorization": f"Bearer {bob.access_token}"},
    )

    assert response.status_code == 403
    assert response.json()["error"] == "FORBIDDEN_ACCESS"


@pytest.mark.asyncio
@respx.mock
async def test_prediction_service_scores_check(services, db, auth_headers):
    respx.post(PREDICTION_URL).mock(return_value=httpx.Response(200, json={"prediction": 1}))
    services.checks = CheckService(db.session, PredictionClient(PREDICTION_URL))
    app = create_app(services=services)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(PREFIX, json=ANSWERS, headers=auth_headers)

    assert response.status_code == 201
    assert response.json()["data"]["check"]["diabetes_result"] == "diabetic"


@pytest.mark.asyncio
@respx.mock
async def test_prediction_service_down(services, db, auth_headers):
    respx.post(PREDICTION_URL).mock(side_effect=httpx.ConnectError("refused"))
    services.checks = CheckService(db.session, PredictionClient(PREDICTION_URL))
    app = create_app(services=services)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(PREFIX, json=ANSWERS, headers=auth_headers)

    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"
