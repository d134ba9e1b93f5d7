"""Unit tests for the prediction client."""

import json

import httpx
import pytest
import respx

from gulita.core.config import Settings
from gulita.core.exceptions import ServiceUnavailableError
from gulita.infrastructure.services import PredictionClient

URL = "http://inference.test/predict"
FEATURES = {"bmi": 30.0, "age": 50, "income": 3}


@pytest.fixture
def client() -> PredictionClient:
    return PredictionClient(URL, timeout=1.0)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("prediction", "expected"),
    [
        (1, "diabetic"),
        (0, "non-diabetic"),
        ("1", "diabetic"),
        (1.0, "diabetic"),
        ("Non-Diabetic", "non-diabetic"),
    ],
)
async def test_predict_parses_result(client, respx_mock, prediction, expected):
    route = respx_mock.post(URL).mock(return_value=httpx.Response(200, json={"prediction": prediction}))

    assert await client.predict(FEATURES) == expected
    assert route.called
    assert json.loads(route.calls.last.request.content) == FEATURES


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [201, 202])
async def test_predict_accepts_any_success_status(client, respx_mock, status_code):
    respx_mock.post(URL).mock(return_value=httpx.Response(status_code, json={"prediction": 1}))

    assert await client.predict(FEATURES) == "diabetic"


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [302, 404, 500, 503])
async def test_predict_error_status(client, respx_mock, status_code):
    respx_mock.post(URL).mock(return_value=httpx.Response(status_code, json={"error": "boom"}))

    with pytest.raises(ServiceUnavailableError):
        await client.predict(FEATURES)


@pytest.mark.asyncio
@respx.mock
async def test_predict_connection_error(client):
    respx.post(URL).mock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(ServiceUnavailableError):
        await client.predict(FEATURES)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"prediction": 2},
        {"prediction": [1]},
        {"result": 1},
        [1],
    ],
)
async def test_predict_unexpected_payload(client, respx_mock, body):
    respx_mock.post(URL).mock(return_value=httpx.Response(200, json=body))

    with pytest.raises(ServiceUnavailableError):
        await client.predict(FEATURES)


@pytest.mark.asyncio
@respx.mock
async def test_predict_invalid_json(client):
    respx.post(URL).mock(return_value=httpx.Response(200, content=b"not json"))

    with pytest.raises(ServiceUnavailableError):
        await client.predict(FEATURES)


def test_from_settings():
    assert PredictionClient.from_settings(Settings(_env_file=None, prediction_url=None)) is None

    client = PredictionClient.from_settings(
        Settings(_env_file=None, prediction_url=URL, prediction_timeout_seconds=2.5)
    )
    assert client.url == URL
    assert client.timeout == 2.5
