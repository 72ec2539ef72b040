"""
Test suite for the /v1/quotes routes.

- Routes map DTOs to domain requests and delegate to use cases (mocked here)
- Business rule violations surface as 400 with the full violation list
- Malformed payloads surface as 422
- Save returns 201 with a Location header and no body
"""

from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal
from unittest.mock import Mock
from uuid import UUID

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from lease_quotes.domain.client import ClientRef
from lease_quotes.domain.errors import ValidationError
from lease_quotes.domain.quote import Quote
from lease_quotes.entrypoints.http.dependencies import (
    get_calculate_quote_use_case,
    get_list_client_quotes_use_case,
    get_save_quote_use_case,
)
from lease_quotes.entrypoints.http.exception_handlers import register_exception_handlers
from lease_quotes.entrypoints.http.routes.quotes import router


VALID_PAYLOAD = {
    "client_name": "ACME",
    "price": "100000.00",
    "down_payment": "10000.00",
    "term_months": 12,
    "residual": "20000.00",
    "annual_rate": "0.12",
}


@pytest.fixture
def app() -> Iterator[FastAPI]:
    """Create a test FastAPI app with the quotes router and exception handlers."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_use_case() -> Mock:
    return Mock()


@pytest.fixture
def sample_quote() -> Quote:
    return Quote(
        client=ClientRef(name="ACME", id=UUID("5a4f3c2b-1d0e-4f9a-8b7c-6d5e4f3a2b1c")),
        price=Decimal("100000.00"),
        down_payment=Decimal("10000.00"),
        term_months=12,
        residual=Decimal("20000.00"),
        annual_rate=Decimal("0.12"),
        monthly_payment=Decimal("9573.37"),
        total_payment=Decimal("114880.44"),
        id=UUID("0b6e5c1e-4d0a-4f43-9f5e-3f0a4b6b2a10"),
    )


# ==============================================================================
# POST /v1/quotes/calculate
# ==============================================================================


def test_calculate_success(
    app: FastAPI, client: TestClient, mock_use_case: Mock, sample_quote: Quote
) -> None:
    mock_use_case.execute.return_value = sample_quote
    app.dependency_overrides[get_calculate_quote_use_case] = lambda: mock_use_case

    response = client.post("/v1/quotes/calculate", json=VALID_PAYLOAD)

    assert response.status_code == 200
    assert response.json() == {
        "id": "0b6e5c1e-4d0a-4f43-9f5e-3f0a4b6b2a10",
        "client_id": "5a4f3c2b-1d0e-4f9a-8b7c-6d5e4f3a2b1c",
        "client_name": "ACME",
        "price": "100000.00",
        "down_payment": "10000.00",
        "term_months": 12,
        "residual": "20000.00",
        "annual_rate": "0.12",
        "monthly_payment": "9573.37",
        "total_payment": "114880.44",
    }


def test_calculate_passes_decimals_to_use_case(
    app: FastAPI, client: TestClient, mock_use_case: Mock, sample_quote: Quote
) -> None:
    mock_use_case.execute.return_value = sample_quote
    app.dependency_overrides[get_calculate_quote_use_case] = lambda: mock_use_case

    client.post("/v1/quotes/calculate", json=VALID_PAYLOAD)

    request_arg = mock_use_case.execute.call_args[0][0]
    assert request_arg.client_name == "ACME"
    assert request_arg.quote_input.price == Decimal("100000.00")
    assert request_arg.quote_input.residual == Decimal("20000.00")
    assert request_arg.quote_input.annual_rate == Decimal("0.12")
    assert request_arg.quote_input.term_months == 12


def test_calculate_surfaces_rule_violations_as_400(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.side_effect = ValidationError(
        errors=[
            {"field": "residual", "message": "Too high", "code": "RESIDUAL_TOO_HIGH"},
            {"field": "down_payment", "message": "Too low", "code": "DOWN_PAYMENT_TOO_LOW"},
        ]
    )
    app.dependency_overrides[get_calculate_quote_use_case] = lambda: mock_use_case

    response = client.post("/v1/quotes/calculate", json=VALID_PAYLOAD)

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert [error["field"] for error in data["errors"]] == ["residual", "down_payment"]


@pytest.mark.parametrize(
    "override",
    [
        {"price": "abc"},
        {"price": "100000.123"},
        {"residual": "$20,000"},
        {"down_payment": "+10"},
        {"price": "1e5"},
        {"price": "1000000000000000.00"},
        {"annual_rate": "12%"},
        {"term_months": "twelve"},
    ],
)
def test_calculate_rejects_malformed_payload_with_422(
    client: TestClient, override: dict[str, object]
) -> None:
    response = client.post("/v1/quotes/calculate", json={**VALID_PAYLOAD, **override})

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_calculate_rejects_missing_fields(client: TestClient) -> None:
    response = client.post("/v1/quotes/calculate", json={"client_name": "ACME"})

    assert response.status_code == 422


def test_calculate_reports_negative_amounts_as_rule_violations(client: TestClient) -> None:
    """Signed values reach the rules and come back in the 400 violation list."""
    response = client.post(
        "/v1/quotes/calculate",
        json={**VALID_PAYLOAD, "price": "-100000", "annual_rate": "-0.12"},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    # Any non-negative residual also exceeds 30% of a negative price
    assert [(error["field"], error["code"]) for error in data["errors"]] == [
        ("price", "INVALID_VALUE"),
        ("residual", "RESIDUAL_TOO_HIGH"),
        ("annual_rate", "INVALID_VALUE"),
    ]


def test_calculate_prices_very_long_terms(client: TestClient) -> None:
    response = client.post(
        "/v1/quotes/calculate",
        json={**VALID_PAYLOAD, "down_payment": "5000.00", "term_months": 100000},
    )

    assert response.status_code == 200
    assert response.json()["monthly_payment"] == "950.00"


# ==============================================================================
# POST /v1/quotes
# ==============================================================================


def test_save_returns_201_with_location_and_no_body(
    app: FastAPI, client: TestClient, mock_use_case: Mock, sample_quote: Quote
) -> None:
    mock_use_case.execute.return_value = sample_quote
    app.dependency_overrides[get_save_quote_use_case] = lambda: mock_use_case

    response = client.post("/v1/quotes", json=VALID_PAYLOAD)

    assert response.status_code == 201
    assert response.headers["location"] == "/v1/quotes/ACME"
    assert response.content == b""
    mock_use_case.execute.assert_called_once()


def test_save_location_escapes_client_name(
    app: FastAPI, client: TestClient, mock_use_case: Mock, sample_quote: Quote
) -> None:
    mock_use_case.execute.return_value = Quote(
        client=ClientRef(name="Acme Leasing/MX"),
        price=sample_quote.price,
        down_payment=sample_quote.down_payment,
        term_months=sample_quote.term_months,
        residual=sample_quote.residual,
        annual_rate=sample_quote.annual_rate,
        monthly_payment=sample_quote.monthly_payment,
        total_payment=sample_quote.total_payment,
    )
    app.dependency_overrides[get_save_quote_use_case] = lambda: mock_use_case

    response = client.post("/v1/quotes", json={**VALID_PAYLOAD, "client_name": "Acme Leasing/MX"})

    assert response.headers["location"] == "/v1/quotes/Acme%20Leasing%2FMX"


def test_save_surfaces_rule_violations_as_400(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.side_effect = ValidationError(
        errors=[{"field": "client_name", "message": "Client name is required", "code": "REQUIRED"}]
    )
    app.dependency_overrides[get_save_quote_use_case] = lambda: mock_use_case

    response = client.post("/v1/quotes", json={**VALID_PAYLOAD, "client_name": " "})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "client_name"


# ==============================================================================
# GET /v1/quotes/{client_name}
# ==============================================================================


def test_list_returns_quotes(
    app: FastAPI, client: TestClient, mock_use_case: Mock, sample_quote: Quote
) -> None:
    mock_use_case.execute.return_value = [sample_quote]
    app.dependency_overrides[get_list_client_quotes_use_case] = lambda: mock_use_case

    response = client.get("/v1/quotes/acme")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["monthly_payment"] == "9573.37"
    mock_use_case.execute.assert_called_once_with("acme")


def test_list_unknown_client_returns_empty_list(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.return_value = []
    app.dependency_overrides[get_list_client_quotes_use_case] = lambda: mock_use_case

    response = client.get("/v1/quotes/Nobody")

    assert response.status_code == 200
    assert response.json() == []
