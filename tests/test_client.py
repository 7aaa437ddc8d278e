"""End-to-end client tests against httpx.MockTransport."""

from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest

from duffel import AirlineError, AsyncDuffel, Duffel, ErrorCode, ErrorType, IterState
from duffel.config import Settings
from duffel.models import (
    ListOffersParams,
    ListOffersSort,
    OfferRequestInput,
    PartialOfferRequestInput,
)
from duffel.models.cards import CreateTemporaryCardFromSavedRequest
from duffel.models.orders import PaymentCreateInput, PaymentType

_AIRLINE_UNKNOWN = {
    "errors": [
        {
            "type": "airline_error",
            "title": "Unexpected error",
            "source": {"pointer": "/", "field": ""},
            "message": "The airline responded with an unexpected error, please contact support",
            "documentation_url": "https://duffel.com/docs/api/overview/errors",
            "code": "airline_unknown",
        }
    ],
    "meta": {"status": 400, "request_id": "FZW0H3HdJwKk5HMAAKxB"},
}

_OFFER = {
    "id": "off_1",
    "total_amount": "120.50",
    "total_currency": "GBP",
    "owner": {"id": "arl_ba", "name": "British Airways", "iata_code": "BA"},
}

_ORDER_CHANGE = {
    "id": "oce_1",
    "order_id": "ord_1",
    "change_total_amount": "25.00",
    "change_total_currency": "GBP",
    "new_total_amount": "145.50",
    "new_total_currency": "GBP",
}


class Recorder:
    """Records requests and replies with a fixed status and body."""

    def __init__(self, body=None, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


class TestOfferRequests:
    def test_airline_unknown_error(self, make_client):
        rec = Recorder(_AIRLINE_UNKNOWN, status_code=400)
        client = make_client(rec)
        with pytest.raises(AirlineError) as exc_info:
            client.create_offer_request(OfferRequestInput(return_offers=False))

        assert rec.last.method == "POST"
        assert rec.last.url.path == "/air/offer_requests"
        assert rec.last.url.params["return_offers"] == "false"
        assert "return_offers" not in rec.last_json()["data"]

        err = exc_info.value
        assert err.is_type(ErrorType.AIRLINE_ERROR)
        assert err.is_code(ErrorCode.AIRLINE_UNKNOWN)
        assert str(err) == (
            "duffel: The airline responded with an unexpected error, please contact support"
        )

    def test_headers_sent(self, make_client):
        rec = Recorder({"data": {"id": "orq_1"}})
        make_client(rec, user_agent="acme/1.0").get_offer_request("orq_1")
        headers = rec.last.headers
        assert headers["authorization"] == "Bearer duffel_test_123"
        assert headers["duffel-version"] == "v2"
        assert headers["accept"] == "application/json"
        assert headers["user-agent"].startswith("duffel-python/")
        assert headers["user-agent"].endswith("acme/1.0")

    def test_partial_offer_request_selection(self, make_client):
        rec = Recorder({"data": {"id": "prq_1"}})
        payload = PartialOfferRequestInput(
            partial_offer_request_id="prq_1", selected_partial_offers=["off_a", "off_b"]
        )
        make_client(rec).get_partial_offer_request(payload)
        assert rec.last.url.path == "/air/partial_offer_requests/prq_1"
        assert rec.last.url.params.get_list("selected_partial_offer[]") == ["off_a", "off_b"]


class TestOffers:
    def test_get_offer(self, make_client):
        rec = Recorder({"data": _OFFER})
        offer = make_client(rec).get_offer("off_1")
        assert offer.owner.iata_code == "BA"
        assert rec.last.url.path == "/air/offers/off_1"

    def test_get_offer_rejects_wrong_prefix_without_io(self, make_client):
        rec = Recorder({"data": _OFFER})
        with pytest.raises(ValueError, match="off_"):
            make_client(rec).get_offer("ord_1")
        assert rec.requests == []

    def test_list_offers(self, make_client):
        rec = Recorder({"data": [_OFFER], "meta": {"after": None}})
        client = make_client(rec)
        offers = client.list_offers(
            "orq_1", ListOffersParams(sort=ListOffersSort.TOTAL_AMOUNT), limit=10
        ).collect()
        assert [o.id for o in offers] == ["off_1"]
        params = rec.last.url.params
        assert params["offer_request_id"] == "orq_1"
        assert params["sort"] == "total_amount"
        assert params["limit"] == "10"

    def test_list_offers_bad_id_is_failed_iterator(self, make_client):
        rec = Recorder({"data": []})
        it = make_client(rec).list_offers("ord_1")
        assert it.state is IterState.FAILED
        assert isinstance(it.err, ValueError)
        assert not it.next()
        assert rec.requests == []


class TestOrdersAndChanges:
    def test_cancellation_body(self, make_client):
        rec = Recorder({"data": {"id": "ore_1", "order_id": "ord_1"}})
        make_client(rec).create_order_cancellation("ord_1")
        assert rec.last.url.path == "/air/order_cancellations"
        assert rec.last_json() == {"data": {"order_id": "ord_1"}}

    def test_confirm_cancellation_has_no_body(self, make_client):
        rec = Recorder({"data": {"id": "ore_1", "order_id": "ord_1"}})
        make_client(rec).confirm_order_cancellation("ore_1")
        assert rec.last.url.path == "/air/order_cancellations/ore_1/actions/confirm"
        assert rec.last.content == b""

    def test_confirm_order_change_payment(self, make_client):
        rec = Recorder({"data": _ORDER_CHANGE})
        payment = PaymentCreateInput(type=PaymentType.BALANCE, amount="10.00", currency="GBP")
        change = make_client(rec).confirm_order_change("oce_1", payment)
        assert change.new_total.to_decimal() == Decimal("145.50")
        assert rec.last.url.path == "/air/order_changes/oce_1/actions/confirm"
        assert rec.last_json() == {
            "data": {"payment": {"type": "balance", "amount": "10.00", "currency": "GBP"}}
        }

    def test_change_id_prefix_checked(self, make_client):
        with pytest.raises(ValueError):
            make_client(Recorder()).get_order_change("ocr_1")

    def test_order_services_slice(self, make_client):
        service = {"id": "ase_1", "type": "baggage", "total_amount": "30.00", "total_currency": "GBP"}
        rec = Recorder({"data": [service]})
        services = make_client(rec).list_order_services("ord_1")
        assert rec.last.url.path == "/air/orders/ord_1/available_services"
        assert len(services) == 1


class TestPaymentCards:
    def test_temporary_card_sends_cvc(self, make_client):
        rec = Recorder({"data": {"id": "tcd_2"}}, status_code=201)
        card = make_client(rec).create_temporary_card_from_saved(
            CreateTemporaryCardFromSavedRequest(card_id="tcd_1", security_code="123")
        )
        assert card.id == "tcd_2"
        assert rec.last_json() == {"data": {"card_id": "tcd_1", "cvc": "123"}}

    def test_delete(self, make_client):
        rec = Recorder(status_code=204)
        assert make_client(rec).delete_payment_card_record("tcd_1") is None
        assert rec.last.method == "DELETE"
        assert rec.last.url.path == "/vault/cards/tcd_1"

    def test_delete_ignores_plain_text_body(self, make_client):
        client = make_client(lambda req: httpx.Response(200, text="OK"))
        assert client.delete_payment_card_record("tcd_1") is None


class TestConstruction:
    def test_missing_token(self, monkeypatch):
        monkeypatch.setattr("duffel.config.settings", Settings(_env_file=None, api_token=""))
        with pytest.raises(ValueError):
            Duffel()

    def test_token_from_settings(self, monkeypatch):
        monkeypatch.setattr(
            "duffel.config.settings", Settings(_env_file=None, api_token="duffel_test_env")
        )
        with Duffel() as client:
            assert client.credentials.token == "duffel_test_env"

    def test_context_manager_closes_http_client(self):
        with Duffel("t", _transport=httpx.MockTransport(Recorder())) as client:
            pass
        assert client._client.is_closed

    def test_rate_limit_starts_empty(self, make_client):
        assert make_client(Recorder()).rate_limit is None


class TestAsyncClient:
    async def test_airline_unknown_error(self, make_async_client):
        rec = Recorder(_AIRLINE_UNKNOWN, status_code=400)
        client = make_async_client(rec)
        with pytest.raises(AirlineError) as exc_info:
            await client.create_offer_request(OfferRequestInput(return_offers=False))
        assert exc_info.value.is_code(ErrorCode.AIRLINE_UNKNOWN)
        assert rec.last.url.params["return_offers"] == "false"

    async def test_list_offers(self, make_async_client):
        rec = Recorder({"data": [_OFFER], "meta": {"after": None}})
        client = make_async_client(rec)
        offers = [o async for o in client.list_offers("orq_1")]
        assert [o.id for o in offers] == ["off_1"]

    async def test_bad_offer_request_id(self, make_async_client):
        it = make_async_client(Recorder()).list_offers("xyz")
        assert not await it.next()
        assert isinstance(it.err, ValueError)

    async def test_context_manager(self):
        async with AsyncDuffel("t", _transport=httpx.MockTransport(Recorder())) as client:
            pass
        assert client._client.is_closed
