"""Tests for duffel.request: building specs without touching the network."""

from __future__ import annotations

from datetime import date, datetime, timezone

import httpx
import pytest

from duffel.config import Credentials
from duffel.executor import Executor
from duffel.models import (
    ListOrdersParams,
    ListOrdersSort,
    Offer,
    OfferRequestInput,
    OfferRequestPassenger,
    PartialOfferRequestInput,
    PassengerType,
    SliceDate,
    TimeFilter,
)
from duffel.models.cards import CreateTemporaryCardFromSavedRequest
from duffel.request import RequestBuilder, encode_query, serialize_body


@pytest.fixture
def executor():
    creds = Credentials(token="duffel_test_abc", user_agent="acme/1.0")
    http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(500)))
    yield Executor(creds, http)
    http.close()


def _builder(executor) -> RequestBuilder:
    return RequestBuilder(executor, Offer)


class TestHeaders:
    def test_get_headers(self, executor):
        spec = _builder(executor).get("/air/offers").build()
        assert spec.headers["Authorization"] == "Bearer duffel_test_abc"
        assert spec.headers["Accept"] == "application/json"
        assert spec.headers["Duffel-Version"] == "v2"
        assert spec.headers["User-Agent"].endswith(" acme/1.0")
        assert "Content-Type" not in spec.headers

    def test_post_with_body_sets_content_type(self, executor):
        spec = _builder(executor).post("/air/orders", body={"a": 1}).build()
        assert spec.headers["Content-Type"] == "application/json"

    def test_post_without_body(self, executor):
        spec = _builder(executor).post("/air/orders/%s/actions/accept", "ord_1").build()
        assert spec.json is None
        assert "Content-Type" not in spec.headers


class TestPaths:
    def test_host_prefix(self, executor):
        spec = _builder(executor).get("/air/offers").build()
        assert spec.url == "https://api.duffel.com/air/offers"

    def test_placeholder_substitution_is_quoted(self, executor):
        spec = _builder(executor).get("/air/orders/%s", "ord/../x y").build()
        assert spec.url == "https://api.duffel.com/air/orders/ord%2F..%2Fx%20y"

    def test_multiple_placeholders(self, executor):
        spec = (
            _builder(executor)
            .patch("/air/offers/%s/passengers/%s", "off_1", "pas_2", body={})
            .build()
        )
        assert spec.method == "PATCH"
        assert spec.url.endswith("/air/offers/off_1/passengers/pas_2")

    def test_build_without_verb_fails(self, executor):
        with pytest.raises(ValueError):
            _builder(executor).build()


class TestBody:
    def test_body_is_wrapped_in_data_envelope(self, executor):
        payload = OfferRequestInput(
            passengers=[OfferRequestPassenger(type=PassengerType.ADULT)],
            slices=[SliceDate(origin="LHR", destination="JFK", departure_date=date(2025, 6, 1))],
        )
        spec = _builder(executor).post("/air/offer_requests", body=payload).build()
        assert spec.json == {
            "data": {
                "passengers": [{"type": "adult", "loyalty_programme_accounts": []}],
                "slices": [
                    {"origin": "LHR", "destination": "JFK", "departure_date": "2025-06-01"}
                ],
            }
        }

    def test_query_only_fields_stay_out_of_body(self, executor):
        payload = OfferRequestInput(return_offers=False, supplier_timeout=5000)
        spec = (
            _builder(executor)
            .post("/air/offer_requests", body=payload)
            .with_params(payload)
            .build()
        )
        assert "return_offers" not in spec.json["data"]
        assert "supplier_timeout" not in spec.json["data"]
        assert spec.params == {"return_offers": "false", "supplier_timeout": "5000"}

    def test_serialization_alias(self):
        body = serialize_body(CreateTemporaryCardFromSavedRequest(card_id="tcd_1", security_code="123"))
        assert body == {"card_id": "tcd_1", "cvc": "123"}

    def test_nested_models_in_dict(self):
        payload = {"payment": CreateTemporaryCardFromSavedRequest(card_id="c", security_code="1")}
        assert serialize_body(payload) == {"payment": {"card_id": "c", "cvc": "1"}}

    def test_get_payload_goes_to_query(self, executor):
        params = ListOrdersParams(booking_reference="RZPYJH")
        spec = _builder(executor).get("/air/orders").body(params).build()
        assert spec.json is None
        assert spec.params == {"booking_reference": "RZPYJH"}

    def test_get_payload_without_encoder_contributes_nothing(self, executor):
        spec = _builder(executor).get("/air/orders").body({"x": 1}).build()
        assert spec.params == {}
        assert spec.json is None


class TestQuery:
    def test_with_param_formats_values(self, executor):
        spec = (
            _builder(executor)
            .get("/air/offers")
            .with_param("offer_request_id", "orq_1")
            .with_param("flag", True)
            .with_param("ids", ["a", "b"])
            .build()
        )
        assert spec.params == {"offer_request_id": "orq_1", "flag": "true", "ids": ["a", "b"]}

    def test_insertion_order_preserved(self, executor):
        spec = (
            _builder(executor)
            .get("/x")
            .with_param("z", 1)
            .with_param("a", 2)
            .build()
        )
        assert list(spec.params) == ["z", "a"]

    def test_query_params_model_encoding(self):
        params = ListOrdersParams(
            awaiting_payment=True,
            sort=ListOrdersSort.PAYMENT_REQUIRED_BY_DESC,
            owner_id=["arl_1", "arl_2"],
            created_at=TimeFilter(after=datetime(2024, 1, 1, tzinfo=timezone.utc)),
        )
        assert encode_query(params) == {
            "awaiting_payment": "true",
            "sort": "-payment_required_by",
            "owner_id": ["arl_1", "arl_2"],
            "created_at[after]": "2024-01-01T00:00:00+00:00",
        }

    def test_unset_fields_skipped(self):
        assert encode_query(ListOrdersParams()) == {}

    def test_repeated_key_encoder(self):
        payload = PartialOfferRequestInput(
            partial_offer_request_id="prq_1", selected_partial_offers=["off_1", "off_2"]
        )
        assert encode_query(payload) == {"selected_partial_offer[]": ["off_1", "off_2"]}

    def test_none_and_plain_values_ignored(self):
        assert encode_query(None, "text", {"a": 1}, 3) == {}

    def test_limit_bounds(self, executor):
        with pytest.raises(ValueError):
            _builder(executor).get("/x").with_limit(0)
        with pytest.raises(ValueError):
            _builder(executor).get("/x").with_limit(201)


class TestRequestSpec:
    def test_build_is_repeatable(self, executor):
        builder = _builder(executor).get("/air/offers").with_param("a", 1)
        assert builder.build() == builder.build()

    def test_with_params_returns_copy(self, executor):
        spec = _builder(executor).get("/air/offers").with_param("a", 1).build()
        paged = spec.with_params(after="g2wA")
        assert paged.params == {"a": "1", "after": "g2wA"}
        assert spec.params == {"a": "1"}
