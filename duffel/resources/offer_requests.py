from __future__ import annotations

from duffel.models.offers import (
    OfferRequest,
    OfferRequestInput,
    PartialOfferRequestInput,
)
from duffel.resources._base import Resource


class OfferRequestsMixin(Resource):
    def create_offer_request(self, payload: OfferRequestInput):
        """Search for offers. ``return_offers`` is sent as a query flag."""
        return (
            self.request(OfferRequest)
            .post("/air/offer_requests", body=payload)
            .with_params(payload)
            .single()
        )

    def get_offer_request(self, offer_request_id: str):
        return self.request(OfferRequest).get("/air/offer_requests/%s", offer_request_id).single()

    def list_offer_requests(self, limit: int | None = None):
        return self.request(OfferRequest).get("/air/offer_requests").with_limit(limit).iter()

    def create_partial_offer_request(self, payload: OfferRequestInput):
        return self.request(OfferRequest).post("/air/partial_offer_requests", body=payload).single()

    def get_partial_offer_request(self, payload: PartialOfferRequestInput):
        """Next leg of a partial search, narrowed by ``selected_partial_offers``."""
        return (
            self.request(OfferRequest)
            .get("/air/partial_offer_requests/%s", payload.partial_offer_request_id)
            .with_params(payload)
            .single()
        )

    def get_partial_offer_request_fares(self, payload: PartialOfferRequestInput):
        return (
            self.request(OfferRequest)
            .get("/air/partial_offer_requests/%s/fares", payload.partial_offer_request_id)
            .with_params(payload)
            .single()
        )
