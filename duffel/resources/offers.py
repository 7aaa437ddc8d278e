from __future__ import annotations

from duffel.models.offers import (
    GetOfferParams,
    ListOffersParams,
    Offer,
    OfferRequestPassenger,
    PassengerUpdateInput,
)
from duffel.resources._base import Resource, require_id

OFFER_ID_PREFIX = "off_"
OFFER_REQUEST_ID_PREFIX = "orq_"


class OffersMixin(Resource):
    def get_offer(self, offer_id: str, params: GetOfferParams | None = None):
        require_id(offer_id, OFFER_ID_PREFIX, "offer_id")
        return self.request(Offer).get("/air/offers/%s", offer_id).with_params(params).single()

    def list_offers(
        self,
        offer_request_id: str,
        params: ListOffersParams | None = None,
        limit: int | None = None,
    ):
        """Iterate the offers of one offer request.

        An invalid ``offer_request_id`` yields an iterator that is already
        failed rather than raising here.
        """
        try:
            require_id(offer_request_id, OFFER_REQUEST_ID_PREFIX, "offer_request_id")
        except ValueError as exc:
            return self._failed_iter(exc)
        return (
            self.request(Offer)
            .get("/air/offers")
            .with_param("offer_request_id", offer_request_id)
            .with_params(params)
            .with_limit(limit)
            .iter()
        )

    def update_offer_passenger(
        self, offer_id: str, passenger_id: str, payload: PassengerUpdateInput
    ):
        return (
            self.request(OfferRequestPassenger)
            .patch("/air/offers/%s/passengers/%s", offer_id, passenger_id, body=payload)
            .single()
        )
