from __future__ import annotations

from duffel.models.order_changes import (
    ListOrderChangeOffersParams,
    OrderChange,
    OrderChangeOffer,
    OrderChangeRequest,
    OrderChangeRequestParams,
)
from duffel.models.orders import PaymentCreateInput
from duffel.resources._base import Resource, require_id

ORDER_CHANGE_REQUEST_ID_PREFIX = "ocr_"
ORDER_CHANGE_OFFER_ID_PREFIX = "oco_"
ORDER_CHANGE_ID_PREFIX = "oce_"


class OrderChangesMixin(Resource):
    def create_order_change_request(self, payload: OrderChangeRequestParams):
        return (
            self.request(OrderChangeRequest)
            .post("/air/order_change_requests", body=payload)
            .single()
        )

    def get_order_change_request(self, change_request_id: str):
        require_id(change_request_id, ORDER_CHANGE_REQUEST_ID_PREFIX)
        return (
            self.request(OrderChangeRequest)
            .get("/air/order_change_requests/%s", change_request_id)
            .single()
        )

    def create_pending_order_change(self, change_offer_id: str):
        require_id(change_offer_id, ORDER_CHANGE_OFFER_ID_PREFIX)
        return (
            self.request(OrderChange)
            .post(
                "/air/order_changes",
                body={"selected_order_change_offer": change_offer_id},
            )
            .single()
        )

    def confirm_order_change(self, change_id: str, payment: PaymentCreateInput):
        require_id(change_id, ORDER_CHANGE_ID_PREFIX)
        return (
            self.request(OrderChange)
            .post("/air/order_changes/%s/actions/confirm", change_id, body={"payment": payment})
            .single()
        )

    def get_order_change(self, change_id: str):
        require_id(change_id, ORDER_CHANGE_ID_PREFIX)
        return self.request(OrderChange).get("/air/order_changes/%s", change_id).single()

    def get_order_change_offer(self, change_offer_id: str):
        require_id(change_offer_id, ORDER_CHANGE_OFFER_ID_PREFIX)
        return (
            self.request(OrderChangeOffer)
            .get("/air/order_change_offers/%s", change_offer_id)
            .single()
        )

    def list_order_change_offers(
        self, params: ListOrderChangeOffersParams | None = None, limit: int | None = None
    ):
        return (
            self.request(OrderChangeOffer)
            .get("/air/order_change_offers")
            .with_params(params)
            .with_limit(limit)
            .iter()
        )
