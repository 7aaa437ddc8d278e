from __future__ import annotations

from duffel.models.orders import ListOrderCancellationsParams, OrderCancellation
from duffel.resources._base import Resource, require_id

ORDER_CANCELLATION_ID_PREFIX = "ore_"


class OrderCancellationsMixin(Resource):
    def create_order_cancellation(self, order_id: str):
        """Quote a cancellation; nothing is cancelled until it is confirmed."""
        return (
            self.request(OrderCancellation)
            .post("/air/order_cancellations", body={"order_id": order_id})
            .single()
        )

    def confirm_order_cancellation(self, cancellation_id: str):
        require_id(cancellation_id, ORDER_CANCELLATION_ID_PREFIX, "cancellation_id")
        return (
            self.request(OrderCancellation)
            .post("/air/order_cancellations/%s/actions/confirm", cancellation_id)
            .single()
        )

    def get_order_cancellation(self, cancellation_id: str):
        require_id(cancellation_id, ORDER_CANCELLATION_ID_PREFIX, "cancellation_id")
        return (
            self.request(OrderCancellation)
            .get("/air/order_cancellations/%s", cancellation_id)
            .single()
        )

    def list_order_cancellations(
        self, params: ListOrderCancellationsParams | None = None, limit: int | None = None
    ):
        return (
            self.request(OrderCancellation)
            .get("/air/order_cancellations")
            .with_params(params)
            .with_limit(limit)
            .iter()
        )
