from __future__ import annotations

from duffel.models.offers import AvailableService
from duffel.models.orders import (
    AddOrderServiceInput,
    AirlineInitiatedChange,
    CreateOrderInput,
    ListAirlineInitiatedChangesParams,
    ListOrdersParams,
    Order,
    OrderUpdateParams,
    UpdateAirlineInitiatedChangeInput,
)
from duffel.resources._base import Resource


class OrdersMixin(Resource):
    def create_order(self, payload: CreateOrderInput):
        return self.request(Order).post("/air/orders", body=payload).single()

    def get_order(self, order_id: str):
        return self.request(Order).get("/air/orders/%s", order_id).single()

    def update_order(self, order_id: str, payload: OrderUpdateParams):
        return self.request(Order).patch("/air/orders/%s", order_id, body=payload).single()

    def list_orders(self, params: ListOrdersParams | None = None, limit: int | None = None):
        return (
            self.request(Order)
            .get("/air/orders")
            .with_params(params)
            .with_limit(limit)
            .iter()
        )

    def list_order_services(self, order_id: str):
        """Services still purchasable for a booked order (single page)."""
        return (
            self.request(AvailableService)
            .get("/air/orders/%s/available_services", order_id)
            .slice()
        )

    def add_order_services(self, order_id: str, payload: AddOrderServiceInput):
        return self.request(Order).post("/air/orders/%s/services", order_id, body=payload).single()

    # -- airline-initiated changes -------------------------------------------

    def list_airline_initiated_changes(
        self, params: ListAirlineInitiatedChangesParams | None = None
    ):
        return (
            self.request(AirlineInitiatedChange)
            .get("/air/airline_initiated_changes")
            .with_params(params)
            .slice()
        )

    def update_airline_initiated_change(
        self, change_id: str, payload: UpdateAirlineInitiatedChangeInput
    ):
        return (
            self.request(AirlineInitiatedChange)
            .patch("/air/airline_initiated_changes/%s", change_id, body=payload)
            .single()
        )

    def accept_airline_initiated_change(self, change_id: str):
        return (
            self.request(AirlineInitiatedChange)
            .post("/air/airline_initiated_changes/%s/actions/accept", change_id)
            .single()
        )
