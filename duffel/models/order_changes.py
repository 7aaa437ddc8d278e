"""Passenger-initiated order changes.

Flow: create an :class:`OrderChangeRequest` for a paid order, pick one of
its :class:`OrderChangeOffer` entries, create a pending
:class:`OrderChange` from it, then confirm that change with a payment.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel

from duffel.models.common import Amount, CabinClass, Conditions, PaymentMethod, Slice
from duffel.models.offers import PrivateFare
from duffel.request import QueryParams


class ListOrderChangeOffersSort(str, Enum):
    CHANGE_TOTAL_AMOUNT = "change_total_amount"
    TOTAL_DURATION = "total_duration"


class SliceAdd(BaseModel):
    origin: str
    destination: str
    departure_date: date
    cabin_class: CabinClass


class SliceRemove(BaseModel):
    slice_id: str


class SliceChange(BaseModel):
    add: list[SliceAdd] = []
    remove: list[SliceRemove] = []


class SliceChangeset(BaseModel):
    add: list[Slice] = []
    remove: list[Slice] = []


class OrderChangeRequestParams(BaseModel):
    order_id: str
    slices: SliceChange | None = None
    private_fares: dict[str, list[PrivateFare]] | None = None


class _ChangeTotals(BaseModel):
    change_total_amount: str
    change_total_currency: str
    new_total_amount: str
    new_total_currency: str
    penalty_total_amount: str | None = None
    penalty_total_currency: str | None = None

    @property
    def change_total(self) -> Amount:
        return Amount(self.change_total_amount, self.change_total_currency)

    @property
    def new_total(self) -> Amount:
        return Amount(self.new_total_amount, self.new_total_currency)

    @property
    def penalty_total(self) -> Amount | None:
        if self.penalty_total_amount is None or self.penalty_total_currency is None:
            return None
        return Amount(self.penalty_total_amount, self.penalty_total_currency)


class OrderChangeOffer(_ChangeTotals):
    id: str
    order_change_id: str | None = None
    slices: SliceChangeset = SliceChangeset()
    refund_to: PaymentMethod | None = None
    conditions: Conditions | None = None
    private_fares: list[PrivateFare] = []
    live_mode: bool = False
    expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderChangeRequest(BaseModel):
    id: str
    order_id: str
    slices: SliceChange = SliceChange()
    order_change_offers: list[OrderChangeOffer] = []
    live_mode: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderChange(_ChangeTotals):
    id: str
    order_id: str
    slices: SliceChangeset = SliceChangeset()
    refund_to: PaymentMethod | None = None
    live_mode: bool = False
    expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    confirmed_at: datetime | None = None


class ListOrderChangeOffersParams(QueryParams):
    order_change_request_id: str | None = None
    sort: ListOrderChangeOffersSort | None = None
    max_connections: int | None = None
