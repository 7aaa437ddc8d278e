"""Orders, their services, cancellations and airline-initiated changes."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel

from duffel.models.common import (
    Airline,
    Amount,
    Conditions,
    LoyaltyProgrammeAccount,
    Metadata,
    PassengerType,
    PaymentMethod,
    Slice,
    amount_of,
)
from duffel.request import QueryParams


class OrderType(str, Enum):
    HOLD = "hold"
    INSTANT = "instant"


class ListOrdersSort(str, Enum):
    PAYMENT_REQUIRED_BY_ASC = "payment_required_by"
    PAYMENT_REQUIRED_BY_DESC = "-payment_required_by"


class ActionTaken(str, Enum):
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    CHANGED = "changed"


class PaymentType(str, Enum):
    ARC_BSP_CASH = "arc_bsp_cash"
    BALANCE = "balance"
    CARD = "card"


class IdentityDocument(BaseModel):
    type: str
    unique_identifier: str
    issuing_country_code: str
    expires_on: date | None = None


class OrderPassenger(BaseModel):
    id: str
    type: PassengerType | None = None
    title: str | None = None
    given_name: str
    family_name: str
    born_on: date | None = None
    gender: str | None = None
    email: str | None = None
    phone_number: str | None = None
    infant_passenger_id: str | None = None
    identity_documents: list[IdentityDocument] = []
    loyalty_programme_accounts: list[LoyaltyProgrammeAccount] = []


class PaymentCreateInput(BaseModel):
    type: PaymentType
    amount: str
    currency: str
    three_d_secure_session_id: str | None = None


class PaymentStatus(BaseModel):
    awaiting_payment: bool = False
    payment_required_by: datetime | None = None
    price_guarantee_expires_at: datetime | None = None
    paid_at: datetime | None = None


class IssuedDocument(BaseModel):
    type: str
    unique_identifier: str
    passenger_ids: list[str] = []


class Service(BaseModel):
    id: str
    type: str
    quantity: int = 1
    passenger_ids: list[str] = []
    segment_ids: list[str] = []
    total_amount: str | None = None
    total_currency: str | None = None
    metadata: Metadata | None = None

    @property
    def total(self) -> Amount | None:
        return amount_of(self.total_amount, self.total_currency)


class ServiceCreateInput(BaseModel):
    id: str
    quantity: int = 1


class AddOrderServiceInput(BaseModel):
    add_services: list[ServiceCreateInput]
    payment: PaymentCreateInput


class CreateOrderInput(BaseModel):
    type: OrderType = OrderType.INSTANT
    selected_offers: list[str]
    passengers: list[OrderPassenger]
    payments: list[PaymentCreateInput] | None = None
    services: list[ServiceCreateInput] | None = None
    metadata: Metadata | None = None


class OrderUpdateParams(BaseModel):
    metadata: Metadata


class AirlineCredit(BaseModel):
    id: str
    credit_amount: str
    credit_currency: str
    credit_code: str | None = None
    credit_name: str | None = None
    issued_on: date | None = None
    passenger_id: str | None = None

    @property
    def credit(self) -> Amount:
        return Amount(self.credit_amount, self.credit_currency)


class OrderCancellation(BaseModel):
    """A pending or confirmed cancellation quoting the refund due."""

    id: str
    order_id: str
    live_mode: bool = False
    refund_to: PaymentMethod | None = None
    refund_amount: str | None = None
    refund_currency: str | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None
    confirmed_at: datetime | None = None
    airline_credits: list[AirlineCredit] = []

    @property
    def refund(self) -> Amount | None:
        return amount_of(self.refund_amount, self.refund_currency)


class AirlineInitiatedChange(BaseModel):
    """A schedule change pushed by the airline that may need acting on."""

    id: str
    order_id: str
    action_taken: ActionTaken | None = None
    action_taken_at: datetime | None = None
    added: list[Slice] = []
    removed: list[Slice] = []
    available_actions: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UpdateAirlineInitiatedChangeInput(BaseModel):
    action_taken: ActionTaken


class Order(BaseModel):
    id: str
    live_mode: bool = False
    booking_reference: str | None = None
    type: OrderType | None = None
    offer_id: str | None = None
    content: str | None = None
    created_at: datetime | None = None
    synced_at: datetime | None = None
    cancelled_at: datetime | None = None
    total_amount: str
    total_currency: str
    base_amount: str | None = None
    base_currency: str | None = None
    tax_amount: str | None = None
    tax_currency: str | None = None
    owner: Airline | None = None
    passengers: list[OrderPassenger] = []
    slices: list[Slice] = []
    services: list[Service] = []
    documents: list[IssuedDocument] = []
    conditions: Conditions | None = None
    payment_status: PaymentStatus | None = None
    cancellation: OrderCancellation | None = None
    airline_initiated_changes: list[AirlineInitiatedChange] = []
    metadata: Metadata | None = None

    @property
    def total(self) -> Amount:
        return Amount(self.total_amount, self.total_currency)

    @property
    def base(self) -> Amount | None:
        return amount_of(self.base_amount, self.base_currency)

    @property
    def tax(self) -> Amount | None:
        return amount_of(self.tax_amount, self.tax_currency)


class TimeFilter(BaseModel):
    before: datetime | None = None
    after: datetime | None = None


class ListOrdersParams(QueryParams):
    booking_reference: str | None = None
    awaiting_payment: bool | None = None
    sort: ListOrdersSort | None = None
    owner_id: list[str] | None = None
    origin_id: list[str] | None = None
    destination_id: list[str] | None = None
    passenger_name: list[str] | None = None
    departing_at: TimeFilter | None = None
    arriving_at: TimeFilter | None = None
    created_at: TimeFilter | None = None


class ListAirlineInitiatedChangesParams(QueryParams):
    order_id: str | None = None


class ListOrderCancellationsParams(QueryParams):
    order_id: str | None = None
