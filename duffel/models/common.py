"""Shared building blocks: places, carriers, slices, amounts."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, Field


class Amount(NamedTuple):
    """A decimal string and its ISO 4217 currency, exactly as the API sent them."""

    amount: str
    currency: str

    def to_decimal(self) -> Decimal:
        return Decimal(self.amount)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


def amount_of(value: str | None, currency: str | None) -> Amount | None:
    if value is None or currency is None:
        return None
    return Amount(value, currency)


Metadata = dict[str, Any]


class CabinClass(str, Enum):
    FIRST = "first"
    BUSINESS = "business"
    PREMIUM_ECONOMY = "premium_economy"
    ECONOMY = "economy"


class PassengerType(str, Enum):
    ADULT = "adult"
    CHILD = "child"
    INFANT_WITHOUT_SEAT = "infant_without_seat"


class Airline(BaseModel):
    id: str
    name: str
    iata_code: str | None = None
    logo_symbol_url: str | None = None
    logo_lockup_url: str | None = None
    conditions_of_carriage_url: str | None = None


class Aircraft(BaseModel):
    id: str
    name: str
    iata_code: str | None = None


class Place(BaseModel):
    """An airport or a city; ``type`` tells which."""

    id: str
    name: str
    type: str | None = None
    iata_code: str | None = None
    iata_city_code: str | None = None
    iata_country_code: str | None = None
    city_name: str | None = None
    time_zone: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class Baggage(BaseModel):
    type: str
    quantity: int


class SegmentPassenger(BaseModel):
    passenger_id: str
    cabin_class: CabinClass | None = None
    cabin_class_marketing_name: str | None = None
    fare_basis_code: str | None = None
    baggages: list[Baggage] = []


class Segment(BaseModel):
    id: str
    origin: Place
    destination: Place
    departing_at: datetime
    arriving_at: datetime
    duration: str | None = None
    distance: str | None = None
    aircraft: Aircraft | None = None
    marketing_carrier: Airline | None = None
    marketing_carrier_flight_number: str | None = None
    operating_carrier: Airline | None = None
    operating_carrier_flight_number: str | None = None
    origin_terminal: str | None = None
    destination_terminal: str | None = None
    passengers: list[SegmentPassenger] = []


class ChangeCondition(BaseModel):
    allowed: bool
    penalty_amount: str | None = None
    penalty_currency: str | None = None

    @property
    def penalty(self) -> Amount | None:
        return amount_of(self.penalty_amount, self.penalty_currency)


class Conditions(BaseModel):
    refund_before_departure: ChangeCondition | None = None
    change_before_departure: ChangeCondition | None = None


class Slice(BaseModel):
    id: str
    origin: Place
    destination: Place
    duration: str | None = None
    fare_brand_name: str | None = None
    segments: list[Segment] = []
    conditions: Conditions | None = None


class LoyaltyProgrammeAccount(BaseModel):
    airline_iata_code: str
    account_number: str


class LoyaltyProgramme(BaseModel):
    """An airline frequent-flyer programme."""

    id: str
    name: str
    alliance: str | None = None
    logo_url: str | None = None
    owner_airline_id: str | None = None


class PaymentMethod(str, Enum):
    ARC_BSP_CASH = "arc_bsp_cash"
    BALANCE = "balance"
    CARD = "card"
    VOUCHER = "voucher"
    AWAITING_PAYMENT = "awaiting_payment"
    ORIGINAL_FORM_OF_PAYMENT = "original_form_of_payment"
    AIRLINE_CREDITS = "airline_credits"


class SliceDate(BaseModel):
    """Search criteria for one leg of a journey."""

    origin: str = Field(..., description="IATA code of the origin airport or city")
    destination: str = Field(..., description="IATA code of the destination")
    departure_date: date
