"""Offer requests and the offers airlines return for them."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from duffel.models.common import (
    Airline,
    Amount,
    CabinClass,
    Conditions,
    LoyaltyProgrammeAccount,
    PassengerType,
    Slice,
    SliceDate,
    amount_of,
)
from duffel.request import Query, QueryParams


class PrivateFareType(str, Enum):
    CORPORATE = "corporate"
    LEISURE = "leisure"
    NEGOTIATED = "negotiated"


class ListOffersSort(str, Enum):
    TOTAL_AMOUNT = "total_amount"
    TOTAL_DURATION = "total_duration"


class PrivateFare(BaseModel):
    corporate_code: str | None = None
    tracking_reference: str | None = None
    tour_code: str | None = None
    type: PrivateFareType | None = None


class OfferRequestPassenger(BaseModel):
    """A traveller; give either ``age`` or ``type``, not both."""

    id: str | None = None
    type: PassengerType | None = None
    age: int | None = None
    given_name: str | None = None
    family_name: str | None = None
    fare_type: str | None = None
    loyalty_programme_accounts: list[LoyaltyProgrammeAccount] = []


class OfferRequestInput(BaseModel):
    """Search criteria for ``POST /air/offer_requests``.

    ``return_offers`` and ``supplier_timeout`` travel in the query string,
    everything else in the JSON body.
    """

    passengers: list[OfferRequestPassenger] = []
    slices: list[SliceDate] = []
    cabin_class: CabinClass | None = None
    max_connections: int | None = None
    private_fares: dict[str, list[PrivateFare]] | None = None

    return_offers: bool = Field(True, exclude=True)
    supplier_timeout: int | None = Field(None, exclude=True)

    def encode(self, query: Query) -> None:
        query["return_offers"] = "true" if self.return_offers else "false"
        if self.supplier_timeout:
            query["supplier_timeout"] = str(self.supplier_timeout)


class PartialOfferRequestInput(BaseModel):
    partial_offer_request_id: str
    selected_partial_offers: list[str] = []

    def encode(self, query: Query) -> None:
        if self.selected_partial_offers:
            query["selected_partial_offer[]"] = list(self.selected_partial_offers)


class PaymentRequirements(BaseModel):
    requires_instant_payment: bool
    price_guarantee_expires_at: datetime | None = None
    payment_required_by: datetime | None = None


class AvailableServiceMetadata(BaseModel):
    type: str | None = None
    maximum_weight_kg: int | None = None
    maximum_length_cm: int | None = None
    maximum_height_cm: int | None = None
    maximum_depth_cm: int | None = None
    designator: str | None = None
    name: str | None = None
    disclosures: list[str] = []
    meal: str | None = None
    merchant_copy: str | None = None
    refund_amount: str | None = None
    terms_and_conditions_url: str | None = None


class AvailableService(BaseModel):
    """An ancillary (bag, seat, meal...) that can be added to an offer or order."""

    id: str
    type: str
    maximum_quantity: int = 1
    passenger_ids: list[str] = []
    segment_ids: list[str] = []
    total_amount: str
    total_currency: str
    metadata: AvailableServiceMetadata | None = None

    @property
    def total(self) -> Amount:
        return Amount(self.total_amount, self.total_currency)


class Offer(BaseModel):
    id: str
    live_mode: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    expires_at: datetime | None = None
    total_amount: str
    total_currency: str
    base_amount: str | None = None
    base_currency: str | None = None
    tax_amount: str | None = None
    tax_currency: str | None = None
    total_emissions_kg: str | None = None
    owner: Airline
    slices: list[Slice] = []
    passengers: list[OfferRequestPassenger] = []
    partial: bool = False
    passenger_identity_documents_required: bool = False
    supported_passenger_identity_document_types: list[str] = []
    supported_loyalty_programmes: list[str] = []
    payment_requirements: PaymentRequirements | None = None
    available_services: list[AvailableService] | None = None
    conditions: Conditions | None = None
    private_fares: list[PrivateFare] = []

    @property
    def total(self) -> Amount:
        return Amount(self.total_amount, self.total_currency)

    @property
    def base(self) -> Amount | None:
        return amount_of(self.base_amount, self.base_currency)

    @property
    def tax(self) -> Amount | None:
        return amount_of(self.tax_amount, self.tax_currency)


class OfferRequest(BaseModel):
    id: str
    live_mode: bool = False
    client_key: str | None = None
    created_at: datetime | None = None
    cabin_class: CabinClass | None = None
    slices: list[Slice] = []
    passengers: list[OfferRequestPassenger] = []
    offers: list[Offer] = []


class ListOffersParams(QueryParams):
    sort: ListOffersSort | None = None
    max_connections: int | None = None


class GetOfferParams(BaseModel):
    return_available_services: bool = False

    def encode(self, query: Query) -> None:
        if self.return_available_services:
            query["return_available_services"] = "true"


class PassengerUpdateInput(BaseModel):
    given_name: str | None = None
    family_name: str | None = None
    loyalty_programme_accounts: list[LoyaltyProgrammeAccount] = []
