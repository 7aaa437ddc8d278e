"""Payment card records stored in the Duffel vault."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class PaymentCardBrand(str, Enum):
    VISA = "visa"
    AIRPLUS = "uatp"
    MASTERCARD = "mastercard"
    AMERICAN_EXPRESS = "american_express"
    DINERS_CLUB = "diners_club"
    JCB = "jcb"


class CreatePaymentCardRecordRequest(BaseModel):
    address_city: str
    address_country_code: str
    address_line_1: str
    address_line_2: str | None = None
    address_postal_code: str
    address_region: str | None = None
    expiry_month: str
    expiry_year: str
    name: str
    number: str
    security_code: str = Field(..., serialization_alias="cvc")
    multi_use: bool = Field(
        False, description="Keep the card for later use instead of a temporary record"
    )


class CreateTemporaryCardFromSavedRequest(BaseModel):
    card_id: str
    security_code: str = Field(..., serialization_alias="cvc")


class PaymentCard(BaseModel):
    id: str
    live_mode: bool = False
    last_4_digits: str | None = None
    multi_use: bool = False
    brand: str | None = None
    unavailable_at: datetime | None = None
