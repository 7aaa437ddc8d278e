"""Per-resource method groups mixed into the clients."""

from __future__ import annotations

from duffel.resources.loyalty_programmes import LoyaltyProgrammesMixin
from duffel.resources.offer_requests import OfferRequestsMixin
from duffel.resources.offers import OffersMixin
from duffel.resources.order_cancellations import OrderCancellationsMixin
from duffel.resources.order_changes import OrderChangesMixin
from duffel.resources.orders import OrdersMixin
from duffel.resources.payment_cards import PaymentCardsMixin

__all__ = [
    "LoyaltyProgrammesMixin",
    "OfferRequestsMixin",
    "OffersMixin",
    "OrderCancellationsMixin",
    "OrderChangesMixin",
    "OrdersMixin",
    "PaymentCardsMixin",
]
