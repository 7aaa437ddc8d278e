"""Pydantic models for Duffel API payloads and resources."""

from __future__ import annotations

from duffel.models.cards import (
    CreatePaymentCardRecordRequest,
    CreateTemporaryCardFromSavedRequest,
    PaymentCard,
    PaymentCardBrand,
)
from duffel.models.common import (
    Airline,
    Amount,
    CabinClass,
    Conditions,
    LoyaltyProgramme,
    LoyaltyProgrammeAccount,
    PassengerType,
    Place,
    Segment,
    Slice,
    SliceDate,
)
from duffel.models.offers import (
    AvailableService,
    GetOfferParams,
    ListOffersParams,
    ListOffersSort,
    Offer,
    OfferRequest,
    OfferRequestInput,
    OfferRequestPassenger,
    PartialOfferRequestInput,
    PassengerUpdateInput,
    PrivateFare,
)
from duffel.models.order_changes import (
    ListOrderChangeOffersParams,
    OrderChange,
    OrderChangeOffer,
    OrderChangeRequest,
    OrderChangeRequestParams,
    SliceAdd,
    SliceChange,
    SliceRemove,
)
from duffel.models.orders import (
    ActionTaken,
    AddOrderServiceInput,
    AirlineInitiatedChange,
    CreateOrderInput,
    ListAirlineInitiatedChangesParams,
    ListOrderCancellationsParams,
    ListOrdersParams,
    ListOrdersSort,
    Order,
    OrderCancellation,
    OrderPassenger,
    OrderType,
    OrderUpdateParams,
    PaymentCreateInput,
    PaymentType,
    ServiceCreateInput,
    TimeFilter,
    UpdateAirlineInitiatedChangeInput,
)

__all__ = [
    "ActionTaken",
    "AddOrderServiceInput",
    "Airline",
    "AirlineInitiatedChange",
    "Amount",
    "AvailableService",
    "CabinClass",
    "Conditions",
    "CreateOrderInput",
    "CreatePaymentCardRecordRequest",
    "CreateTemporaryCardFromSavedRequest",
    "GetOfferParams",
    "ListAirlineInitiatedChangesParams",
    "ListOffersParams",
    "ListOffersSort",
    "ListOrderCancellationsParams",
    "ListOrderChangeOffersParams",
    "ListOrdersParams",
    "ListOrdersSort",
    "LoyaltyProgramme",
    "LoyaltyProgrammeAccount",
    "Offer",
    "OfferRequest",
    "OfferRequestInput",
    "OfferRequestPassenger",
    "Order",
    "OrderCancellation",
    "OrderChange",
    "OrderChangeOffer",
    "OrderChangeRequest",
    "OrderChangeRequestParams",
    "OrderPassenger",
    "OrderType",
    "OrderUpdateParams",
    "PartialOfferRequestInput",
    "PassengerType",
    "PassengerUpdateInput",
    "PaymentCard",
    "PaymentCardBrand",
    "PaymentCreateInput",
    "PaymentType",
    "Place",
    "PrivateFare",
    "Segment",
    "ServiceCreateInput",
    "Slice",
    "SliceAdd",
    "SliceChange",
    "SliceDate",
    "SliceRemove",
    "TimeFilter",
    "UpdateAirlineInitiatedChangeInput",
]
