from __future__ import annotations

from duffel.models.cards import (
    CreatePaymentCardRecordRequest,
    CreateTemporaryCardFromSavedRequest,
    PaymentCard,
)
from duffel.resources._base import Resource


class PaymentCardsMixin(Resource):
    def create_payment_card_record(self, payload: CreatePaymentCardRecordRequest):
        return self.request(PaymentCard).post("/vault/cards", body=payload).single()

    def create_temporary_card_from_saved(self, payload: CreateTemporaryCardFromSavedRequest):
        """Temporary single-use record for a saved card, re-supplying its CVC."""
        return self.request(PaymentCard).post("/vault/cards", body=payload).single()

    def delete_payment_card_record(self, card_id: str):
        return self.request(PaymentCard).delete("/vault/cards/%s", card_id).empty()
