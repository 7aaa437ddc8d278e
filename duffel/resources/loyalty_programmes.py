from __future__ import annotations

from duffel.models.common import LoyaltyProgramme
from duffel.resources._base import Resource


class LoyaltyProgrammesMixin(Resource):
    def list_loyalty_programmes(self, limit: int | None = None):
        return (
            self.request(LoyaltyProgramme)
            .get("/air/loyalty_programmes")
            .with_limit(limit)
            .iter()
        )

    def get_loyalty_programme(self, programme_id: str):
        return (
            self.request(LoyaltyProgramme)
            .get("/air/loyalty_programmes/%s", programme_id)
            .single()
        )
