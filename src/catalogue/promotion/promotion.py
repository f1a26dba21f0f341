"""Promotion aggregate: an establishment offer valid within a date window.

Both ends of the window are inclusive. Each shopper session may redeem a
promotion once, and only while it is running.
"""

import json
from datetime import UTC, date, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Date, Identifier, String, Text

from catalogue.domain import catalogue
from catalogue.promotion.events import PromotionLaunched, PromotionRedeemed


class PromotionState(Enum):
    UPCOMING = "Upcoming"
    RUNNING = "Running"
    EXPIRED = "Expired"


@catalogue.aggregate(limit=None)
class Promotion:
    name: String(required=True, max_length=255)
    description: Text()
    establishment_id: Identifier()
    starts_on: Date(required=True)
    ends_on: Date(required=True)
    image_url: String(max_length=500)
    redeemed_by: Text()  # JSON array of session ids

    @invariant.post
    def window_must_not_end_before_it_starts(self):
        if self.starts_on and self.ends_on and self.ends_on < self.starts_on:
            raise ValidationError({"ends_on": ["Promotion cannot end before it starts"]})

    @classmethod
    def launch(cls, name, starts_on, ends_on, description=None, establishment_id=None, image_url=None, id=None):
        kwargs = {"id": id} if id is not None else {}
        promotion = cls(
            name=name,
            description=description,
            establishment_id=establishment_id,
            starts_on=starts_on,
            ends_on=ends_on,
            image_url=image_url,
            redeemed_by=json.dumps([]),
            **kwargs,
        )
        promotion.raise_(
            PromotionLaunched(
                promotion_id=str(promotion.id),
                name=promotion.name,
                establishment_id=promotion.establishment_id,
                starts_on=promotion.starts_on,
                ends_on=promotion.ends_on,
            )
        )
        return promotion

    @property
    def redemptions(self):
        return json.loads(self.redeemed_by) if self.redeemed_by else []

    def state_on(self, on_date: date) -> PromotionState:
        if on_date < self.starts_on:
            return PromotionState.UPCOMING
        if on_date > self.ends_on:
            return PromotionState.EXPIRED
        return PromotionState.RUNNING

    def is_running(self, on_date: date) -> bool:
        return self.state_on(on_date) == PromotionState.RUNNING

    def redeem(self, session_id, on_date: date | None = None):
        """Record a redemption by ``session_id``; the promotion must be running."""
        on_date = on_date or datetime.now(UTC).date()

        state = self.state_on(on_date)
        if state == PromotionState.UPCOMING:
            raise ValidationError({"promotion": ["Promotion has not started yet"]})
        if state == PromotionState.EXPIRED:
            raise ValidationError({"promotion": ["Promotion has expired"]})

        redemptions = self.redemptions
        if session_id in redemptions:
            raise ValidationError({"session_id": ["Promotion already redeemed by this session"]})

        redemptions.append(session_id)
        self.redeemed_by = json.dumps(redemptions)

        self.raise_(
            PromotionRedeemed(
                promotion_id=str(self.id),
                session_id=session_id,
                redeemed_at=datetime.now(UTC),
            )
        )
