"""Domain events for the Promotion aggregate."""

from protean.fields import Date, DateTime, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Promotion")
class PromotionLaunched:
    """An establishment published a promotion for a date window."""

    __version__ = 1

    promotion_id: Identifier(required=True)
    name: String(required=True)
    establishment_id: Identifier()
    starts_on: Date(required=True)
    ends_on: Date(required=True)


@catalogue.event(part_of="Promotion")
class PromotionRedeemed:
    """A shopper session redeemed a running promotion."""

    __version__ = 1

    promotion_id: Identifier(required=True)
    session_id: String(required=True)
    redeemed_at: DateTime(required=True)
