"""Domain events for the Establishment aggregate."""

from protean.fields import DateTime, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Establishment")
class EstablishmentRegistered:
    """A bar, restaurant or café joined the marketplace in a polo."""

    __version__ = 1

    establishment_id: Identifier(required=True)
    name: String(required=True)
    category: String()
    polo: String(required=True)
    registered_at: DateTime(required=True)
