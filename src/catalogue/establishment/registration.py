"""Establishment registration and the polo/category directory queries."""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.establishment.establishment import Establishment, is_all_polos


@catalogue.command(part_of="Establishment")
class RegisterEstablishment:
    establishment_id: Identifier()  # Optional: generated when absent
    name: String(required=True, max_length=255)
    polo: String(required=True, max_length=50)
    category: String(max_length=100)
    description: Text()
    address: String(max_length=255)
    phone: String(max_length=50)
    email: String(max_length=255)
    image_url: String(max_length=500)
    rating: Float(min_value=0.0, max_value=5.0)
    delivery_time: String(max_length=50)


@catalogue.command_handler(part_of=Establishment)
class RegisterEstablishmentHandler:
    @handle(RegisterEstablishment)
    def register_establishment(self, command):
        establishment = Establishment.register(
            id=command.establishment_id,
            name=command.name,
            polo=command.polo,
            category=command.category,
            description=command.description,
            address=command.address,
            phone=command.phone,
            email=command.email,
            image_url=command.image_url,
            rating=command.rating,
            delivery_time=command.delivery_time,
        )
        current_domain.repository_for(Establishment).add(establishment)
        return str(establishment.id)


def establishments_in(polo=None, category=None) -> list:
    """Establishments in ``polo`` (every polo when unset or ``todos``), by name."""
    query = current_domain.repository_for(Establishment)._dao.query
    if not is_all_polos(polo):
        query = query.filter(polo=polo)
    if category:
        query = query.filter(category__iexact=category)
    return sorted(query.all().items, key=lambda e: e.name)


def establishment_ids_in(polo) -> list[str] | None:
    """Ids of the establishments in ``polo``, or ``None`` when no polo is selected."""
    if is_all_polos(polo):
        return None
    return [str(e.id) for e in establishments_in(polo=polo)]
