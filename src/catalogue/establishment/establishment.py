"""Establishment aggregate: a bar, restaurant or café located in a polo.

A polo is one of the city's gastronomic hubs (Lapa, Santa Teresa, ...).
Shoppers browse the marketplace one polo at a time, so products and
promotions are filtered by the polo of the establishment that offers them.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text

from catalogue.domain import catalogue
from catalogue.establishment.events import EstablishmentRegistered

# Polo id -> display name
POLOS = {
    "feira-sao-cristovao": "Feira de São Cristóvão",
    "lapa": "Lapa",
    "baixo-meier": "Baixo Méier",
    "santa-teresa": "Santa Teresa",
    "copacabana": "Copacabana",
    "ipanema": "Ipanema",
    "leblon": "Leblon",
}

# Selecting this polo means no polo filter.
ALL_POLOS = "todos"


def is_all_polos(polo) -> bool:
    return not polo or polo == ALL_POLOS


@catalogue.aggregate(limit=None)
class Establishment:
    name: String(required=True, max_length=255)
    description: Text()
    address: String(max_length=255)
    phone: String(max_length=50)
    email: String(max_length=255)
    image_url: String(max_length=500)
    category: String(max_length=100)
    polo: String(required=True, max_length=50)
    rating: Float(min_value=0.0, max_value=5.0)
    delivery_time: String(max_length=50)

    @invariant.post
    def polo_must_be_known(self):
        if self.polo and self.polo not in POLOS:
            raise ValidationError({"polo": [f"Unknown polo: {self.polo}"]})

    @classmethod
    def register(
        cls,
        name,
        polo,
        category=None,
        description=None,
        address=None,
        phone=None,
        email=None,
        image_url=None,
        rating=None,
        delivery_time=None,
        id=None,
    ):
        kwargs = {"id": id} if id is not None else {}
        establishment = cls(
            name=name,
            polo=polo,
            category=category,
            description=description,
            address=address,
            phone=phone,
            email=email,
            image_url=image_url,
            rating=rating,
            delivery_time=delivery_time,
            **kwargs,
        )
        establishment.raise_(
            EstablishmentRegistered(
                establishment_id=str(establishment.id),
                name=establishment.name,
                category=establishment.category,
                polo=establishment.polo,
                registered_at=datetime.now(UTC),
            )
        )
        return establishment

    @property
    def polo_name(self) -> str:
        return POLOS.get(self.polo, self.polo)
