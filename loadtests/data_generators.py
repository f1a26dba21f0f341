"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the Boralli API's Pydantic request
schemas. Product ids come from the demo catalogue loaded at startup.
"""

import random
import uuid

from faker import Faker

fake = Faker("pt_BR")

# Ids seeded by catalogue.seed
PRODUCT_IDS = ["1", "2", "3", "4", "5", "6", "7", "10"]
POLOS = ["todos", "lapa", "santa-teresa", "feira-sao-cristovao", "baixo-meier", "copacabana", "ipanema", "leblon"]

CATEGORIES = ["Cerveja", "Hambúrguer", "Pizza", "Acompanhamento", "Carne", "Sushi"]
COUPON_CODES = ["BORALLI10", "boralli20", "Boralli10"]
ADD_ONS = [
    ("Queijo extra", "3.50"),
    ("Bacon", "4.00"),
    ("Borda recheada", "8.90"),
    ("Molho da casa", "2.00"),
]


def session_id() -> str:
    return f"sess-lt-{uuid.uuid4().hex[:12]}"


def cart_data() -> dict:
    """CreateCartRequest payload: half the carts belong to guests."""
    if random.random() < 0.5:
        return {"session_id": session_id()}
    return {"customer_id": f"cust-lt-{uuid.uuid4().hex[:8]}"}


def cart_item_data(product_id: str | None = None) -> dict:
    """AddToCartRequest payload with up to two add-ons and an optional note."""
    payload = {
        "product_id": product_id or random.choice(PRODUCT_IDS),
        "quantity": random.randint(1, 3),
    }
    add_ons = random.sample(ADD_ONS, k=random.randint(0, 2))
    if add_ons:
        payload["add_ons"] = [{"name": name, "unit_price": price} for name, price in add_ons]
    if random.random() < 0.3:
        payload["notes"] = fake.sentence(nb_words=4)[:500]
    return payload


def coupon_data(valid: bool = True) -> dict:
    code = random.choice(COUPON_CODES) if valid else fake.lexify("????99").upper()
    return {"coupon_code": code}


def establishment_search() -> dict:
    """Query parameters for GET /establishments."""
    if random.random() < 0.7:
        return {"polo": random.choice(POLOS)}
    return {}


def product_search() -> dict:
    """Query parameters for GET /products."""
    choice = random.random()
    if choice < 0.4:
        return {"category": random.choice(CATEGORIES)}
    if choice < 0.6:
        return {"q": random.choice(["pizza", "cerveja", "sushi", "costela"])}
    if choice < 0.8:
        return {"polo": random.choice(POLOS)}
    return {}
