"""Demo catalogue: the Boralli establishments, their products and promotions.

Loaded into the in-memory repositories by the API at startup so the
marketplace has something to browse and price.
"""

from datetime import date

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.establishment.establishment import Establishment
from catalogue.product.product import Product
from catalogue.promotion.promotion import Promotion

logger = structlog.get_logger(__name__)

BORALLI_ESTABLISHMENTS = [
    {
        "id": "1",
        "name": "Bar do Zé",
        "description": "Bar tradicional da Lapa com música ao vivo",
        "address": "Rua da Lapa, 123",
        "phone": "(21) 99999-9999",
        "email": "contato@zedolapa.com.br",
        "category": "Bar",
        "polo": "lapa",
        "rating": 4.5,
        "delivery_time": "30-45 min",
    },
    {
        "id": "2",
        "name": "Restaurante Nordestino",
        "description": "Comida típica nordestina na Feira de São Cristóvão",
        "address": "Pavilhão 3, Feira de São Cristóvão",
        "phone": "(21) 99999-9999",
        "email": "contato@nordestino.com.br",
        "category": "Restaurante",
        "polo": "feira-sao-cristovao",
        "rating": 4.5,
        "delivery_time": "30-45 min",
    },
    {
        "id": "3",
        "name": "Café do Alto",
        "description": "Café com vista panorâmica de Santa Teresa",
        "address": "Rua Almirante Alexandrino, 456",
        "phone": "(21) 99999-9999",
        "email": "contato@cafedoalto.com.br",
        "category": "Cafeteria",
        "polo": "santa-teresa",
        "rating": 4.5,
        "delivery_time": "30-45 min",
    },
    {
        "id": "4",
        "name": "Bar do Méier",
        "description": "Bar tradicional do Baixo Méier",
        "address": "Rua Dias da Cruz, 789",
        "phone": "(21) 99999-9999",
        "email": "contato@barmeier.com.br",
        "category": "Bar",
        "polo": "baixo-meier",
        "rating": 4.5,
        "delivery_time": "30-45 min",
    },
    {
        "id": "5",
        "name": "Restaurante da Praia",
        "description": "Comida típica carioca em Copacabana",
        "address": "Av. Atlântica, 1234",
        "phone": "(21) 99999-9999",
        "email": "contato@restaurantedapraia.com.br",
        "category": "Restaurante",
        "polo": "copacabana",
        "rating": 4.5,
        "delivery_time": "30-45 min",
    },
    {
        "id": "6",
        "name": "Café Ipanema",
        "description": "Café com vista para o Arpoador",
        "address": "Rua Visconde de Pirajá, 456",
        "phone": "(21) 99999-9999",
        "email": "contato@cafeipanema.com.br",
        "category": "Cafeteria",
        "polo": "ipanema",
        "rating": 4.5,
        "delivery_time": "30-45 min",
    },
    {
        "id": "7",
        "name": "Bar do Leblon",
        "description": "Bar sofisticado no Leblon",
        "address": "Rua Dias Ferreira, 789",
        "phone": "(21) 99999-9999",
        "email": "contato@barleblon.com.br",
        "category": "Bar",
        "polo": "leblon",
        "rating": 4.5,
        "delivery_time": "30-45 min",
    },
]

BORALLI_PRODUCTS = [
    {
        "id": "1",
        "name": "Cerveja Artesanal IPA",
        "description": "IPA com notas cítricas e amargor equilibrado",
        "unit_price": 18.90,
        "category": "Cerveja",
        "establishment_id": "1",
    },
    {
        "id": "2",
        "name": "Hambúrguer Gourmet",
        "description": "Angus 200g com queijo cheddar e bacon",
        "unit_price": 34.90,
        "category": "Hambúrguer",
        "establishment_id": "1",
    },
    {
        "id": "3",
        "name": "Pizza Margherita",
        "description": "Massa napolitana com mussarela de búfala",
        "unit_price": 59.90,
        "category": "Pizza",
        "establishment_id": "2",
    },
    {
        "id": "4",
        "name": "Garlic Bread",
        "description": "Pão italiano com alho assado",
        "unit_price": 19.90,
        "category": "Acompanhamento",
        "establishment_id": "2",
    },
    {
        "id": "5",
        "name": "Picanha Nobre",
        "description": "Corte nobre acompanhado de farofa e vinagrete",
        "unit_price": 89.90,
        "category": "Carne",
        "establishment_id": "3",
    },
    {
        "id": "6",
        "name": "Costela no Fogo de Chão",
        "description": "Costela bovina assada lentamente",
        "unit_price": 79.90,
        "category": "Carne",
        "establishment_id": "3",
    },
    {
        "id": "7",
        "name": "Combinado Sushi Premium",
        "description": "Seleção do chef com peças especiais",
        "unit_price": 129.90,
        "category": "Sushi",
        "establishment_id": "4",
    },
    {
        "id": "10",
        "name": "Hot Roll Crocante",
        "description": "Hot roll empanado com cream cheese",
        "unit_price": 39.90,
        "category": "Sushi",
        "establishment_id": "4",
    },
]

BORALLI_PROMOTIONS = [
    {
        "id": "1",
        "name": "Happy Hour Especial",
        "description": "Cervejas artesanais com 40% de desconto das 17h às 19h",
        "starts_on": date(2024, 7, 1),
        "ends_on": date(2024, 7, 31),
        "establishment_id": "1",
    },
    {
        "id": "2",
        "name": "Noite da Pizza",
        "description": "Todas as pizzas tamanho família por R$ 49,90 às quartas-feiras",
        "starts_on": date(2024, 7, 1),
        "ends_on": date(2025, 12, 31),
        "establishment_id": "2",
    },
    {
        "id": "3",
        "name": "Rodízio Executivo",
        "description": "Almoço de rodízio completo por R$ 69,90 de segunda a sexta",
        "starts_on": date(2024, 7, 1),
        "ends_on": date(2024, 7, 31),
        "establishment_id": "3",
    },
    {
        "id": "4",
        "name": "Sushi a Dois",
        "description": "Combinado romântico para casais com taça de saquê incluída",
        "starts_on": date(2024, 7, 10),
        "ends_on": date(2024, 8, 10),
        "establishment_id": "4",
    },
]


def seed_catalogue(products=None, promotions=None, establishments=None) -> int:
    """Add the demo establishments, products and promotions that are not stored yet.

    Must run inside the catalogue domain context. Returns how many records
    were added.
    """
    products = BORALLI_PRODUCTS if products is None else products
    promotions = BORALLI_PROMOTIONS if promotions is None else promotions
    establishments = BORALLI_ESTABLISHMENTS if establishments is None else establishments

    establishment_repo = current_domain.repository_for(Establishment)
    product_repo = current_domain.repository_for(Product)
    promotion_repo = current_domain.repository_for(Promotion)
    added = 0

    for record in establishments:
        try:
            establishment_repo.get(record["id"])
            continue
        except ObjectNotFoundError:
            establishment_repo.add(Establishment.register(**record))
            added += 1

    for record in products:
        try:
            product_repo.get(record["id"])
            continue
        except ObjectNotFoundError:
            product_repo.add(Product.create(**record))
            added += 1

    for record in promotions:
        try:
            promotion_repo.get(record["id"])
            continue
        except ObjectNotFoundError:
            promotion_repo.add(Promotion.launch(**record))
            added += 1

    logger.info("Catalogue seeded", added=added)
    return added
