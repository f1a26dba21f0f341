"""Application tests for establishment registration and the polo directory."""

import pytest
from catalogue.establishment.establishment import Establishment
from catalogue.establishment.registration import (
    RegisterEstablishment,
    establishment_ids_in,
    establishments_in,
)
from catalogue.seed import BORALLI_ESTABLISHMENTS, seed_catalogue
from protean import current_domain
from protean.exceptions import ValidationError


class TestRegisterEstablishmentCommand:
    def test_register_persists(self):
        establishment_id = current_domain.process(
            RegisterEstablishment(name="Bar do Leblon", polo="leblon", category="Bar"),
            asynchronous=False,
        )
        establishment = current_domain.repository_for(Establishment).get(establishment_id)
        assert establishment.name == "Bar do Leblon"
        assert establishment.polo_name == "Leblon"

    def test_register_with_id(self):
        establishment_id = current_domain.process(
            RegisterEstablishment(establishment_id="8", name="Quiosque do Posto 9", polo="ipanema"),
            asynchronous=False,
        )
        assert establishment_id == "8"

    def test_unknown_polo(self):
        with pytest.raises(ValidationError):
            current_domain.process(RegisterEstablishment(name="Bar", polo="niteroi"), asynchronous=False)


class TestDirectory:
    def test_everything_sorted_by_name(self):
        seed_catalogue(products=[], promotions=[])

        names = [e.name for e in establishments_in()]

        assert len(names) == len(BORALLI_ESTABLISHMENTS)
        assert names == sorted(names)

    def test_filter_by_polo(self):
        seed_catalogue(products=[], promotions=[])
        assert [e.name for e in establishments_in(polo="santa-teresa")] == ["Café do Alto"]

    def test_todos_means_every_polo(self):
        seed_catalogue(products=[], promotions=[])
        assert len(establishments_in(polo="todos")) == len(BORALLI_ESTABLISHMENTS)

    def test_filter_by_category_ignores_case(self):
        seed_catalogue(products=[], promotions=[])
        assert [e.name for e in establishments_in(category="bar")] == ["Bar do Leblon", "Bar do Méier", "Bar do Zé"]

    def test_filter_by_polo_and_category(self):
        seed_catalogue(products=[], promotions=[])
        assert establishments_in(polo="lapa", category="Cafeteria") == []

    def test_ids_in_polo(self):
        seed_catalogue(products=[], promotions=[])
        assert establishment_ids_in("copacabana") == ["5"]
        assert establishment_ids_in("todos") is None
        assert establishment_ids_in(None) is None

    def test_listing_is_not_capped(self):
        for number in range(120):
            current_domain.process(
                RegisterEstablishment(establishment_id=f"bar-{number}", name=f"Bar {number:03d}", polo="lapa"),
                asynchronous=False,
            )
        assert len(establishments_in(polo="lapa")) == 120
