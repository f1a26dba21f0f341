"""Tests for the Establishment aggregate."""

import pytest
from catalogue.establishment.establishment import POLOS, Establishment, is_all_polos
from catalogue.establishment.events import EstablishmentRegistered
from protean.exceptions import ValidationError


def _make_establishment(**overrides):
    defaults = {
        "name": "Bar do Zé",
        "polo": "lapa",
        "category": "Bar",
        "address": "Rua da Lapa, 123",
    }
    defaults.update(overrides)
    return Establishment.register(**defaults)


class TestEstablishmentRegistration:
    def test_register(self):
        establishment = _make_establishment()
        assert establishment.name == "Bar do Zé"
        assert establishment.polo == "lapa"
        assert establishment.category == "Bar"

    def test_register_with_explicit_id(self):
        assert str(_make_establishment(id="1").id) == "1"

    def test_register_raises_event(self):
        establishment = _make_establishment()
        assert len(establishment._events) == 1
        event = establishment._events[0]
        assert isinstance(event, EstablishmentRegistered)
        assert event.establishment_id == str(establishment.id)
        assert event.polo == "lapa"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            _make_establishment(name=None)

    def test_polo_required(self):
        with pytest.raises(ValidationError):
            _make_establishment(polo=None)

    def test_unknown_polo_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_establishment(polo="niteroi")
        assert "polo" in exc.value.messages

    @pytest.mark.parametrize("rating", [-0.5, 5.5])
    def test_rating_bounds(self, rating):
        with pytest.raises(ValidationError):
            _make_establishment(rating=rating)


class TestPolos:
    def test_polo_display_name(self):
        assert _make_establishment(polo="feira-sao-cristovao").polo_name == "Feira de São Cristóvão"

    def test_every_polo_has_a_name(self):
        assert all(POLOS.values())

    @pytest.mark.parametrize("polo, expected", [(None, True), ("", True), ("todos", True), ("lapa", False)])
    def test_all_polos_selection(self, polo, expected):
        assert is_all_polos(polo) is expected
