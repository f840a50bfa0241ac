"""TarokkaReader 통합 테스트 — 전체 리딩, 결정성, 단건 조회"""

import re
from unittest.mock import patch

import pytest

from src.core.tarokka.enums import DRAW_ORDER, ReadingCategory
from src.core.tarokka.loader import ConfigLoader, DeckLoader
from src.core.tarokka.models import Card, ErrorOutcome, Reading
from src.core.tarokka.reader import TarokkaReader

SLOT_KEYS = ["sunsword", "holySymbol", "tome", "ally", "enemy"]


def _reader_from(deck_data, config_data, **kwargs) -> TarokkaReader:
    return TarokkaReader(
        deck_loader=DeckLoader(lambda: deck_data),
        config_loader=ConfigLoader(lambda: config_data),
        **kwargs,
    )


class TestLoading:
    def test_load_deck(self, reader):
        result = reader.load_deck()
        assert result.success is True
        assert len(result.data) == 54

    def test_load_deck_cached(self, reader):
        assert reader.load_deck().data is reader.load_deck().data

    def test_load_config_cached(self, reader):
        first = reader.load_config()
        assert first.success is True
        assert first.data is reader.load_config().data

    def test_missing_data_dir(self, tmp_path):
        reader = TarokkaReader(tmp_path)
        result = reader.load_deck()
        assert result.success is False
        assert "Failed to load Tarokka deck" in result.error

    def test_reload_rereads(self, deck_data, config_data):
        calls = []

        def source():
            calls.append(1)
            return deck_data

        reader = TarokkaReader(
            deck_loader=DeckLoader(source),
            config_loader=ConfigLoader(lambda: config_data),
        )
        reader.load_deck()
        reader.load_deck()
        reader.reload()
        reader.load_deck()
        assert len(calls) == 2


class TestFullReading:
    def test_reading_with_seed(self, reader):
        result = reader.perform_full_reading(54321)
        assert result.success is True
        reading = result.data
        assert isinstance(reading, Reading)
        assert reading.seed == 54321
        assert reading.timestamp

    def test_five_slots_in_protocol_order(self, reader):
        reading = reader.perform_full_reading(11111).data
        assert [slot.category for slot in reading.slots] == list(DRAW_ORDER)
        assert list(reading.cards) == SLOT_KEYS

    def test_slots_are_distinct_cards(self, reader):
        reading = reader.perform_full_reading(22222).data
        assert len({slot.card.id for slot in reading.slots}) == 5

    def test_draws_match_shuffled_positions(self, reader):
        deck = reader.load_deck().data
        shuffled = reader.shuffle_deck(deck, 31337)
        reading = reader.perform_full_reading(31337).data
        assert [slot.card.id for slot in reading.slots] == [c.id for c in shuffled[:5]]

    def test_same_seed_identical_cards(self, reader):
        first = reader.perform_full_reading(12345).data
        second = reader.perform_full_reading(12345).data
        assert first.slots == second.slots
        assert first.to_dict()["cards"] == second.to_dict()["cards"]

    def test_same_seed_across_instances(self, reader):
        other = TarokkaReader("src/data/tarokka")
        assert (
            reader.perform_full_reading(777).data.slots
            == other.perform_full_reading(777).data.slots
        )

    def test_known_reading_seed_12345(self, reader):
        reading = reader.perform_full_reading(12345).data
        assert [slot.card.id for slot in reading.slots] == [
            "glyphs_druid",
            "glyphs_healer",
            "high_deck_marionette",
            "swords_berserker",
            "glyphs_bishop",
        ]
        sunsword = reading.slot(ReadingCategory.SUNSWORD).outcome
        assert sunsword.is_fallback is True
        assert sunsword.location_id == "tsolenka_pass"
        holy = reading.slot(ReadingCategory.HOLY_SYMBOL).outcome
        assert holy.location_id == "krezk"
        assert holy.is_fallback is False

    def test_known_reading_with_mapped_ally_and_enemy(self, reader):
        reading = reader.perform_full_reading(90).data
        assert reading.slot(ReadingCategory.SUNSWORD).outcome.location_id == "yester_hill"
        assert reading.slot(ReadingCategory.ALLY).outcome.ally_id == "ezmerelda_davenir_mists"
        enemy = reading.slot(ReadingCategory.ENEMY).outcome
        assert enemy.location_id == "castle_ravenloft_crypts"
        assert enemy.is_fallback is False

    def test_no_error_outcomes(self, reader):
        for seed in range(1, 30):
            reading = reader.perform_full_reading(seed).data
            assert not any(isinstance(s.outcome, ErrorOutcome) for s in reading.slots)

    def test_seed_zero_is_reproducible(self, reader):
        first = reader.perform_full_reading(0).data
        second = reader.perform_full_reading(0).data
        assert first.seed == 0
        assert first.slots == second.slots

    def test_timestamp_seed_when_none(self, reader):
        with patch("src.core.tarokka.reader.timestamp_seed", side_effect=[1000, 2000]):
            first = reader.perform_full_reading().data
            second = reader.perform_full_reading(None).data
        assert first.seed == 1000
        assert second.seed == 2000
        assert first.slots == reader.perform_full_reading(1000).data.slots

    def test_default_timestamp_seed_replays_saved_reading(self, reader):
        with patch("src.core.tarokka.reader.timestamp_seed", return_value=1700000000000):
            reading = reader.perform_full_reading().data
        assert reading.seed == 1700000000000
        assert [slot.card.id for slot in reading.slots] == [
            "glyphs_anarchist",
            "glyphs_traitor",
            "stars_transmuter",
            "swords_dictator",
            "high_deck_horseman",
        ]
        assert reading.slots == reader.perform_full_reading(1700000000000).data.slots

    def test_timestamp_iso_format(self, reader):
        reading = reader.perform_full_reading(44444).data
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", reading.timestamp)

    def test_reading_is_immutable(self, reader):
        reading = reader.perform_full_reading(1).data
        with pytest.raises(AttributeError):
            reading.seed = 2  # type: ignore[misc]

    def test_reading_dict_shape(self, reader):
        data = reader.perform_full_reading(22222).data.to_dict()
        assert set(data) == {"seed", "timestamp", "cards"}
        for key in ["sunsword", "holySymbol", "tome", "enemy"]:
            assert set(data["cards"][key]) == {"card", "location"}
        assert set(data["cards"]["ally"]) == {"card", "ally"}
        card = data["cards"]["sunsword"]["card"]
        assert set(card) == {"id", "name", "suit", "description", "fortuneTelling"}


class TestTomeDescription:
    def test_tome_snapshot_uses_holy_symbol_description(self, reader):
        reading = reader.perform_full_reading(12345).data
        holy = reading.slot(ReadingCategory.HOLY_SYMBOL).card
        tome = reading.slot(ReadingCategory.TOME).card
        assert tome.id == "high_deck_marionette"
        assert tome.description == holy.description

    def test_tome_own_description_option(self, deck_data, config_data):
        reader = _reader_from(deck_data, config_data, tome_own_description=True)
        reading = reader.perform_full_reading(12345).data
        tome = reading.slot(ReadingCategory.TOME).card
        card = reader.get_card_by_id(tome.id).data
        assert tome.description == card.description


class TestLoadFailures:
    def test_bad_deck_short_circuits(self, deck_data, config_data):
        deck_data["swords"] = []
        reader = _reader_from(deck_data, config_data)
        with patch("src.core.tarokka.reader.shuffle_deck") as shuffle:
            result = reader.perform_full_reading(1)
        assert result.success is False
        assert "Invalid deck size: expected 54 cards, got 44" in result.error
        shuffle.assert_not_called()

    def test_bad_config_short_circuits(self, deck_data, config_data):
        del config_data["enemyReading"]
        reader = _reader_from(deck_data, config_data)
        result = reader.perform_full_reading(1)
        assert result.success is False
        assert "enemyReading" in result.error


class TestScenarioMinimalConfig:
    """sunsword에 high_deck_master만 매핑된 설정으로 전체 리딩"""

    @pytest.fixture()
    def scenario_reader(self, deck_data, config_data):
        config_data["artifactReadings"]["sunsword"]["possibleLocations"] = [
            {"cardId": "high_deck_master", "locationId": "castle_ravenloft"}
        ]
        config_data["fallbackDefaults"]["sunsword"] = {"locationId": "tsolenka_pass"}
        return _reader_from(deck_data, config_data)

    @pytest.mark.parametrize("seed", [1, 274, 12345])
    def test_sunsword_slot(self, scenario_reader, seed):
        slot = scenario_reader.perform_full_reading(seed).data.slot(ReadingCategory.SUNSWORD)
        if slot.card.id == "high_deck_master":
            assert slot.outcome.location_id == "castle_ravenloft"
            assert slot.outcome.is_fallback is False
        else:
            assert slot.outcome.location_id == "tsolenka_pass"
            assert slot.outcome.is_fallback is True

    def test_seed_274_draws_master_first(self, scenario_reader):
        slot = scenario_reader.perform_full_reading(274).data.slot(ReadingCategory.SUNSWORD)
        assert slot.card.id == "high_deck_master"
        assert slot.outcome.location_id == "castle_ravenloft"


class TestSingleLookups:
    def test_get_card_by_id(self, reader):
        result = reader.get_card_by_id("high_deck_master")
        assert result.success is True
        assert isinstance(result.data, Card)
        assert result.data.name == "The Master"

    def test_get_card_by_id_not_found(self, reader):
        result = reader.get_card_by_id("invalid_card")
        assert result.success is False
        assert "Card not found" in result.error

    def test_get_card_by_id_load_failure(self, tmp_path):
        result = TarokkaReader(tmp_path).get_card_by_id("high_deck_master")
        assert result.success is False
        assert "Failed to load Tarokka deck" in result.error

    def test_draw_card_bounds(self, reader):
        deck = reader.load_deck().data
        assert reader.draw_card(deck, 5) is deck[5]
        assert reader.draw_card(deck, -1) is None
        assert reader.draw_card(deck, len(deck)) is None

    def test_resolve_category(self, reader):
        result = reader.resolve_category("enemy", "high_deck_master")
        assert result.success is True
        assert result.data.location_id == "castle_ravenloft_throne_room"

    def test_resolve_category_unknown_key(self, reader):
        result = reader.resolve_category("dragon", "high_deck_master")
        assert result.success is True
        assert result.data.error == "Unknown category: dragon"
