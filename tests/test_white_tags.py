"""Tests for the tag store codec."""

import pytest

from roster.person import white_tags
from roster.types import GAME_START_INSTANT, OverallValue, WhiteTag


@pytest.fixture
def store():
    return white_tags.create_or_update(None, "ART", 0.3)


class TestCreateOrUpdate:
    def test_create_on_missing_store(self):
        store = white_tags.create_or_update(None, "ACTION", 5)
        tag = store["ACTION"]
        assert tag.value == "5.000"
        assert tag.date_added == GAME_START_INSTANT
        assert tag.movie_id == 0
        assert tag.is_overall is False
        assert tag.overall_values == [
            OverallValue(movie_id=0, source_type=0, value="5.000", date_added=GAME_START_INSTANT)
        ]

    def test_update_keeps_creation_date_and_engagement(self):
        existing = WhiteTag(
            id="ART",
            value="0.100",
            date_added="1935-03-01T00:00:00",
            movie_id=42,
            overall_values=[
                OverallValue(movie_id=0, source_type=0, value="0.100"),
                OverallValue(movie_id=42, source_type=3, value="0.050"),
            ],
        )
        store = white_tags.create_or_update({"ART": existing}, "ART", 0.7)
        tag = store["ART"]
        assert tag.value == "0.700"
        assert tag.date_added == "1935-03-01T00:00:00"
        assert tag.movie_id == 42
        assert tag.overall_values[0].value == "0.700"
        assert tag.overall_values[1].value == "0.050"

    def test_update_without_base_entry_appends_one(self):
        existing = WhiteTag(
            id="ART",
            value="0.300",
            overall_values=[OverallValue(movie_id=7, source_type=2, value="0.300")],
        )
        tag = white_tags.create_or_update({"ART": existing}, "ART", 0.5)["ART"]
        assert tag.value == "0.500"
        assert [entry.value for entry in tag.overall_values] == ["0.300", "0.500"]
        assert tag.overall_values[1] == OverallValue(
            movie_id=0, source_type=0, value="0.500", date_added=GAME_START_INSTANT
        )
        assert existing.overall_values == [
            OverallValue(movie_id=7, source_type=2, value="0.300")
        ]

    def test_update_touches_only_first_base_entry(self):
        existing = WhiteTag(
            id="DRAMA",
            value="4.000",
            overall_values=[
                OverallValue(movie_id=0, source_type=0, value="4.000"),
                OverallValue(movie_id=0, source_type=0, value="1.000"),
            ],
        )
        tag = white_tags.create_or_update({"DRAMA": existing}, "DRAMA", 6)["DRAMA"]
        assert [entry.value for entry in tag.overall_values] == ["6.000", "1.000"]

    def test_input_store_not_mutated(self, store):
        original = store["ART"]
        white_tags.create_or_update(store, "ART", 0.9)
        white_tags.create_or_update(store, "COM", 0.2)
        assert store["ART"] is original
        assert original.value == "0.300"
        assert "COM" not in store


class TestRemove:
    def test_last_tag_removed_gives_no_store(self, store):
        assert white_tags.remove(store, "ART") is None

    def test_other_tags_survive(self, store):
        store = white_tags.create_or_update(store, "COM", 0.5)
        remaining = white_tags.remove(store, "ART")
        assert list(remaining) == ["COM"]

    def test_remove_from_missing_store(self):
        assert white_tags.remove(None, "ART") is None
        assert white_tags.remove({}, "ART") is None

    def test_round_trip_preserves_other_reads(self, store):
        store = white_tags.create_or_update(store, "DRAMA", 8)
        added = white_tags.create_or_update(store, "ACTION", 3)
        restored = white_tags.remove(added, "ACTION")
        for tag_id in ("ART", "DRAMA", "ACTION"):
            assert white_tags.read(restored, tag_id) == white_tags.read(store, tag_id)


class TestRead:
    def test_missing_store_or_tag_reads_zero(self, store):
        assert white_tags.read(None, "ART") == 0
        assert white_tags.read({}, "ART") == 0
        assert white_tags.read(store, "COM") == 0

    def test_text_and_number_values(self):
        store = {
            "A": WhiteTag(id="A", value="0.250"),
            "B": WhiteTag(id="B", value=0.75),
            "C": WhiteTag(id="C", value="garbage"),
        }
        assert white_tags.read(store, "A") == 0.25
        assert white_tags.read(store, "B") == 0.75
        assert white_tags.read(store, "C") == 0


class TestGenres:
    def test_threshold_is_inclusive(self):
        below = white_tags.create_or_update(None, "DRAMA", 11.999)
        at = white_tags.create_or_update(below, "DRAMA", 12.0)
        assert white_tags.is_established(below, "DRAMA") is False
        assert white_tags.is_established(at, "DRAMA") is True

    def test_sub_threshold_not_counted(self):
        store = None
        for genre, value in (("ACTION", 12), ("DRAMA", 12), ("COMEDY", 4)):
            store = white_tags.create_or_update(store, genre, value)
        assert white_tags.count_established(store) == 2

    def test_cap_blocks_fourth_but_not_existing(self):
        store = None
        for genre in ("ACTION", "DRAMA", "COMEDY"):
            store = white_tags.create_or_update(store, genre, 12)
        assert white_tags.can_establish(store, "HORROR") is False
        assert white_tags.can_establish(store, "DRAMA") is True

    @pytest.mark.parametrize(
        "value,level", [(0, 0), (0.5, 1), (4, 2), (7.99, 2), (8, 3), (11.9, 3), (12, 4), (15, 4)]
    )
    def test_genre_level(self, value, level):
        store = white_tags.create_or_update(None, "ACTION", value)
        assert white_tags.genre_level(store, "ACTION") == level

    def test_genres_with_values_skips_status_tags(self, store):
        store = white_tags.create_or_update(store, "HORROR", 6)
        store = white_tags.create_or_update(store, "ACTION", 2)
        assert white_tags.genres_with_values(store) == [("ACTION", 2.0), ("HORROR", 6.0)]
