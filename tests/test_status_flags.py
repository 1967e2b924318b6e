"""Tests for the status bitmask codec."""

import itertools

import pytest

from roster.person.status_flags import (
    FLAG_LABELS,
    StatusFlag,
    decode,
    encode,
    has_label,
    is_hireable_by_player,
    state_label,
)


class TestDecode:
    def test_zero_and_none_decode_to_nothing(self):
        assert decode(0) == []
        assert decode(None) == []

    def test_single_bit(self):
        assert decode(16) == ["Dead"]

    def test_multiple_bits_all_reported(self):
        assert decode(16 | 64 | 2) == ["Hired by Player", "Dead", "Locked"]

    def test_unknown_bits_ignored(self):
        assert decode(1 | 16) == ["Dead"]

    def test_bit_order_does_not_matter(self):
        bits = [StatusFlag.DEAD, StatusFlag.LOCKED, StatusFlag.TIRED]
        results = set()
        for perm in itertools.permutations(bits):
            mask = 0
            for bit in perm:
                mask |= bit
            results.add(tuple(decode(mask)))
        assert len(results) == 1

    def test_has_label_agrees_with_decode(self):
        for mask in (0, 16, 80, 2 | 4096 | 8388608, 12345678):
            decoded = set(decode(mask))
            for label in FLAG_LABELS.values():
                assert has_label(mask, label) == (label in decoded)


class TestEncode:
    def test_encode_inverts_decode(self):
        mask = 2 | 64 | 131072
        assert encode(decode(mask)) == mask

    def test_unknown_label_raises(self):
        with pytest.raises(KeyError):
            encode(["Flying"])


class TestStateLabel:
    def test_none(self):
        assert state_label(0) == "None"
        assert state_label(None) == "None"

    def test_joined(self):
        assert state_label(16 | 64) == "Dead, Locked"

    def test_unknown_mask_is_distinguishable(self):
        assert state_label(1) == "Unknown (1)"


def test_has_label_unknown_label_is_false():
    assert has_label(0xFFFFFF, "Flying") is False


def test_table_has_22_unique_power_of_two_bits():
    values = [int(flag) for flag in FLAG_LABELS]
    assert len(values) == 22
    assert len(set(FLAG_LABELS.values())) == 22
    assert all(v & (v - 1) == 0 for v in values)


@pytest.mark.parametrize(
    "mask,expected",
    [
        (0, True),
        (2, False),  # already hired by player
        (16, False),  # dead
        (1024, True),  # tired
        (32, False),  # hired by competitor
        (4096, False),  # offended
    ],
)
def test_is_hireable_by_player(mask, expected):
    assert is_hireable_by_player(mask) is expected
