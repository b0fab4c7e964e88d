"""Tests for the bank of unplaced pieces."""

import pytest

from homeworlds.models import bank
from homeworlds.models.piece import Piece


def test_empty_bank():
    assert bank.size(bank.empty()) == 0


def test_full_bank():
    full = bank.full()
    assert bank.size(full) == 36
    assert len(set(bank.to_list(full))) == 36
    assert full.pieces["green"][1] == ("green-1-0", "green-1-1", "green-1-2")


def test_add_piece():
    updated = bank.add_piece(Piece(color="green", size=1, id="green-1-0"), bank.empty())
    assert bank.size(updated) == 1


def test_add_piece_does_not_mutate():
    original = bank.empty()
    bank.add_piece(Piece(color="green", size=1, id="green-1-0"), original)
    assert bank.size(original) == 0


def test_has_piece():
    updated = bank.add_piece(Piece(color="green", size=1, id="green-1-0"), bank.empty())
    assert bank.has_piece(Piece(color="green", size=1, id="green-1-0"), updated)
    assert not bank.has_piece(Piece(color="green", size=1, id="green-1-1"), updated)


def test_has_piece_by_size_and_color():
    updated = bank.add_piece(Piece(color="green", size=1, id="green-1-0"), bank.empty())
    assert bank.has_piece_by_size_and_color(1, "green", updated)
    assert not bank.has_piece_by_size_and_color(1, "yellow", updated)


def test_take_piece():
    """Taking removes the earliest id of that color and size."""
    piece, updated = bank.take_piece_by_size_and_color(1, "green", bank.full())
    assert piece == Piece(color="green", size=1, id="green-1-0")
    assert bank.size(updated) == 35
    assert updated.pieces["green"][1] == ("green-1-1", "green-1-2")


def test_take_missing_piece_returns_same_bank():
    empty = bank.empty()
    piece, updated = bank.take_piece_by_size_and_color(1, "green", empty)
    assert piece is None
    assert updated is empty


def test_cannot_take_same_piece_twice():
    bank0 = bank.add_piece(Piece(color="green", size=1, id="green-1-0"), bank.empty())

    piece, bank1 = bank.take_piece_by_size_and_color(1, "green", bank0)
    assert piece is not None
    assert bank.size(bank1) == 0

    piece2, bank2 = bank.take_piece_by_size_and_color(1, "green", bank1)
    assert piece2 is None
    assert bank.size(bank2) == 0


def test_returned_piece_goes_to_end():
    """A returned piece is appended, not restored to its original position."""
    piece, updated = bank.take_piece_by_size_and_color(2, "red", bank.full())
    restored = bank.add_piece(piece, updated)

    assert bank.size(restored) == 36
    assert restored.pieces["red"][2] == ("red-2-1", "red-2-2", "red-2-0")


def test_add_pieces():
    pieces = [
        Piece(color="blue", size=3, id="blue-3-0"),
        Piece(color="red", size=1, id="red-1-2"),
    ]
    updated = bank.add_pieces(pieces, bank.empty())
    assert bank.to_list(updated) == ["blue-3-0", "red-1-2"]


def test_find_and_take_smallest_piece_by_color():
    pieces = [
        Piece(color="green", size=3, id="green-3-0"),
        Piece(color="green", size=1, id="green-1-0"),
        Piece(color="green", size=2, id="green-2-0"),
    ]
    bank0 = bank.add_pieces(pieces, bank.empty())
    assert bank.find_smallest_size_for_color("green", bank0) == 1

    piece1, bank1 = bank.take_smallest_piece_by_color("green", bank0)
    assert piece1.id == "green-1-0"
    assert bank.find_smallest_size_for_color("green", bank1) == 2

    piece2, bank2 = bank.take_smallest_piece_by_color("green", bank1)
    assert piece2.id == "green-2-0"
    assert bank.find_smallest_size_for_color("green", bank2) == 3

    piece3, bank3 = bank.take_smallest_piece_by_color("green", bank2)
    assert piece3.id == "green-3-0"
    assert bank.size(bank3) == 0
    assert bank.find_smallest_size_for_color("green", bank3) is None


def test_no_smallest_piece_in_empty_bank():
    empty = bank.empty()
    piece, updated = bank.take_smallest_piece_by_color("green", empty)
    assert piece is None
    assert updated is empty


def test_bank_layout_is_read_only():
    full = bank.full()
    with pytest.raises(TypeError):
        full.pieces["red"] = {}
    with pytest.raises(TypeError):
        full.pieces["red"][1] = ()


def test_taking_leaves_earlier_bank_intact():
    before = bank.full()
    _, after = bank.take_piece_by_size_and_color(1, "red", before)

    assert before.pieces["red"][1] == ("red-1-0", "red-1-1", "red-1-2")
    assert after.pieces["red"][1] == ("red-1-1", "red-1-2")
    assert before == bank.full()
    assert hash(before) == hash(bank.full())
