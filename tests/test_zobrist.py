import itertools

import pytest

from enginekit.zobrist import ZobristKeys

EMPTY = [0] * 12


@pytest.fixture
def keys():
    return ZobristKeys(itertools.count(1).__next__)


def test_keys_drawn_in_order(keys):
    assert keys.pieces[0][0] == 1
    assert keys.ep_keys[0] == keys.pieces[11][63] + 1
    assert keys.castle_keys[0] == keys.ep_keys[63] + 1
    assert keys.side_key == keys.castle_keys[15] + 1


def test_empty_board_is_castle_key(keys):
    assert keys.hash(EMPTY, 0, 5, 0) == keys.castle_keys[5]


def test_side_to_move_toggles_side_key(keys):
    white = keys.hash(EMPTY, 0, 0, 0)
    black = keys.hash(EMPTY, 0, 0, 1)
    assert white ^ black == keys.side_key


def test_pieces_xor_into_hash(keys):
    pieces = list(EMPTY)
    pieces[3] = (1 << 10) | (1 << 40)
    base = keys.hash(EMPTY, 0, 0, 0)
    assert keys.hash(pieces, 0, 0, 0) == base ^ keys.pieces[3][10] ^ keys.pieces[3][40]


def test_ep_square_zero_ignored_and_nonzero_applied(keys):
    base = keys.hash(EMPTY, 0, 0, 0)
    assert keys.hash(EMPTY, 20, 0, 0) == base ^ keys.ep_keys[20]


def test_default_rng_is_deterministic():
    first, second = ZobristKeys(), ZobristKeys()
    assert first.side_key == second.side_key
    assert first.pieces == second.pieces
    assert len(set(first.castle_keys)) == 16


def test_wrong_piece_count_rejected(keys):
    with pytest.raises(ValueError):
        keys.hash([0] * 11, 0, 0, 0)