"""Zobrist hashing of board states."""

import random
from typing import Callable, Optional, Sequence

PIECE_KINDS = 12
SQUARES = 64
CASTLING_STATES = 16


def _squares(bitboard: int):
    while bitboard:
        low = bitboard & -bitboard
        yield low.bit_length() - 1
        bitboard ^= low


class ZobristKeys:
    """Random keys for pieces on squares, en passant, castling and side to move."""

    def __init__(self, rng: Optional[Callable[[], int]] = None) -> None:
        if rng is None:
            source = random.Random(0)
            rng = lambda: source.getrandbits(64)  # noqa: E731
        self.pieces = [[rng() for _ in range(SQUARES)] for _ in range(PIECE_KINDS)]
        self.ep_keys = [rng() for _ in range(SQUARES)]
        self.castle_keys = [rng() for _ in range(CASTLING_STATES)]
        self.side_key = rng()

    def hash(self, pieces: Sequence[int], ep_square: int, castling: int, side: int) -> int:
        """Return the key of a state given twelve piece bitboards."""
        if len(pieces) != PIECE_KINDS:
            raise ValueError(f"expected {PIECE_KINDS} piece bitboards, got {len(pieces)}")

        result = 0
        for piece, bitboard in enumerate(pieces):
            for square in _squares(bitboard):
                result ^= self.pieces[piece][square]

        if ep_square:
            result ^= self.ep_keys[ep_square]
        result ^= self.castle_keys[castling]
        if side:
            result ^= self.side_key
        return result