"""Building blocks for a UCI chess engine: time management, transposition table,
Zobrist hashing, UCI command parsing and evaluation tuning."""

__version__ = "0.1.0"