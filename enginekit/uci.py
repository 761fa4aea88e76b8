"""Parsing of UCI protocol commands."""

import re
from dataclasses import dataclass
from typing import Optional

ENGINE_NAME = "enginekit"
ENGINE_VERSION = "4.2.0"
ENGINE_AUTHOR = "enginekit developers"

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
MOVE_BUFFER = 50

WHITE = 0
BLACK = 1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _value_after(line: str, token: str) -> Optional[int]:
    position = line.find(token)
    if position < 0:
        return None
    return _atoi(line[position + len(token) + 1:])


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


@dataclass
class GoLimits:
    """Search limits taken from a ``go`` command."""

    start_time: int
    depth: int = 0
    perft: int = 0
    timeset: bool = False
    end_time: int = 0
    max_time: int = 0
    time_to_spend: int = 0


def parse_go(line: str, side: int, start_time: int, max_search_ply: int) -> GoLimits:
    """Turn a ``go`` command into search limits for the side to move."""
    args = line[3:]

    def value(token: str, default: int, applies: bool = True) -> int:
        found = _value_after(args, token)
        return found if found is not None and applies else default

    perft = value("perft", 0)
    inc = 0
    inc = value("binc", inc, side == BLACK)
    inc = value("winc", inc, side == WHITE)
    time_left = -1
    time_left = value("wtime", time_left, side == WHITE)
    time_left = value("btime", time_left, side == BLACK)
    moves_to_go = value("movestogo", 30)
    move_time = value("movetime", -1)
    depth = value("depth", -1)
    if _value_after(args, "depth") is not None:
        depth = min(max_search_ply - 1, depth)

    if perft:
        return GoLimits(start_time=start_time, depth=max_search_ply, perft=perft)

    limits = GoLimits(start_time=start_time, depth=depth)

    if move_time != -1:
        limits.timeset = True
        limits.end_time = start_time + move_time - MOVE_BUFFER
        limits.max_time = limits.end_time
    elif time_left != -1:
        if moves_to_go == 0:
            raise ValueError("movestogo must not be zero")
        limits.timeset = True
        limits.max_time = start_time + _trunc_div(time_left + inc, 2) - MOVE_BUFFER
        limits.time_to_spend = _trunc_div(time_left, moves_to_go) + inc - MOVE_BUFFER
        limits.end_time = min(limits.max_time, start_time + limits.time_to_spend)

    if depth <= 0:
        limits.depth = max_search_ply - 1

    return limits


def parse_position(line: str) -> tuple[str, list[str]]:
    """Return the FEN and the move list named by a ``position`` command."""
    args = line[9:]

    if args.startswith("startpos"):
        fen = START_FEN
    else:
        fen_at = args.find("fen")
        if fen_at < 0:
            fen = START_FEN
        else:
            fen_text = args[fen_at + 4:]
            moves_at = fen_text.find("moves")
            if moves_at >= 0:
                fen_text = fen_text[:moves_at]
            fen = fen_text.strip()

    moves_at = args.find("moves")
    moves = args[moves_at + 6:].split() if moves_at >= 0 else []
    return fen, moves


def get_option_int_value(line: str) -> int:
    """Read the integer value of ``setoption name <X> value <n>``."""
    tokens = line.split()
    if len(tokens) < 5:
        raise ValueError(f"no option value in {line!r}")
    match = _INT_PREFIX.match(tokens[4])
    if match is None:
        raise ValueError(f"option value is not an integer: {tokens[4]!r}")
    return int(match.group(1))


def uci_options() -> list[str]:
    """Lines sent in reply to the ``uci`` command."""
    return [
        f"id name {ENGINE_NAME} {ENGINE_VERSION}",
        f"id author {ENGINE_AUTHOR}",
        "option name Hash type spin default 32 min 4 max 65536",
        "option name Threads type spin default 1 min 1 max 256",
        "option name SyzygyPath type string default <empty>",
        "uciok",
    ]


def clamp_hash(megabytes: int) -> int:
    """Limit a hash size request to the supported range."""
    return max(4, min(65536, megabytes))


def clamp_threads(count: int) -> int:
    """Limit a thread count request to the supported range."""
    return max(1, min(256, count))