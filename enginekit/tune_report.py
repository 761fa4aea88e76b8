"""Text rendering of tuned weights as evaluation source tables."""

import math
from pathlib import Path
from typing import Sequence, Union

from enginekit.tune_params import Weight, Weights

PAWN_TYPE = 0
KNIGHT_TYPE = 1
BISHOP_TYPE = 2
ROOK_TYPE = 3
QUEEN_TYPE = 4
KING_TYPE = 5


def _round(value: float) -> int:
    """Round half away from zero."""
    rounded = math.floor(abs(value) + 0.5)
    return -rounded if value < 0 else rounded


def format_weight(weight: Weight) -> str:
    """Render a single weight as ``S(mg, eg);`` followed by a newline."""
    return f"S({_round(weight.mg.value)}, {_round(weight.eg.value)});\n"


def format_weight_array(weights: Sequence[Weight], wrap: int = 0) -> str:
    """Render weights as comma-terminated ``S(mg, eg)`` items.

    With a non-zero ``wrap`` the numbers are padded to four columns and a
    newline follows every ``wrap`` items.
    """
    parts = []
    for index, weight in enumerate(weights):
        mg = _round(weight.mg.value)
        eg = _round(weight.eg.value)
        if wrap:
            parts.append(f" S({mg:4d},{eg:4d}),")
            if index % wrap == wrap - 1:
                parts.append("\n")
        else:
            parts.append(f" S({mg}, {eg}),")
    return "".join(parts)


def _block(name: str, weights: Sequence[Weight], wrap: int = 4) -> str:
    return f"\nconst Score {name}[{len(weights)}] = {{\n" + format_weight_array(weights, wrap) + "};\n"


def _inline(name: str, weights: Sequence[Weight]) -> str:
    return f"\nconst Score {name}[{len(weights)}] = {{" + format_weight_array(weights, 0) + "};\n"


def _single(name: str, weight: Weight) -> str:
    return f"\nconst Score {name} = " + format_weight(weight)


def _grid(name: str, rows: Sequence[Sequence[Weight]]) -> str:
    width = len(rows[0]) if rows else 0
    text = f"\nconst Score {name}[{len(rows)}][{width}] = {{\n"
    text += "".join(" {" + format_weight_array(row, 0) + "},\n" for row in rows)
    return text + "};\n"


def format_weights(weights: Weights, epoch: int, error: float) -> str:
    """Render every weight table, headed by the epoch and its error."""
    out = [f"Epoch: {epoch}, Error: {error:f}\n"]

    out.append("\nconst Score MATERIAL_VALUES[7] = {")
    out.append(format_weight_array(weights.material, 0))
    out.append(" S(   0,   0), S(   0,   0) };\n")

    out.append(_single("BISHOP_PAIR", weights.bishop_pair))

    out.append(_block("PAWN_PSQT", weights.psqt[PAWN_TYPE]))
    out.append(_block("KNIGHT_PSQT", weights.psqt[KNIGHT_TYPE]))
    out.append(_block("BISHOP_PSQT", weights.psqt[BISHOP_TYPE]))
    out.append(_block("ROOK_PSQT", weights.psqt[ROOK_TYPE]))
    out.append(_block("QUEEN_PSQT", weights.psqt[QUEEN_TYPE]))
    out.append(_block("KING_PSQT", weights.psqt[KING_TYPE]))
    out.append(_block("KNIGHT_POST_PSQT", weights.knight_post_psqt))
    out.append(_block("BISHOP_POST_PSQT", weights.bishop_post_psqt))

    out.append(_block("KNIGHT_MOBILITIES", weights.knight_mobilities))
    out.append(_block("BISHOP_MOBILITIES", weights.bishop_mobilities))
    out.append(_block("ROOK_MOBILITIES", weights.rook_mobilities))
    out.append(_block("QUEEN_MOBILITIES", weights.queen_mobilities))

    out.append(_single("KNIGHT_OUTPOST_REACHABLE", weights.knight_post_reachable))
    out.append(_single("BISHOP_OUTPOST_REACHABLE", weights.bishop_post_reachable))
    out.append(_single("BISHOP_TRAPPED", weights.bishop_trapped))
    out.append(_single("ROOK_TRAPPED", weights.rook_trapped))
    out.append(_single("BAD_BISHOP_PAWNS", weights.bad_bishop_pawns))
    out.append(_single("DRAGON_BISHOP", weights.dragon_bishop))
    out.append(_single("ROOK_OPEN_FILE", weights.rook_open_file))
    out.append(_single("ROOK_SEMI_OPEN", weights.rook_semi_open))

    out.append(_single("DOUBLED_PAWN", weights.doubled_pawns))
    out.append(_single("OPPOSED_ISOLATED_PAWN", weights.opposed_isolated_pawns))
    out.append(_single("OPEN_ISOLATED_PAWN", weights.open_isolated_pawns))
    out.append(_single("BACKWARDS_PAWN", weights.backwards_pawns))
    out.append(_block("CONNECTED_PAWN", weights.connected_pawn))
    out.append(_block("CANDIDATE_PASSER", weights.candidate_passer))

    out.append(_block("PASSED_PAWN", weights.passed_pawn))
    out.append(_single("PASSED_PAWN_EDGE_DISTANCE", weights.passed_pawn_edge_distance))
    out.append(_single("PASSED_PAWN_KING_PROXIMITY", weights.passed_pawn_king_proximity))
    out.append(_single("PASSED_PAWN_ADVANCE_DEFENDED", weights.passed_pawn_advance))

    out.append(_inline("KNIGHT_THREATS", weights.knight_threats))
    out.append(_inline("BISHOP_THREATS", weights.bishop_threats))
    out.append(_inline("ROOK_THREATS", weights.rook_threats))
    out.append(_inline("KING_THREATS", weights.king_threats))
    out.append(_single("PAWN_THREAT", weights.pawn_threat))
    out.append(_single("PAWN_PUSH_THREAT", weights.pawn_push_threat))
    out.append(_single("HANGING_THREAT", weights.hanging_threat))

    out.append(_grid("PAWN_SHELTER", weights.ks_pawn_shelter))
    out.append(_grid("PAWN_STORM", weights.ks_pawn_storm))

    out.append(f"\nconst Score BLOCKED_PAWN_STORM[{len(weights.ks_blocked)}] = {{\n")
    out.append(format_weight_array(weights.ks_blocked, 0))
    out.append("\n};\n")

    out.append(_inline("KS_KING_FILE", weights.ks_file))
    out.append("\n")
    return "".join(out)


def append_weights(path: Union[str, Path], weights: Weights, epoch: int, error: float) -> None:
    """Append the rendered weight tables to the file at ``path``."""
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(format_weights(weights, epoch, error))