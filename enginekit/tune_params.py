"""Tunable evaluation parameters and their Adam updates."""

import copy
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Optional

log = logging.getLogger(__name__)

BETA1 = 0.9
BETA2 = 0.999
EPSILON = 1e-8
DEFAULT_ALPHA = 0.001
DEFAULT_K = 3.575325

FIELD_SHAPES: dict[str, tuple[int, ...]] = {
    "material": (5,),
    "bishop_pair": (),
    "psqt": (6, 32),
    "knight_post_psqt": (32,),
    "bishop_post_psqt": (32,),
    "knight_mobilities": (9,),
    "bishop_mobilities": (14,),
    "rook_mobilities": (15,),
    "queen_mobilities": (28,),
    "knight_post_reachable": (),
    "bishop_post_reachable": (),
    "bishop_trapped": (),
    "rook_trapped": (),
    "bad_bishop_pawns": (),
    "dragon_bishop": (),
    "rook_open_file": (),
    "rook_semi_open": (),
    "doubled_pawns": (),
    "opposed_isolated_pawns": (),
    "open_isolated_pawns": (),
    "backwards_pawns": (),
    "connected_pawn": (8,),
    "candidate_passer": (8,),
    "passed_pawn": (8,),
    "passed_pawn_edge_distance": (),
    "passed_pawn_king_proximity": (),
    "passed_pawn_advance": (),
    "knight_threats": (6,),
    "bishop_threats": (6,),
    "rook_threats": (6,),
    "king_threats": (6,),
    "pawn_threat": (),
    "pawn_push_threat": (),
    "hanging_threat": (),
    "ks_pawn_shelter": (4, 8),
    "ks_pawn_storm": (4, 8),
    "ks_blocked": (8,),
    "ks_file": (4,),
}


@dataclass
class Param:
    """One tunable value with its gradient and Adam moments."""

    value: float = 0.0
    g: float = 0.0
    m: float = 0.0
    v: float = 0.0
    epoch: int = 0

    def update(self, alpha: float = DEFAULT_ALPHA) -> None:
        """Apply one Adam step from the accumulated gradient, then reset it."""
        self.epoch += 1
        if not self.g:
            return

        self.m = BETA1 * self.m + (1.0 - BETA1) * self.g
        self.v = BETA2 * self.v + (1.0 - BETA2) * self.g * self.g

        m_hat = self.m / (1 - BETA1**self.epoch)
        v_hat = self.v / (1 - BETA2**self.epoch)
        self.value += alpha * m_hat / (math.sqrt(v_hat) + EPSILON)
        self.g = 0.0


@dataclass
class Weight:
    """A middlegame/endgame pair of parameters."""

    mg: Param = field(default_factory=Param)
    eg: Param = field(default_factory=Param)

    def update(self, alpha: float = DEFAULT_ALPHA) -> None:
        """Step both halves of the pair."""
        self.mg.update(alpha)
        self.eg.update(alpha)


def _build(name: str, shape: tuple[int, ...], init: Any) -> Any:
    if not shape:
        if init is None:
            return Weight()
        try:
            mg, eg = init
        except (TypeError, ValueError):
            raise ValueError(f"{name}: expected an (mg, eg) pair, got {init!r}") from None
        return Weight(Param(value=float(mg)), Param(value=float(eg)))

    if init is None:
        return [_build(name, shape[1:], None) for _ in range(shape[0])]
    items = list(init)
    if len(items) != shape[0]:
        raise ValueError(f"{name}: expected {shape[0]} entries, got {len(items)}")
    return [_build(name, shape[1:], item) for item in items]


def _leaves(value: Any) -> Iterator[Weight]:
    if isinstance(value, Weight):
        yield value
    else:
        for item in value:
            yield from _leaves(item)


class Weights:
    """Every tuned evaluation term, stored as attributes named in FIELD_SHAPES."""

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        initial = dict(initial or {})
        unknown = set(initial) - set(FIELD_SHAPES)
        if unknown:
            raise ValueError(f"unknown weight names: {', '.join(sorted(unknown))}")
        for name, shape in FIELD_SHAPES.items():
            setattr(self, name, _build(name, shape, initial.get(name)))

    def _all(self) -> Iterator[Weight]:
        for name in FIELD_SHAPES:
            yield from _leaves(getattr(self, name))

    def add_gradients(self, other: "Weights") -> None:
        """Add the gradients accumulated in ``other`` to this set."""
        for mine, theirs in zip(self._all(), other._all()):
            mine.mg.g += theirs.mg.g
            mine.eg.g += theirs.eg.g

    def update(self, alpha: float = DEFAULT_ALPHA) -> None:
        """Apply an Adam step to every weight."""
        for weight in self._all():
            weight.update(alpha)

    def copy(self) -> "Weights":
        """Return an independent deep copy."""
        return copy.deepcopy(self)


def sigmoid(score: float, k: float = DEFAULT_K) -> float:
    """Map a centipawn score to an expected game result in (0, 1)."""
    return 1.0 / (1.0 + math.exp(-k * score / 400.0))


def determine_k(samples: Iterable[tuple[float, float]]) -> float:
    """Find the scaling constant that best fits (static eval, result) pairs."""
    data = list(samples)
    if not data:
        raise ValueError("no samples to fit")

    low, high, delta, best, error = -10.0, 10.0, 1.0, 1.0, 100.0
    for _ in range(10):
        log.debug("Determining K: (%.9f, %.9f, %.9f)", low, high, delta)
        while low < high:
            k = low
            e = sum((sigmoid(score, k) - result) ** 2 for score, result in data) / len(data)
            if e < error:
                error = e
                best = k
                log.debug("New best K of %.9f, Error %.9f", k, error)
            low += delta
        low = best - delta
        high = best + delta
        delta /= 10

    log.debug("Using K of %.9f", best)
    return best