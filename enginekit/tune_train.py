"""Gradient computation and training loop for tuning evaluation weights."""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Sequence

from enginekit.tune_params import FIELD_SHAPES, Weight, Weights, sigmoid

log = logging.getLogger(__name__)

WHITE = 0
BLACK = 1
PHASE_SCALE = 128


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _flat(values: Any) -> Iterator[float]:
    if isinstance(values, (int, float)):
        yield float(values)
    else:
        for item in values:
            yield from _flat(item)


def _weight_leaves(value: Any) -> Iterator[Weight]:
    if isinstance(value, Weight):
        yield value
    else:
        for item in value:
            yield from _weight_leaves(item)


def _size(shape: tuple[int, ...]) -> int:
    return math.prod(shape) if shape else 1


@dataclass
class TuningPosition:
    """A training sample: evaluation coefficients for each side and the game result.

    ``coeffs`` maps a weight name from FIELD_SHAPES to a (white, black) pair of
    coefficient arrays shaped like that weight; names left out count as zero.
    ``king_safety`` holds each side's (mg, eg) king-safety score.
    """

    phase: int
    stm: int
    result: float
    scale: int
    static_eval: int
    coeffs: Mapping[str, tuple[Any, Any]] = field(default_factory=dict)
    king_safety: tuple[tuple[float, float], tuple[float, float]] = ((0.0, 0.0), (0.0, 0.0))
    _diffs: dict[str, list[float]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        unknown = set(self.coeffs) - set(FIELD_SHAPES)
        if unknown:
            raise ValueError(f"unknown coefficient names: {', '.join(sorted(unknown))}")
        self._diffs = {}
        for name, (white, black) in self.coeffs.items():
            expected = _size(FIELD_SHAPES[name])
            white_flat = list(_flat(white))
            black_flat = list(_flat(black))
            if len(white_flat) != expected or len(black_flat) != expected:
                raise ValueError(
                    f"{name}: expected {expected} coefficients per side, "
                    f"got {len(white_flat)} and {len(black_flat)}"
                )
            self._diffs[name] = [w - b for w, b in zip(white_flat, black_flat)]

    @property
    def phase_mg(self) -> float:
        """Share of the middlegame score in the blend."""
        return self.phase / PHASE_SCALE

    @property
    def phase_eg(self) -> float:
        """Share of the endgame score in the blend."""
        return 1 - self.phase / PHASE_SCALE

    def _terms(self, weights: Weights) -> Iterator[tuple[float, Weight]]:
        for name, diffs in self._diffs.items():
            for diff, weight in zip(diffs, _weight_leaves(getattr(weights, name))):
                if diff:
                    yield diff, weight


def evaluate_coeffs(position: TuningPosition, weights: Weights, tempo: int, max_scale: int) -> int:
    """Evaluate a position from its coefficients and the current weight values."""
    mg = 0.0
    eg = 0.0
    for diff, weight in position._terms(weights):
        mg += diff * weight.mg.value
        eg += diff * weight.eg.value

    (white_mg, white_eg), (black_mg, black_eg) = position.king_safety
    mg += white_mg - black_mg
    eg += white_eg - black_eg

    result = int((mg * position.phase + eg * (PHASE_SCALE - position.phase)) / PHASE_SCALE)
    result = _trunc_div(result * position.scale + max_scale // 2, max_scale)
    return result + (tempo if position.stm == WHITE else -tempo)


def validate_eval(
    positions: Sequence[TuningPosition], weights: Weights, tempo: int, max_scale: int
) -> None:
    """Check that the coefficient evaluation reproduces each static evaluation."""
    for index, position in enumerate(positions):
        evaluation = evaluate_coeffs(position, weights, tempo, max_scale)
        if abs(position.static_eval - evaluation) > 1:
            raise ValueError(
                "The coefficient based evaluation does NOT match the eval! "
                f"Static: {position.static_eval}, Coeffs: {evaluation}"
            )
        if index % 4096 == 0:
            log.info("Validated %d position evaluations...", index)


def update_gradients(
    positions: Sequence[TuningPosition], weights: Weights, k: float, tempo: int, max_scale: int
) -> float:
    """Accumulate gradients into ``weights`` and return the summed squared error."""
    error = 0.0
    for position in positions:
        actual = evaluate_coeffs(position, weights, tempo, max_scale)
        sig = sigmoid(actual, k)
        loss = (position.result - sig) * sig * (1 - sig)

        mg_base = position.phase_mg * position.scale * loss
        eg_base = position.phase_eg * position.scale * loss
        for diff, weight in position._terms(weights):
            weight.mg.g += diff * mg_base
            weight.eg.g += diff * eg_base

        error += (position.result - sig) ** 2
    return error


class Trainer:
    """Runs gradient-descent epochs over a fixed set of positions."""

    def __init__(
        self,
        positions: Sequence[TuningPosition],
        weights: Weights,
        k: float,
        alpha: float,
        tempo: int,
        max_scale: int,
        threads: int = 1,
    ) -> None:
        if threads < 1:
            raise ValueError(f"threads must be at least 1, got {threads}")
        if not positions:
            raise ValueError("no positions to train on")
        self.positions = list(positions)
        self.weights = weights
        self.k = k
        self.alpha = alpha * math.sqrt(len(self.positions))
        self.tempo = tempo
        self.max_scale = max_scale
        self.threads = threads

    def _chunks(self) -> list[list[TuningPosition]]:
        size = len(self.positions) // self.threads + 1
        return [self.positions[t * size:(t + 1) * size] for t in range(self.threads)]

    def train_epoch(self, epoch: int) -> float:
        """Compute gradients over all positions, apply one update, return the error."""
        chunks = self._chunks()
        locals_ = [self.weights.copy() for _ in chunks]

        def work(job: tuple[list[TuningPosition], Weights]) -> float:
            chunk, local = job
            return update_gradients(chunk, local, self.k, self.tempo, self.max_scale)

        with ThreadPoolExecutor(max_workers=self.threads) as pool:
            errors = list(pool.map(work, zip(chunks, locals_)))

        for local in locals_:
            self.weights.add_gradients(local)
        error = sum(errors)

        log.info("Epoch: %5d, Error: %9.8f", epoch, error / len(self.positions))
        self.weights.update(self.alpha)
        return error

    def run(self, epochs: int) -> Iterator[tuple[int, float]]:
        """Train for ``epochs`` epochs, yielding each epoch number and its error."""
        for epoch in range(1, epochs + 1):
            yield epoch, self.train_epoch(epoch)