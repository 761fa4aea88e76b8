# enginekit

Pure-Python building blocks for a UCI chess engine. No third-party
dependencies.

## Modules

- `enginekit.util` — `get_time_ms()`, the wall clock in whole milliseconds.
- `enginekit.timeman` — the `SearchParams` dataclass (start, end and maximum
  time, time to spend, depth, and the `timeset` / `stopped` / `quit` flags) and
  `update_time_params(params, old, new, expands, depth, window)`. When time is
  set, the depth is at least 5 and the score moved by more than `window`, the
  time budget grows by `2 << min(4, expands)` percent (half that when the score
  improved), and the end time is moved out, never past `max_time`.
- `enginekit.transposition` — `TranspositionTable(megabytes=32, mate_bound=30000)`
  with three-entry buckets and a power-of-two number of buckets.
  `resize(megabytes)` returns the table size in bytes (`ValueError` below 1 MB),
  `clear()`, `probe(key)` returns a `TTEntry` or `None`, `put(key, depth, score,
  flag, move, ply, eval)` replaces an empty, matching or shallowest slot (a deeper
  matching entry is kept unless the new flag is `Bound.EXACT`), and `hashfull()`
  gives a permille sampled over the first buckets. `Bound` is an `IntFlag` with
  `LOWER`, `UPPER` and `EXACT`; `tt_score(entry, ply, mate_bound)` makes mate
  scores relative to `ply`.
- `enginekit.zobrist` — `ZobristKeys(rng=None)` draws keys for twelve piece
  kinds on 64 squares, en passant squares, 16 castling states and the side to
  move. Without an `rng` callable it uses a fixed seed, so keys are reproducible.
  `hash(pieces, ep_square, castling, side)` takes twelve piece bitboards.
- `enginekit.uci` — parsing of UCI command lines:
  - `parse_go(line, side, start_time, max_search_ply)` returns a `GoLimits`
    (depth, perft, `timeset`, end time, maximum time, time to spend) from
    `wtime`/`btime`, `winc`/`binc`, `movestogo`, `movetime`, `depth` and
    `perft`; a `movestogo` of zero raises `ValueError`.
  - `parse_position(line)` returns the FEN (`START_FEN` for `startpos`) and the
    list of move strings.
  - `get_option_int_value(line)` reads the value of `setoption name X value n`.
  - `uci_options()` lists the lines of the `uci` handshake.
  - `clamp_hash(megabytes)` (4 to 65536) and `clamp_threads(count)` (1 to 256).
- `enginekit.tune_params` — `Param` (value, gradient and Adam moments),
  `Weight` (an mg/eg pair) and `Weights`, whose attributes are the terms named
  in `FIELD_SHAPES`, optionally initialised from a mapping of `(mg, eg)`
  values. `Weights.add_gradients`, `Weights.update(alpha)` and `Weights.copy()`.
  `sigmoid(score, k)` and `determine_k(samples)`, which searches for the scaling
  constant that best fits `(static eval, result)` pairs.
- `enginekit.tune_train` — `TuningPosition` samples holding per-side
  coefficients, `evaluate_coeffs`, `validate_eval` (raises `ValueError` when a
  coefficient evaluation differs from the static evaluation by more than 1),
  `update_gradients`, and a `Trainer` whose `train_epoch(epoch)` runs one epoch
  across a thread pool and whose `run(epochs)` yields `(epoch, error)`.
- `enginekit.tune_report` — `format_weight`, `format_weight_array`,
  `format_weights` render the tuned tables as `S(mg, eg)` source text, and
  `append_weights(path, weights, epoch, error)` appends them to a file.

## Examples

```python
from enginekit.transposition import Bound, TranspositionTable

tt = TranspositionTable(megabytes=4, mate_bound=30000)
tt.put(key=0x1234_5678_9ABC_DEF0, depth=8, score=35, flag=Bound.EXACT, move=0, ply=0, eval=20)
entry = tt.probe(0x1234_5678_9ABC_DEF0)
print(entry.score, tt.hashfull())
```

```python
from enginekit.uci import parse_go

limits = parse_go("go wtime 60000 btime 60000 winc 1000", side=0, start_time=0, max_search_ply=201)
print(limits.end_time, limits.max_time)
```

```python
from enginekit.tune_params import Weights
from enginekit.tune_train import Trainer, TuningPosition

weights = Weights({"bishop_pair": (30, 50)})
position = TuningPosition(
    phase=64, stm=0, result=1.0, scale=128, static_eval=0,
    coeffs={"bishop_pair": (1, 0)},
)
trainer = Trainer([position], weights, k=3.5, alpha=0.001, tempo=0, max_scale=128)
for epoch, error in trainer.run(3):
    print(epoch, error)
```

## What it does not do

The package has no board representation, move generation, search or static
evaluation, and no command to run. `parse_go` and `parse_position` only turn
command lines into values; they do not start a search, run perft or apply moves,
and there is no loop reading UCI commands from standard input. The tuning
modules work on coefficients you supply; they do not read positions from EPD
files or compute coefficients from positions. There is no endgame tablebase
support.

## Tests

```
pip install -e .[test]
pytest
```