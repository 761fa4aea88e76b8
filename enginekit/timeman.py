"""Search time bookkeeping and adjustment after aspiration-window failures."""

from dataclasses import dataclass


@dataclass
class SearchParams:
    """Timing and control state for one search."""

    start_time: int = 0
    end_time: int = 0
    max_time: int = 0
    time_to_spend: int = 0
    depth: int = 0
    timeset: bool = False
    stopped: bool = False
    quit: bool = False


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def update_time_params(
    params: SearchParams, old: int, new: int, expands: int, depth: int, window: int
) -> None:
    """Extend the time budget when the score moved outside the search window.

    The extension grows exponentially with the number of window expansions;
    an improving score earns half the extension of a worsening one.
    """
    if not (params.timeset and depth >= 5 and abs(old - new) > window):
        return

    percent_increase = 2 << min(4, expands)
    if new > old:
        percent_increase //= 2

    params.time_to_spend = _trunc_div(params.time_to_spend * (100 + percent_increase), 100)
    params.end_time = min(params.start_time + params.time_to_spend, params.max_time)