from dataclasses import replace

import pytest

from enginekit.timeman import SearchParams, update_time_params

WINDOW = 10


@pytest.fixture
def params():
    return SearchParams(
        start_time=0, end_time=1000, max_time=100_000, time_to_spend=1000, timeset=True
    )


def test_no_change_without_timeset(params):
    params.timeset = False
    before = replace(params)
    update_time_params(params, 0, 500, 2, 10, WINDOW)
    assert params == before


def test_no_change_at_shallow_depth(params):
    before = replace(params)
    update_time_params(params, 0, -500, 2, 4, WINDOW)
    assert params == before


def test_no_change_inside_window(params):
    before = replace(params)
    update_time_params(params, 0, WINDOW, 2, 10, WINDOW)
    assert params == before


def test_worsening_score_with_no_expansions(params):
    update_time_params(params, 0, -100, 0, 10, WINDOW)
    assert params.time_to_spend == 1020
    assert params.end_time == params.start_time + params.time_to_spend


def test_worsening_extends_more_than_improving(params):
    better = replace(params)
    update_time_params(params, 0, -100, 3, 10, WINDOW)
    update_time_params(better, 0, 100, 3, 10, WINDOW)
    assert params.time_to_spend > better.time_to_spend > 1000


def test_more_expansions_extend_more(params):
    few = replace(params)
    update_time_params(few, 0, -100, 1, 10, WINDOW)
    update_time_params(params, 0, -100, 3, 10, WINDOW)
    assert params.time_to_spend > few.time_to_spend


def test_expansions_capped(params):
    capped = replace(params)
    update_time_params(capped, 0, -100, 4, 10, WINDOW)
    update_time_params(params, 0, -100, 20, 10, WINDOW)
    assert params.time_to_spend == capped.time_to_spend


def test_end_time_capped_at_max(params):
    params.max_time = 1005
    update_time_params(params, 0, -100, 4, 10, WINDOW)
    assert params.time_to_spend > 1005
    assert params.end_time == params.max_time