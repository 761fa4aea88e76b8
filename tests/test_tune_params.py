import pytest

from enginekit.tune_params import (
    DEFAULT_ALPHA,
    FIELD_SHAPES,
    Param,
    Weight,
    Weights,
    determine_k,
    sigmoid,
)


def test_param_update_without_gradient_only_counts_epoch():
    p = Param(value=5.0)
    p.update(0.1)
    assert p.epoch == 1
    assert p.value == 5.0
    assert p.m == 0.0 and p.v == 0.0


def test_param_first_adam_step_moves_about_alpha_in_gradient_direction():
    p = Param(value=1.0, g=3.0)
    p.update(0.5)
    assert p.value == pytest.approx(1.5, abs=1e-6)
    assert p.g == 0.0
    assert p.epoch == 1

    q = Param(value=1.0, g=-3.0)
    q.update(0.5)
    assert q.value == pytest.approx(0.5, abs=1e-6)


def test_param_second_update_without_gradient_keeps_moments():
    p = Param(g=2.0)
    p.update(DEFAULT_ALPHA)
    m, v, value = p.m, p.v, p.value
    p.update(DEFAULT_ALPHA)
    assert (p.m, p.v, p.value) == (m, v, value)
    assert p.epoch == 2


def test_weight_update_steps_both_halves():
    w = Weight(Param(g=1.0), Param(g=-1.0))
    w.update(0.25)
    assert w.mg.value > 0 > w.eg.value
    assert w.mg.epoch == w.eg.epoch == 1


def test_weights_initial_values_and_defaults():
    weights = Weights({"bishop_pair": (20, 40), "ks_file": [(1, 2), (3, 4), (5, 6), (7, 8)]})
    assert (weights.bishop_pair.mg.value, weights.bishop_pair.eg.value) == (20.0, 40.0)
    assert weights.ks_file[3].eg.value == 8.0
    assert weights.material[0].mg.value == 0.0
    assert len(weights.psqt) == 6 and all(len(row) == 32 for row in weights.psqt)
    assert len(weights.queen_mobilities) == FIELD_SHAPES["queen_mobilities"][0]


def test_weights_reject_unknown_name():
    with pytest.raises(ValueError):
        Weights({"no_such_term": (1, 1)})


def test_weights_reject_wrong_shape():
    with pytest.raises(ValueError):
        Weights({"ks_file": [(1, 2)]})
    with pytest.raises(ValueError):
        Weights({"bishop_pair": 5})


def test_copy_is_independent():
    weights = Weights({"bishop_pair": (10, 10)})
    clone = weights.copy()
    clone.bishop_pair.mg.value = 99.0
    clone.psqt[2][5].mg.g = 7.0
    assert weights.bishop_pair.mg.value == 10.0
    assert weights.psqt[2][5].mg.g == 0.0


def test_add_gradients_sums_all_terms():
    total = Weights()
    part = Weights()
    part.material[1].mg.g = 1.5
    part.ks_pawn_storm[3][7].eg.g = -2.0
    total.add_gradients(part)
    total.add_gradients(part)
    assert total.material[1].mg.g == 3.0
    assert total.ks_pawn_storm[3][7].eg.g == -4.0
    assert total.material[0].mg.g == 0.0


def test_weights_update_changes_only_weights_with_gradient():
    weights = Weights({"passed_pawn": [(10, 10)] * 8})
    weights.passed_pawn[4].eg.g = 1.0
    weights.update(1.0)
    assert weights.passed_pawn[4].eg.value > 10.0
    assert weights.passed_pawn[4].mg.value == 10.0
    assert weights.passed_pawn[4].eg.g == 0.0
    assert weights.hanging_threat.mg.epoch == 1


def test_sigmoid_properties():
    assert sigmoid(0) == 0.5
    for s in (10, 100, 500):
        assert sigmoid(s) + sigmoid(-s) == pytest.approx(1.0)
        assert sigmoid(s) > 0.5
    assert sigmoid(100) < sigmoid(200)


def test_determine_k_recovers_scaling():
    evals = [-300, -120, -40, 0, 35, 90, 250, 600]
    samples = [(e, sigmoid(e, 2.0)) for e in evals]
    assert determine_k(samples) == pytest.approx(2.0)


def test_determine_k_requires_samples():
    with pytest.raises(ValueError):
        determine_k([])