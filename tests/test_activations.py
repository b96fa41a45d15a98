import math

import pytest

from digitnet.activations import (
    Activation,
    linear,
    linear_derivative,
    relu,
    relu_derivative,
    sigmoid,
    sigmoid_derivative,
    softmax,
    softmax_derivative,
    tanh,
    tanh_derivative,
)


def test_activation_codes_match_layer_configuration():
    assert [a.value for a in Activation] == [0, 1, 2, 3, 4]
    assert Activation(4) is Activation.SOFTMAX


@pytest.mark.parametrize("x", [-3.5, 0.0, 2.25])
def test_linear(x):
    assert linear(x) == x
    assert linear_derivative(x) == 1


@pytest.mark.parametrize("x", [-5.0, -0.3, 0.0, 1.7, 8.0])
def test_sigmoid_symmetry_and_range(x):
    assert sigmoid(x) + sigmoid(-x) == pytest.approx(1.0)
    assert 0.0 < sigmoid(x) < 1.0


def test_sigmoid_extremes_do_not_overflow():
    assert sigmoid(-1000.0) == pytest.approx(0.0)
    assert sigmoid(1000.0) == pytest.approx(1.0)


@pytest.mark.parametrize("x", [-2.0, 0.5, 3.0])
def test_sigmoid_derivative_matches_numeric(x):
    h = 1e-6
    numeric = (sigmoid(x + h) - sigmoid(x - h)) / (2 * h)
    assert sigmoid_derivative(x) == pytest.approx(numeric, rel=1e-5)


@pytest.mark.parametrize("x", [-4.0, -0.1, 0.0, 0.7, 20.0])
def test_tanh_matches_math(x):
    assert tanh(x) == pytest.approx(math.tanh(x))
    assert tanh(-x) == pytest.approx(-tanh(x))


@pytest.mark.parametrize("x", [-1.2, 0.3, 2.0])
def test_tanh_derivative_matches_numeric(x):
    h = 1e-6
    numeric = (tanh(x + h) - tanh(x - h)) / (2 * h)
    assert tanh_derivative(x) == pytest.approx(numeric, rel=1e-5)


def test_relu_and_derivative():
    assert relu(3.5) == 3.5
    assert relu(-2.0) == 0
    assert relu(0.0) == 0
    assert relu_derivative(3.5) == 1
    assert relu_derivative(-2.0) == 0
    assert relu_derivative(0.0) == 0


def test_softmax_sums_to_one_and_keeps_order():
    out = softmax([1.0, 3.0, 2.0])
    assert sum(out) == pytest.approx(1.0)
    assert out[1] > out[2] > out[0]


def test_softmax_is_shift_invariant():
    base = softmax([0.5, -1.0, 2.0])
    shifted = softmax([100.5, 99.0, 102.0])
    assert shifted == pytest.approx(base)


def test_softmax_uniform_inputs():
    out = softmax([7.0, 7.0, 7.0, 7.0])
    assert all(value == pytest.approx(out[0]) for value in out)
    assert sum(out) == pytest.approx(1.0)


def test_softmax_large_values_stay_finite():
    out = softmax([1000.0, 1000.0])
    assert out == pytest.approx([0.5, 0.5])


def test_softmax_empty_raises():
    with pytest.raises(ValueError):
        softmax([])


def test_softmax_derivative_relation_to_softmax():
    inputs = [0.2, 1.4, -0.6]
    expected = [0.0, 1.0, 0.0]
    s = softmax(inputs)
    d = softmax_derivative(inputs, expected)
    assert d[1] == pytest.approx(s[1] * (1 - s[1]))
    assert d[0] == pytest.approx(-s[0] * s[0])
    assert d[2] == pytest.approx(-s[2] * s[2])


def test_softmax_derivative_length_mismatch():
    with pytest.raises(ValueError):
        softmax_derivative([1.0, 2.0], [1.0])