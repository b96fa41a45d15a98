import math

import pytest

from digitnet.loss import (
    EPSILON,
    LossFunction,
    binary_cross_entropy_loss,
    binary_cross_entropy_loss_derivative,
    mean_squared_error_loss,
    mean_squared_error_loss_derivative,
    multi_class_cross_entropy_loss,
    multi_class_cross_entropy_loss_derivative,
    safe_log,
)


def test_loss_codes():
    assert LossFunction(1) is LossFunction.MULTI_CROSS_ENTROPY
    assert [l.value for l in LossFunction] == [0, 1, 2]


def test_safe_log_clamps_small_values():
    assert safe_log(0.0) == math.log(EPSILON)
    assert safe_log(-5.0) == math.log(EPSILON)
    assert safe_log(2.5) == math.log(2.5)


def test_mse_of_identical_outputs_is_zero():
    assert mean_squared_error_loss([0.1, 0.5, 0.9], [0.1, 0.5, 0.9]) == 0


def test_mse_scales_quadratically():
    small = mean_squared_error_loss([0.2, 0.4], [0.0, 0.0])
    large = mean_squared_error_loss([0.4, 0.8], [0.0, 0.0])
    assert large == pytest.approx(4 * small)


def test_mse_is_symmetric():
    a, b = [0.3, 0.7, 0.1], [1.0, 0.0, 0.0]
    assert mean_squared_error_loss(a, b) == pytest.approx(mean_squared_error_loss(b, a))


def test_mse_length_mismatch_raises():
    with pytest.raises(ValueError):
        mean_squared_error_loss([0.1, 0.2], [0.1])


def test_mse_derivative_antisymmetric_and_zero_at_target():
    assert mean_squared_error_loss_derivative(0.7, 0.7, 10) == 0
    assert mean_squared_error_loss_derivative(0.9, 0.1, 4) == pytest.approx(
        -mean_squared_error_loss_derivative(0.1, 0.9, 4)
    )


def test_cross_entropy_with_one_hot_picks_correct_class():
    out = [0.1, 0.7, 0.2]
    assert multi_class_cross_entropy_loss(out, [0, 1, 0]) == pytest.approx(-math.log(0.7))


def test_cross_entropy_clamps_zero_probability():
    assert multi_class_cross_entropy_loss([0.0, 1.0], [1, 0]) == pytest.approx(
        -math.log(EPSILON)
    )


def test_cross_entropy_decreases_as_prediction_improves():
    worse = multi_class_cross_entropy_loss([0.3, 0.7], [1, 0])
    better = multi_class_cross_entropy_loss([0.6, 0.4], [1, 0])
    assert better < worse


def test_cross_entropy_derivative():
    assert multi_class_cross_entropy_loss_derivative(0.0, 1.0) == 0
    assert multi_class_cross_entropy_loss_derivative(0.5, 1.0) == pytest.approx(-1.0 / 0.5)
    assert multi_class_cross_entropy_loss_derivative(0.5, 0.0) == 0


def test_binary_cross_entropy_second_class():
    assert binary_cross_entropy_loss([0.2, 0.8], [0, 1]) == pytest.approx(-math.log(0.8))


def test_binary_cross_entropy_first_class():
    assert binary_cross_entropy_loss([0.2, 0.8], [1, 0]) == pytest.approx(-math.log(1 - 0.8))


def test_binary_cross_entropy_warns_on_many_classes():
    with pytest.warns(UserWarning):
        value = binary_cross_entropy_loss([0.2, 0.8, 0.0], [0, 1, 0])
    assert value == pytest.approx(-math.log(0.8))


def test_binary_cross_entropy_warns_on_both_flagged():
    with pytest.warns(UserWarning):
        value = binary_cross_entropy_loss([0.5, 0.25], [1, 1])
    assert value == pytest.approx(-math.log(0.25))


def test_binary_cross_entropy_needs_two_outputs():
    with pytest.raises(ValueError):
        binary_cross_entropy_loss([0.5], [1])


def test_binary_cross_entropy_derivative():
    assert binary_cross_entropy_loss_derivative(0.0, 1.0) == 0
    assert binary_cross_entropy_loss_derivative(1.0, 0.0) == 0
    assert binary_cross_entropy_loss_derivative(0.25, 0.25) == 0
    assert binary_cross_entropy_loss_derivative(0.8, 1.0) < 0
    assert binary_cross_entropy_loss_derivative(0.8, 0.0) > 0