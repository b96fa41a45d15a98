"""Loss functions and their per-output derivatives."""

from __future__ import annotations

import math
import warnings
from collections.abc import Sequence
from enum import IntEnum

EPSILON = 1e-10


class LossFunction(IntEnum):
    """Loss kinds a network can be trained with."""

    MEAN_SQUARED_ERROR = 0
    MULTI_CROSS_ENTROPY = 1
    BINARY_CROSS_ENTROPY = 2


def safe_log(x: float) -> float:
    """Natural logarithm with its argument clamped below at ``EPSILON``."""
    return math.log(x if x >= EPSILON else EPSILON)


def _check_pair(network_output: Sequence[float], expected_output: Sequence[float]) -> None:
    if len(network_output) != len(expected_output):
        raise ValueError("network output and expected output differ in length")
    if not network_output:
        raise ValueError("outputs must not be empty")


def mean_squared_error_loss(
    network_output: Sequence[float], expected_output: Sequence[float]
) -> float:
    """Mean of the squared differences between output and expectation."""
    _check_pair(network_output, expected_output)
    total = sum((out - exp) ** 2 for out, exp in zip(network_output, expected_output))
    return total / len(network_output)


def mean_squared_error_loss_derivative(
    predicted: float, actual: float, output_size: int
) -> float:
    """Derivative of the mean squared error for a single output."""
    return (2.0 / output_size) * (predicted - actual)


def multi_class_cross_entropy_loss(
    network_output: Sequence[float], expected_output: Sequence[float]
) -> float:
    """Categorical cross-entropy of the output against the expectation."""
    _check_pair(network_output, expected_output)
    return -sum(exp * safe_log(out) for out, exp in zip(network_output, expected_output))


def multi_class_cross_entropy_loss_derivative(predicted: float, actual: float) -> float:
    """Derivative of categorical cross-entropy; zero where the prediction is zero."""
    if predicted == 0:
        return 0.0
    return -actual / predicted


def binary_cross_entropy_loss(
    network_output: Sequence[float], expected_output: Sequence[float]
) -> float:
    """Binary cross-entropy over a two-class output, scored on the second class."""
    if len(network_output) < 2 or len(expected_output) < 2:
        raise ValueError("binary cross entropy needs two outputs")
    if len(network_output) > 2:
        warnings.warn(
            "binary cross entropy used on an output with more than two classes; "
            "consider a loss that supports multiple classes",
            stacklevel=2,
        )
    if expected_output[0] == 1 and expected_output[1] == 1:
        warnings.warn(
            "expected output flags both classes as correct when only one should be",
            stacklevel=2,
        )
    correct_class = -1.0
    if expected_output[0] == 1:
        correct_class = 0.0
    if expected_output[1] == 1:
        correct_class = 1.0
    p = network_output[1]
    return -(correct_class * safe_log(p) + (1 - correct_class) * safe_log(1 - p))


def binary_cross_entropy_loss_derivative(predicted: float, actual: float) -> float:
    """Derivative of binary cross-entropy; zero at a prediction of exactly 0 or 1."""
    if predicted == 0 or predicted == 1:
        return 0.0
    return (predicted - actual) / (predicted * (1 - predicted))