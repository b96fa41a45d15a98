"""Activation functions and their derivatives for dense layers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import IntEnum


class Activation(IntEnum):
    """Activation kinds a dense layer can use."""

    LINEAR = 0
    SIGMOID = 1
    TANH = 2
    RELU = 3
    SOFTMAX = 4


def linear(x: float) -> float:
    """Identity activation, returned as a float."""
    return float(x)


def linear_derivative(x: float) -> float:
    """Derivative of the identity activation: 1.0 for every input."""
    # pow(v, 0) is 1.0 for every float, NaN and infinities included.
    return math.pow(float(x), 0)


def sigmoid(x: float) -> float:
    """Logistic sigmoid, computed without overflow for large magnitudes."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    ex = math.exp(x)
    return ex / (1.0 + ex)


def sigmoid_derivative(x: float) -> float:
    """Derivative of the sigmoid at ``x``."""
    s = sigmoid(x)
    return s * (1.0 - s)


def tanh(x: float) -> float:
    """Hyperbolic tangent."""
    return math.tanh(x)


def tanh_derivative(x: float) -> float:
    """Derivative of the hyperbolic tangent at ``x``."""
    t = tanh(x)
    return 1.0 - t * t


def relu(x: float) -> float:
    """Rectified linear unit."""
    return x if x > 0 else 0.0


def relu_derivative(x: float) -> float:
    """Derivative of the rectified linear unit: 1.0 for positive input, else 0.0."""
    return float(x > 0)


def softmax(inputs: Sequence[float]) -> list[float]:
    """Numerically stable softmax of ``inputs``.

    Raises ValueError for an empty input or when the exponentials sum to zero.
    """
    if not inputs:
        raise ValueError("softmax needs at least one input")
    max_input = max(inputs)
    exps = [math.exp(value - max_input) for value in inputs]
    total = sum(exps)
    if total == 0.0 or math.isnan(total):
        raise ValueError("softmax exponentials do not sum to a usable value")
    return [value / total for value in exps]


def softmax_derivative(
    inputs: Sequence[float], expected_outputs: Sequence[float]
) -> list[float]:
    """Per-neuron softmax derivative against a one-hot expected output."""
    if len(inputs) != len(expected_outputs):
        raise ValueError("inputs and expected outputs differ in length")
    return [
        s * ((1.0 - s) if expected else -s)
        for s, expected in zip(softmax(inputs), expected_outputs)
    ]