"""Fully connected feed-forward neural network trained by backpropagation."""

from __future__ import annotations

import logging
import math
import random
import time
import warnings
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .activations import (
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
from .loss import (
    LossFunction,
    binary_cross_entropy_loss,
    binary_cross_entropy_loss_derivative,
    mean_squared_error_loss,
    mean_squared_error_loss_derivative,
    multi_class_cross_entropy_loss,
    multi_class_cross_entropy_loss_derivative,
)

logger = logging.getLogger(__name__)

RELU_BIAS = 0.01

_ELEMENTWISE: dict[Activation, tuple[Callable[[float], float], Callable[[float], float]]] = {
    Activation.LINEAR: (linear, linear_derivative),
    Activation.SIGMOID: (sigmoid, sigmoid_derivative),
    Activation.TANH: (tanh, tanh_derivative),
    Activation.RELU: (relu, relu_derivative),
}

_LOSSES = {
    LossFunction.MULTI_CROSS_ENTROPY: (
        multi_class_cross_entropy_loss,
        multi_class_cross_entropy_loss_derivative,
    ),
    LossFunction.BINARY_CROSS_ENTROPY: (
        binary_cross_entropy_loss,
        binary_cross_entropy_loss_derivative,
    ),
}


class NetworkConfigError(ValueError):
    """Raised when a network is given an invalid shape or configuration."""


def random_normal(mean: float, stddev: float, rng: random.Random | None = None) -> float:
    """Draw from a normal distribution with the Box-Muller transform."""
    rng = rng if rng is not None else random.Random()
    u1 = 1.0 - rng.random()  # in (0, 1], keeps the logarithm finite
    u2 = rng.random()
    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return z0 * stddev + mean


def random_uniform(low: float, high: float, rng: random.Random | None = None) -> float:
    """Draw uniformly from the interval [low, high)."""
    rng = rng if rng is not None else random.Random()
    return low + rng.random() * (high - low)


def he_init_weights(
    current_layer_size: int, previous_layer_size: int, rng: random.Random | None = None
) -> list[list[float]]:
    """He initialisation: normal weights with deviation sqrt(2 / fan_in)."""
    rng = rng if rng is not None else random.Random()
    stddev = math.sqrt(2.0 / previous_layer_size)
    return [
        [random_normal(0.0, stddev, rng) for _ in range(previous_layer_size)]
        for _ in range(current_layer_size)
    ]


def glorot_init_weights(
    current_layer_size: int, previous_layer_size: int, rng: random.Random | None = None
) -> list[list[float]]:
    """Glorot initialisation: uniform weights within sqrt(6 / (fan_in + fan_out))."""
    rng = rng if rng is not None else random.Random()
    limit = math.sqrt(6.0 / (previous_layer_size + current_layer_size))
    return [
        [random_uniform(-limit, limit, rng) for _ in range(previous_layer_size)]
        for _ in range(current_layer_size)
    ]


@dataclass
class DenseLayer:
    """One fully connected layer; ``weights[i]`` holds neuron i's incoming weights."""

    activation: Activation
    weights: list[list[float]]
    biases: list[float]
    weighted_inputs: list[float] = field(default_factory=list)
    outputs: list[float] = field(default_factory=list)

    @property
    def size(self) -> int:
        """Number of neurons in the layer."""
        return len(self.biases)

    @property
    def previous_layer_size(self) -> int:
        """Number of inputs each neuron receives."""
        return len(self.weights[0]) if self.weights else 0

    def _forward(self, inputs: Sequence[float]) -> list[float]:
        self.weighted_inputs = [
            sum(x * w for x, w in zip(inputs, row)) + bias
            for row, bias in zip(self.weights, self.biases)
        ]
        if self.activation is Activation.SOFTMAX:
            self.outputs = softmax(self.weighted_inputs)
        else:
            function = _ELEMENTWISE[self.activation][0]
            self.outputs = [function(z) for z in self.weighted_inputs]
        return list(self.outputs)

    def _derivatives(self) -> list[float]:
        derivative = _ELEMENTWISE[self.activation][1]
        return [derivative(z) for z in self.weighted_inputs]

    def _update(self, deltas: Sequence[float], inputs: Sequence[float], rate: float) -> None:
        for row, delta in zip(self.weights, deltas):
            step = rate * delta
            for j, x in enumerate(inputs):
                row[j] -= step * x
        self.biases = [b - rate * d for b, d in zip(self.biases, deltas)]


def _resolve_activation(value: int, index: int, is_last: bool) -> Activation:
    try:
        kind = Activation(value)
    except ValueError:
        warnings.warn(
            f"activation type not recognized for layer {index}; defaulting to ReLU",
            stacklevel=3,
        )
        return Activation.RELU
    if kind is Activation.SOFTMAX and not is_last:
        warnings.warn(
            "softmax activation is only allowed in the output layer; "
            f"defaulting to ReLU on layer {index}",
            stacklevel=3,
        )
        return Activation.RELU
    return kind


def _resolve_loss(value: int) -> LossFunction:
    try:
        return LossFunction(value)
    except ValueError:
        warnings.warn(
            "unrecognized loss function; defaulting to mean squared error", stacklevel=3
        )
        return LossFunction.MEAN_SQUARED_ERROR


class NeuralNetwork:
    """A stack of dense layers trained one sample at a time by gradient descent."""

    def __init__(
        self,
        input_layer_size: int,
        layer_sizes: Sequence[int],
        activations: Sequence[int],
        loss_function: int = LossFunction.MEAN_SQUARED_ERROR,
        learning_rate: float = 0.01,
        rng: random.Random | None = None,
    ) -> None:
        started = time.perf_counter()
        if input_layer_size <= 0:
            raise NetworkConfigError("invalid number of neurons for input layer")
        if not layer_sizes:
            raise NetworkConfigError(
                "network should have at least one dense layer to serve as the output layer"
            )
        if len(activations) != len(layer_sizes):
            raise NetworkConfigError("one activation is needed for each dense layer")
        for size in layer_sizes:
            if size <= 0:
                raise NetworkConfigError(
                    f"wrong dense layer size of {size}: dense layer size must be greater than 0"
                )

        rng = rng if rng is not None else random.Random()
        self.input_layer_size = input_layer_size
        self.learning_rate = learning_rate
        self.loss_function = _resolve_loss(loss_function)

        self.layers: list[DenseLayer] = []
        previous = input_layer_size
        last_index = len(layer_sizes) - 1
        for index, (size, value) in enumerate(zip(layer_sizes, activations)):
            kind = _resolve_activation(value, index, index == last_index)
            if kind is Activation.RELU:
                weights = he_init_weights(size, previous, rng)
                bias = RELU_BIAS
            else:
                weights = glorot_init_weights(size, previous, rng)
                bias = 0.0
            self.layers.append(DenseLayer(kind, weights, [bias] * size))
            previous = size

        logger.info(
            "Created neural network with %d hidden layers in %.8f seconds",
            len(self.layers),
            time.perf_counter() - started,
        )

    @property
    def output_size(self) -> int:
        """Number of neurons in the output layer."""
        return self.layers[-1].size

    def feedforward(self, inputs: Sequence[float]) -> list[float]:
        """Run the first ``input_layer_size`` values through the network."""
        if len(inputs) < self.input_layer_size:
            raise ValueError(
                f"network needs {self.input_layer_size} inputs, got {len(inputs)}"
            )
        values: list[float] = list(inputs[: self.input_layer_size])
        for layer in self.layers:
            values = layer._forward(values)
        return values

    def _loss_derivative(self, predicted: float, actual: float) -> float:
        if self.loss_function is LossFunction.MEAN_SQUARED_ERROR:
            return mean_squared_error_loss_derivative(predicted, actual, self.output_size)
        return _LOSSES[self.loss_function][1](predicted, actual)

    def backpropagation(
        self, network_input: Sequence[float], expected_output: Sequence[float]
    ) -> None:
        """Update weights and biases from the last feedforward pass of ``network_input``."""
        last = self.layers[-1]
        if not last.outputs:
            raise RuntimeError("feedforward must run before backpropagation")
        if len(expected_output) != last.size:
            raise ValueError("expected output does not match the output layer size")
        if len(network_input) < self.input_layer_size:
            raise ValueError("network input is shorter than the input layer")

        if last.activation is Activation.SOFTMAX:
            activation_derivatives = softmax_derivative(last.weighted_inputs, expected_output)
        else:
            activation_derivatives = last._derivatives()
        deltas = [
            self._loss_derivative(out, exp) * act
            for out, exp, act in zip(last.outputs, expected_output, activation_derivatives)
        ]

        for index in range(len(self.layers) - 1, 0, -1):
            layer = self.layers[index]
            previous = self.layers[index - 1]
            previous_derivatives = previous._derivatives()
            new_deltas = [
                sum(delta * row[j] for delta, row in zip(deltas, layer.weights)) * derivative
                for j, derivative in enumerate(previous_derivatives)
            ]
            layer._update(deltas, previous.outputs, self.learning_rate)
            deltas = new_deltas

        self.layers[0]._update(
            deltas, network_input[: self.input_layer_size], self.learning_rate
        )

    def calculate_loss(
        self, network_output: Sequence[float], expected_output: Sequence[float]
    ) -> float:
        """Loss of ``network_output`` against ``expected_output`` with the network's loss."""
        size = self.output_size
        if self.loss_function is LossFunction.MEAN_SQUARED_ERROR:
            return mean_squared_error_loss(network_output[:size], expected_output[:size])
        return _LOSSES[self.loss_function][0](network_output[:size], expected_output[:size])