"""A small dense neural network, MNIST loader and training command for handwritten digits."""

__version__ = "0.1.0"

__all__ = ["activations", "loss", "utils", "data", "network", "cli"]