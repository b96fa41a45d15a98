"""Command that trains a digit recognizer on the MNIST handwritten-digit set."""

from __future__ import annotations

import argparse
import random
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from .activations import Activation
from .data import MnistData, MnistFormatError, MnistImagesSet, MnistLabelsSet, load_mnist_data
from .loss import LossFunction
from .network import NetworkConfigError, NeuralNetwork
from .utils import shuffle_training_data

DEFAULT_DATA_DIR = Path("../data/mnist/handwritten-digits")
TRAINING_IMAGES = Path("train/train-images.idx3-ubyte")
TRAINING_LABELS = Path("train/train-labels.idx1-ubyte")
TEST_IMAGES = Path("test/t10k-images.idx3-ubyte")
TEST_LABELS = Path("test/t10k-labels.idx1-ubyte")

HIDDEN_LAYERS = (16, 16, 10)
LAYER_ACTIVATIONS = (Activation.RELU, Activation.RELU, Activation.SOFTMAX)
LOSS_FUNCTION = LossFunction.MULTI_CROSS_ENTROPY
LEARNING_RATE = 0.000000001
BATCH_SIZE = 256
EPOCHS = 10000


def render_image(
    images_set: MnistImagesSet, labels_set: MnistLabelsSet, index: int
) -> str:
    """Render one image as a grid of 0-255 pixel values followed by its label."""
    image = images_set.images[index]
    columns = images_set.number_of_columns
    lines = [
        "".join(f"{value * 255:.0f}\t" for value in image[row * columns:(row + 1) * columns])
        for row in range(images_set.number_of_rows)
    ]
    label = "".join(f"{value:.0f} " for value in labels_set.labels[index])
    return "\n".join(lines) + "\n\n" + label + "\n\n\n"


def _format_vector(values: Sequence[float]) -> str:
    return "[" + "".join(f"{value:f}, " for value in values) + "]"


def train(
    network: NeuralNetwork,
    data: MnistData,
    epochs: int,
    batch_size: int = BATCH_SIZE,
    rng: random.Random | None = None,
    out: TextIO | None = None,
) -> list[float]:
    """Train on the training set; return the last batch loss of every epoch.

    Each epoch shuffles the training data, trains sample by sample in batches,
    reports the loss of the final batch and shows the network output for a
    randomly chosen training sample next to the expected output.
    """
    if batch_size <= 0:
        raise ValueError("batch size must be greater than 0")
    images = data.training_images.images
    labels = data.training_labels.labels
    if not images:
        raise ValueError("no training images to train on")
    if len(images) != len(labels):
        raise ValueError("training images and labels differ in number")
    rng = rng if rng is not None else random.Random()
    out = out if out is not None else sys.stdout

    epoch_losses: list[float] = []
    for epoch in range(1, epochs + 1):
        shuffle_training_data(images, labels, rng)

        batch_loss = 0.0
        for start in range(0, len(images), batch_size):
            batch_loss = 0.0
            for image, label in zip(
                images[start:start + batch_size], labels[start:start + batch_size]
            ):
                output = network.feedforward(image)
                batch_loss += network.calculate_loss(output, label)
                network.backpropagation(image, label)
            batch_loss /= batch_size
        epoch_losses.append(batch_loss)
        out.write(f"Epoch {epoch}, Batch Loss: {batch_loss:f}\n")

        sample = rng.randrange(len(images))
        output = network.feedforward(images[sample])
        out.write(f"Net Output: {_format_vector(output)}\n")
        out.write(f"Expected Output: {_format_vector(labels[sample])}\n")
        out.write("\n")
    return epoch_losses


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="digitnet", description="Train a handwritten-digit recognizer on MNIST."
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help="directory holding the train/ and test/ MNIST files",
    )
    parser.add_argument("--epochs", type=int, default=EPOCHS)
    parser.add_argument("--batch-size", type=int, default=BATCH_SIZE)
    parser.add_argument("--learning-rate", type=float, default=LEARNING_RATE)
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible runs")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Load MNIST, show the first training image and train the network."""
    args = _parse_args(argv)
    rng = random.Random(args.seed)
    data_dir: Path = args.data_dir

    try:
        data = load_mnist_data(
            data_dir / TRAINING_IMAGES,
            data_dir / TRAINING_LABELS,
            data_dir / TEST_IMAGES,
            data_dir / TEST_LABELS,
        )
    except MnistFormatError as exc:
        print(exc, file=sys.stderr)
        print("Error loading mnist data!", file=sys.stderr)
        return 1

    if data.training_images.images:
        sys.stdout.write(render_image(data.training_images, data.training_labels, 0))

    try:
        network = NeuralNetwork(
            data.training_images.pixels_per_image,
            HIDDEN_LAYERS,
            LAYER_ACTIVATIONS,
            LOSS_FUNCTION,
            args.learning_rate,
            rng,
        )
    except NetworkConfigError as exc:
        print(exc, file=sys.stderr)
        print("Error creating neural network", file=sys.stderr)
        return 1

    try:
        train(network, data, args.epochs, args.batch_size, rng, sys.stdout)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())