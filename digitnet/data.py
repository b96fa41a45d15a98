"""Loading of MNIST handwritten-digit image and label files in IDX format."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from typing import BinaryIO, Union

from .utils import normalize

StrPath = Union[str, "PathLike[str]"]

NUMBER_OF_CLASSES = 10

_IMAGES_HEADER = struct.Struct(">iiii")
_LABELS_HEADER = struct.Struct(">ii")


class MnistFormatError(Exception):
    """Raised when an MNIST file cannot be read or is malformed."""


@dataclass
class MnistImagesSet:
    """Images from an IDX image file, each a flat row of pixels scaled to [0, 1]."""

    magic_number: int
    number_of_images: int
    number_of_rows: int
    number_of_columns: int
    images: list[list[float]]

    @property
    def pixels_per_image(self) -> int:
        """Number of pixels in one image."""
        return self.number_of_rows * self.number_of_columns


@dataclass
class MnistLabelsSet:
    """Labels from an IDX label file, each one-hot encoded over ten classes."""

    magic_number: int
    number_of_items: int
    labels: list[list[float]]


@dataclass
class MnistData:
    """Training and test sets of images and labels."""

    training_images: MnistImagesSet
    training_labels: MnistLabelsSet
    test_images: MnistImagesSet
    test_labels: MnistLabelsSet


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    chunk = stream.read(size)
    if len(chunk) != size:
        raise MnistFormatError(f"end of file reached while reading {what}")
    return chunk


def _check_count(value: int, what: str) -> None:
    if value < 0:
        raise MnistFormatError(f"negative {what} in header: {value}")


def load_mnist_images(path: StrPath) -> MnistImagesSet:
    """Read an IDX image file and return its images normalised to [0, 1]."""
    with open(path, "rb") as stream:
        header = _read_exact(stream, _IMAGES_HEADER.size, "image header")
        magic, count, rows, columns = _IMAGES_HEADER.unpack(header)
        _check_count(count, "number of images")
        _check_count(rows, "number of rows")
        _check_count(columns, "number of columns")
        pixels = rows * columns
        raw_images = [
            _read_exact(stream, pixels, f"image {index}") for index in range(count)
        ]
    return MnistImagesSet(
        magic_number=magic,
        number_of_images=count,
        number_of_rows=rows,
        number_of_columns=columns,
        images=normalize(raw_images),
    )


def _one_hot(label: int) -> list[int]:
    return [1 if label == cls else 0 for cls in range(NUMBER_OF_CLASSES)]


def load_mnist_labels(path: StrPath) -> MnistLabelsSet:
    """Read an IDX label file and return its labels one-hot encoded."""
    with open(path, "rb") as stream:
        header = _read_exact(stream, _LABELS_HEADER.size, "label header")
        magic, count = _LABELS_HEADER.unpack(header)
        _check_count(count, "number of items")
        raw_labels = _read_exact(stream, count, "labels")
    return MnistLabelsSet(
        magic_number=magic,
        number_of_items=count,
        labels=normalize(_one_hot(label) for label in raw_labels),
    )


def load_mnist_data(
    training_images_path: StrPath,
    training_labels_path: StrPath,
    test_images_path: StrPath,
    test_labels_path: StrPath,
) -> MnistData:
    """Load all four MNIST files; raise MnistFormatError naming the failing one."""

    def load(loader, path, what):
        try:
            return loader(path)
        except (OSError, MnistFormatError) as exc:
            raise MnistFormatError(f"error loading mnist {what}: {exc}") from exc

    return MnistData(
        training_images=load(load_mnist_images, training_images_path, "training images"),
        training_labels=load(load_mnist_labels, training_labels_path, "training labels"),
        test_images=load(load_mnist_images, test_images_path, "test images"),
        test_labels=load(load_mnist_labels, test_labels_path, "test labels"),
    )