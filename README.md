# digitnet

digitnet is a small fully connected neural network in pure Python. It trains
on the MNIST handwritten digit images and needs nothing beyond the standard
library.

## Features

- Dense layers with linear, sigmoid, tanh, ReLU or softmax activation
  (`digitnet.activations.Activation`). Softmax is allowed only in the output
  layer. Anywhere else, and for any activation code that is not recognised,
  the layer falls back to ReLU and a warning is issued.
- Three losses, chosen with `digitnet.loss.LossFunction`: mean squared error,
  multi-class cross-entropy and binary cross-entropy. A loss code that is not
  recognised falls back to mean squared error, with a warning.
- Weight initialisation: ReLU layers use He initialisation with biases of
  `0.01`. All other layers use Glorot initialisation with zero biases.
- `digitnet.data` reads MNIST IDX files. Pixels are scaled to `[0, 1]` and
  labels are one-hot encoded over ten classes.
- Training is stochastic gradient descent, one sample at a time, through
  `NeuralNetwork.backpropagation`.
- `digitnet.utils` provides `normalize` and `shuffle_training_data`.
  `shuffle_training_data` shuffles images and labels in place with the same
  permutation.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

```
digitnet
```

The command reads these four MNIST files from a data directory:

- `train/train-images.idx3-ubyte`
- `train/train-labels.idx1-ubyte`
- `test/t10k-images.idx3-ubyte`
- `test/t10k-labels.idx1-ubyte`

It then does the following:

1. Prints the first training image as a grid of 0–255 values, followed by
   its one-hot label.
2. Builds a `16-16-10` network (ReLU, ReLU, softmax) that uses multi-class
   cross-entropy loss.
3. Trains the network. After each epoch it prints the loss of the last batch,
   the network's output for one randomly chosen training sample, and the
   output that was expected for that sample.

Options:

- `--data-dir PATH`: the directory that holds `train/` and `test/`. The
  default is `../data/mnist/handwritten-digits`.
- `--epochs N`: the number of epochs. The default is 10000.
- `--batch-size N`: the batch size. The default is 256.
- `--learning-rate R`: the learning rate. The default is `1e-9`.
- `--seed N`: a seed for the random generator, so that runs can be repeated.

If the data cannot be loaded, the network cannot be built, or training gets
invalid input, the command prints an error to standard error and exits with
status 1.

## Library use

```python
import random

from digitnet.activations import Activation
from digitnet.data import load_mnist_data
from digitnet.loss import LossFunction
from digitnet.network import NeuralNetwork

data = load_mnist_data(
    "train-images.idx3-ubyte",
    "train-labels.idx1-ubyte",
    "t10k-images.idx3-ubyte",
    "t10k-labels.idx1-ubyte",
)

rng = random.Random(0)
net = NeuralNetwork(
    data.training_images.pixels_per_image,
    [16, 16, 10],
    [Activation.RELU, Activation.RELU, Activation.SOFTMAX],
    LossFunction.MULTI_CROSS_ENTROPY,
    0.01,
    rng,
)

image = data.training_images.images[0]
label = data.training_labels.labels[0]
output = net.feedforward(image)
print(net.calculate_loss(output, label))
net.backpropagation(image, label)
```

`backpropagation` works from the last `feedforward` pass, so call
`feedforward` first. Otherwise it raises `RuntimeError`.

`digitnet.cli.train(network, data, epochs, batch_size, rng, out)` runs the
same training loop as the command. It writes its report to `out` and returns
the last batch loss of each epoch. `digitnet.cli.render_image` returns the
text grid that the command prints for an image.

Errors:

- A file that cannot be opened, or that is cut short, raises
  `digitnet.data.MnistFormatError`.
- A network with an invalid shape raises
  `digitnet.network.NetworkConfigError`.

## What it does not do

- The test set is loaded but never used: there is no evaluation and no
  accuracy report.
- A trained network cannot be saved or loaded.
- Gradients are not averaged over a batch. Batches only group the reported
  loss.