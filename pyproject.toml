[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "digitnet"
version = "0.1.0"
description = "A small dense neural network that learns to recognise MNIST handwritten digits"
requires-python = ">=3.10"
dependencies = []
keywords = ["neural-network", "mnist", "machine-learning", "digits", "backpropagation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
digitnet = "digitnet.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["digitnet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
