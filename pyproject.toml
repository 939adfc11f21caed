[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cvviewer"
version = "0.1.0"
description = "Image operators for a vision viewer: colour conversions, filters, morphology, edge, border and region detection on NumPy arrays"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["image processing", "computer vision", "filters", "segmentation", "canny", "gabor", "morphology"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cvviewer"]

[tool.pytest.ini_options]
addopts = "-ra"
