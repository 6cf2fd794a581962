[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polyseg"
version = "0.1.0"
description = "Polymorphic collections stored as per-type segments, with segment-aware algorithms"
requires-python = ">=3.10"
dependencies = []
keywords = ["collection", "polymorphism", "segments", "algorithms", "containers"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
polyseg-demo = "polyseg.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["polyseg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
