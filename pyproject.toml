[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clothsim"
version = "0.1.0"
description = "A small 2D cloth simulation using position-based dynamics and a spatial hash for self-collision"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["cloth", "simulation", "physics", "position-based-dynamics", "spatial-hash", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
clothsim = "clothsim.app:main"

[tool.hatch.build.targets.wheel]
packages = ["clothsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
