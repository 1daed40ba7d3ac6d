[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "warpkeys"
version = "1.3.3"
description = "Building blocks for modal, keyboard-driven pointer control: key bindings, hints, grids, history and accelerated cursor motion."
requires-python = ">=3.10"
dependencies = []
keywords = ["keyboard", "mouse", "pointer", "hints", "grid", "modal", "accessibility"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
    "Topic :: Adaptive Technologies",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["warpkeys"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
