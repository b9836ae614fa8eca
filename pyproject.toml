[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ogbkit"
version = "0.1.0"
description = "Game toolkit pieces: time-driven particle emissions, font atlases and text layout, an in-game logger, sprite sheet animation and input key bindings."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["game", "particles", "font", "text layout", "sprite animation", "input"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ogbkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
