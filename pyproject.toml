[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pocketgb"
version = "0.1.0"
description = "Building blocks of a handheld game console emulator: memory map, cartridge bank controllers, timer, wave sound channel, tiles and scanline rendering."
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "gameboy", "game boy", "mbc", "mmu", "tiles", "retro"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pocketgb"]

[tool.hatch.build.targets.sdist]
include = ["pocketgb", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
