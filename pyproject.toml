[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tuxtvlists"
version = "0.1.0"
description = "SQLite storage for IPTV channel groups, channels, TV channel labels and scheduled recordings"
requires-python = ">=3.10"
dependencies = []
keywords = ["iptv", "playlist", "channels", "sqlite", "recording", "tv"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
    "Topic :: Database",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tuxtvlists"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
