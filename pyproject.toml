[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hishtory"
version = "0.1.0"
description = "Wire types, version parsing, key bindings, query text helpers, table layout and match highlighting for a synced, searchable shell history"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "history", "bash", "zsh", "search", "keybindings"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hishtory"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
