[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "prestoedit"
version = "0.1.0"
description = "A small modal terminal text and hex editor with split panes, tabs, key bindings and a minimal language-server client"
requires-python = ">=3.10"
keywords = ["editor", "text-editor", "hex-editor", "terminal", "modal", "lsp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]
dependencies = [
    "blessed",
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
prestoedit = "prestoedit.app:main"

[tool.hatch.build.targets.wheel]
packages = ["prestoedit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
