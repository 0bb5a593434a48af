[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cetatenie"
version = "0.1.0"
description = "Telegram bot that checks Romanian citizenship decree files and notifies subscribers when they are resolved"
requires-python = ">=3.10"
keywords = ["telegram", "bot", "citizenship", "decree", "pdf", "notifications"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Romanian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "httpx",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cetatenie = "cetatenie.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cetatenie"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
