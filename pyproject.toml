[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "supertd"
version = "0.1.0"
description = "Target-determination helpers for Buck2 builds: change parsing, graph sizing, schedules, event logging and a `buck2 targets` runner"
requires-python = ">=3.10"
keywords = ["buck2", "build", "target-determination", "ci", "monorepo"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Typing :: Typed",
]
dependencies = [
    "zstandard",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
supertd = "supertd.main:main"
supertd-targets = "supertd.targets:main"

[tool.hatch.build.targets.wheel]
packages = ["supertd"]

[tool.hatch.build.targets.sdist]
include = ["supertd", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
