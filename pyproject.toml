[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "framez"
version = "0.3.1"
description = "Buffer-reusing async framing: decode byte streams into frames and encode frames into byte streams."
requires-python = ">=3.10"
dependencies = []
keywords = ["codec", "framing", "asyncio", "encode", "decode", "lines", "delimiter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
framez-examples = "framez.examples:main"
framez-demo = "framez.demo.app:main"

[tool.hatch.build.targets.wheel]
packages = ["framez"]

[tool.hatch.build.targets.sdist]
include = ["framez", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
