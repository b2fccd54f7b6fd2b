[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "akaia"
version = "0.1.0"
description = "Command-line tool and web platform for hosting NEAR-backed extension apps"
requires-python = ">=3.10"
keywords = ["near", "cli", "web", "starlette", "asgi", "extensions", "platform"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "httpx",
    "starlette",
    "uvicorn",
]

[project.optional-dependencies]
test = [
    "pytest",
    "respx",
    "httpx",
]

[project.scripts]
akaia = "akaia.cli:main"
akaia-platform = "akaia.web:main"

[tool.hatch.build.targets.wheel]
packages = ["akaia"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
