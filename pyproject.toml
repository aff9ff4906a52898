[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "newsboard"
version = "0.1.0"
description = "A small newsgroup server and interactive client speaking a compact binary protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["newsgroup", "news", "articles", "client", "server", "protocol"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Usenet News",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
newsboard-server = "newsboard.databaseserver:main"
newsboard-client = "newsboard.client:main"

[tool.hatch.build.targets.wheel]
packages = ["newsboard"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
