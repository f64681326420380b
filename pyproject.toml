[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "labkit"
version = "0.1.0"
description = "Systems-programming lab toolkit: a simulated heap, allocator trace files, timing helpers, robust descriptor I/O, socket helpers and a CGI adder"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "malloc",
    "heap",
    "trace",
    "benchmark",
    "timing",
    "cgi",
    "robust-io",
    "sockets",
    "systems-programming",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
labkit-adder = "labkit.adder:main"
labkit-proxy = "labkit.proxy:main"

[tool.hatch.build.targets.wheel]
packages = ["labkit"]

[tool.pytest.ini_options]
addopts = "-ra"
