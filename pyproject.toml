[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wgtoolkit"
version = "0.1.0"
description = "Building blocks of a userspace WireGuard daemon: replay filter, handshake rate limiter, TAI64N timestamps, timers, cancellable I/O, packet framing and the configuration socket"
requires-python = ">=3.10"
dependencies = []
keywords = ["wireguard", "vpn", "replay-protection", "rate-limiting", "tai64n", "timers", "unix-socket", "networking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wgtoolkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
