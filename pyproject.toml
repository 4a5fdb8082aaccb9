[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "relictools"
version = "0.1.0"
description = "Hex-to-image conversion and read-only views over fragmented and filtered directories"
requires-python = ">=3.10"
dependencies = []
keywords = ["hex", "fragments", "virtual filesystem", "rot13", "logging"]
classifiers = [
    "Development Status :: 4 - Beta",
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
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
relictools-hexed = "relictools.hexed:main"

[tool.hatch.build.targets.wheel]
packages = ["relictools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
