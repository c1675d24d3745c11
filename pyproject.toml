[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "v2vguard"
version = "0.1.0"
description = "Vehicle-to-vehicle collision avoidance: sensor sampling, frame exchange and driver warning features"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = [
    "v2v",
    "collision-avoidance",
    "blind-spot",
    "forward-collision",
    "gps",
    "nmea",
    "embedded",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
v2vguard = "v2vguard.app:main"

[tool.hatch.build.targets.wheel]
packages = ["v2vguard"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
