[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "probekit"
version = "0.1.0"
description = "Measure and benchmark code with experiments, statistics and rankings, and match nested structures field by field."
requires-python = ">=3.10"
dependencies = []
keywords = ["testing", "benchmark", "measurement", "matchers", "statistics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["probekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
