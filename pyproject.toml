[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reeln"
version = "0.2.3"
description = "Configuration for replay video workflows: typed models, platform paths, profile overlays, environment overrides and validation"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["video", "replay", "configuration", "sports", "highlights"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["reeln"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
