[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "onestep"
version = "0.1.0"
description = "Patient sign-up, treatment package booking, payment and supporter assignment workflow"
requires-python = ">=3.10"
dependencies = []
keywords = ["treatment", "booking", "patients", "scheduling", "healthcare"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: Web Environment",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
onestep = "onestep.app:main"

[tool.hatch.build.targets.wheel]
packages = ["onestep"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
