[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "prosim"
version = "0.1.0"
description = "Multi-node process scheduling simulator with clock barriers and synchronous message passing"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduling", "simulation", "operating-systems", "message-passing", "priority-queue"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
prosim = "prosim.main:main"

[tool.hatch.build.targets.wheel]
packages = ["prosim"]

[tool.pytest.ini_options]
addopts = "-ra"
