[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fxkit"
version = "1.14.0.dev0"
description = "Ordered start/stop lifecycle hooks, call-stack introspection and structured logging helpers for application frameworks"
requires-python = ">=3.11"
dependencies = []
keywords = ["lifecycle", "hooks", "logging", "call-stack", "introspection", "application-framework"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fxkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
