[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "triagekit"
version = "0.1.0"
description = "Building blocks for an issue and pull request triage bot: webhook signature checks, label permission filters, bot-managed issue-body sections, summary notes and a small WSGI webhook endpoint."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "triage",
    "issues",
    "pull-requests",
    "webhook",
    "labels",
    "bot",
    "wsgi",
]
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
    "Topic :: Software Development :: Bug Tracking",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
triagekit-server = "triagekit.server:main"

[tool.hatch.build.targets.wheel]
packages = ["triagekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
