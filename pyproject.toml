[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oceanapi"
version = "0.1.0"
description = "Client library for the DigitalOcean v2 API: droplets, droplet and image actions, firewalls and floating IPs"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["digitalocean", "api", "client", "cloud", "droplets", "firewalls", "floating-ip"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["oceanapi"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
