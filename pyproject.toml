[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bedrockscan"
version = "0.1.0"
description = "Scan IPv4 ranges for Minecraft Bedrock Edition servers using RakNet unconnected pings"
requires-python = ">=3.10"
keywords = ["minecraft", "bedrock", "raknet", "scanner", "udp", "ping"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet",
    "Topic :: System :: Networking",
]
dependencies = [
    "requests>=2.28",
    "beautifulsoup4>=4.11",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
bedrockscan = "bedrockscan.cli:main"
bedrockscan-asn = "bedrockscan.asn:main"

[tool.hatch.build.targets.wheel]
packages = ["bedrockscan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
