[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "zbplugins"
version = "1.3.1"
description = "Chat-bot plugin logic: emoji mixing, fortunes, drift bottles, quote stores, subscription tracking and more"
requires-python = ">=3.10"
dependencies = []
keywords = ["chatbot", "onebot", "plugins", "qq", "bot"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["zbplugins*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
