[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "engconvert"
version = "0.5.1"
description = "Convert language files of classic city-building games between ENG and XML"
requires-python = ">=3.10"
dependencies = []
keywords = ["eng", "xml", "language files", "city-building", "translation", "modding"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Localization",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
engconvert = "engconvert.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["engconvert"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
