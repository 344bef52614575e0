[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snowtools"
version = "0.1.0"
description = "Read files out of FAT12 disk images and format text with a small printf dialect"
requires-python = ">=3.10"
dependencies = []
keywords = ["fat12", "floppy", "disk image", "filesystem", "printf"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
snowtools-fat = "snowtools.fat12:main"

[tool.hatch.build.targets.wheel]
packages = ["snowtools"]

[tool.pytest.ini_options]
addopts = "-ra"
