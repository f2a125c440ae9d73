"""
Setup script for ksrs.

ksrs is a terminal kanji trainer built on the SM-2 spaced repetition
algorithm. Learning progress is kept in two local store files:

1. Item storage - the kanji being learned
2. SRS storage - the SM-2 scheduling state of every kanji

The 'ksrs' command is the only entry point.
"""

from setuptools import find_packages, setup

setup(
    name="ksrs",
    version="0.1.0",
    description="Kanji spaced repetition tracker for the terminal",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["ksrs", "ksrs.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
            "tzdata",
        ],
    },
    entry_points={
        "console_scripts": [
            "ksrs=ksrs.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "Intended Audience :: Education",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="kanji japanese spaced-repetition sm2 cli",
)
