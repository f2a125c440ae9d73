"""
Entry point for running ksrs as a module.

Usage:
    python -m ksrs
    python -m ksrs add 日本
    python -m ksrs --help
"""
from .cli.main import main

if __name__ == "__main__":
    main()
