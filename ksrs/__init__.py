"""
ksrs: a kanji spaced repetition tracker for the terminal.

Learning progress lives in two files (items and SM-2 state) under a local
storage directory. See ``ksrs --help`` for the commands.
"""

__version__ = "0.1.0"
