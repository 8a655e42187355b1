"""Smart Git Commit - stage, backdate and commit Git changes."""

__version__ = "0.1.0"
