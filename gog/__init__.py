"""gog: feature-branch release workflow on top of git."""

__version__ = "1.4.0"
