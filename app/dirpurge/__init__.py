"""dirpurge - find and safely remove regenerable build and dependency directories."""

__version__ = "1.0.0"
