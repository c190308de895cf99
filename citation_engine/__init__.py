"""Citation template engine: collapse-on-empty citation templates."""

__version__ = "0.1.0"
