"""Tools for auditing fleets of local Git repositories."""

__version__ = "0.1.0"
