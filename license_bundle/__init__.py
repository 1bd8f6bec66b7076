"""License auditing for Python distributions and their dependencies."""

__version__ = "0.1.0"
