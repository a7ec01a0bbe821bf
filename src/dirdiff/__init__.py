"""dirdiff — compare two directory trees, detect moved files."""

__version__ = "0.1.0"
