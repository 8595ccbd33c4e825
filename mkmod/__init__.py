"""mkmod — scaffold module files and register them with their parent."""

__version__ = "0.1.0"
