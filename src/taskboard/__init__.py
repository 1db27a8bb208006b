"""Terminal kanban board synchronized with a remote task collection."""

__version__ = "0.1.0"
