"""PomoLog CLI - focus timer with a plain-text session log."""

__version__ = "0.1.0"
