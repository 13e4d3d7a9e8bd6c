"""Todo Service - in-memory task lists scoped by API key."""

__version__ = "0.1.0"
