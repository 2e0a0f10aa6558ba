"""CS Genius - customer-support knowledge base assistant."""

__version__ = "0.1.0"
