"""Image of the day: one deterministic image per calendar day."""

__version__ = "0.1.0"
