"""smartpaste - reformat clipboard text with a remote text-generation model."""

__version__ = "1.0.0"
