"""Release version of the jsr_mcp package."""

__version__ = "0.1.0"
