"""MCP server exposing FVWM3 configuration, live state and control commands."""

__version__ = "1.0.0"
