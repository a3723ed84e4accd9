"""Extract dva model declarations from JavaScript and TypeScript sources."""

__version__ = "0.1.0"
