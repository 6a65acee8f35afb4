"""Core security primitives and exception types."""
