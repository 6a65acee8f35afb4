"""Chatbox - chat backend with account management and a completion API proxy."""

__version__ = "1.0.0"
