"""Violation construction and diagnostic messages."""
