"""Pydantic document types owned by the interface layer."""
