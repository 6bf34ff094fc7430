"""Dotted module-name helpers.

Module and boundary names are dot-delimited paths ("MySystem.Web.Endpoint").
All namespace logic works on the split segment tuples.
"""

from __future__ import annotations


def split_name(name: str) -> tuple[str, ...]:
    """Split a dotted name into its path segments."""
    return tuple(part for part in name.split(".") if part)


def join_name(*parts: str) -> str:
    """Join name fragments with dots, skipping empty fragments."""
    return ".".join(part.strip(".") for part in parts if part and part.strip("."))


def is_prefix(prefix: str, name: str) -> bool:
    """
    Check whether `prefix` is a namespace prefix of `name`.

    Matching is segment-wise: "Foo" is a prefix of "Foo" and "Foo.Bar" but
    not of "FooBar".
    """
    prefix_parts = split_name(prefix)
    name_parts = split_name(name)
    return name_parts[: len(prefix_parts)] == prefix_parts
