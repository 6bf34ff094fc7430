"""Reference DTO - one observed use of a module by another module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from boundary.helpers.dto.boundary_dto import DependencyMode

ReferenceType = Literal["call", "struct_expansion", "alias_reference"]


@dataclass(frozen=True)
class Reference:
    """
    A reference from one module to another.

    A reference is one of:
    - a function or macro call (`type="call"`, `to_function=(name, arity)`)
    - a struct literal of another module (`type="struct_expansion"`)
    - a bare alias use of another module (`type="alias_reference"`)

    `mode` is set by the collector: "compile" for uses evaluated while
    compiling (macros, module-level code), "runtime" otherwise.
    """

    from_module: str
    to_module: str
    file: str
    line: int
    mode: DependencyMode = "runtime"
    type: ReferenceType = "call"
    from_function: tuple[str, int] | None = None
    to_function: tuple[str, int] | None = None
