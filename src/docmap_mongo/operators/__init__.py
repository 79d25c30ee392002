"""MongoDB operator compilers for where-clause specifications."""

from __future__ import annotations

from .presence import compile_presence
from .set import compile_set
from .standard import compile_standard
from .string import compile_string

__all__ = [
    "compile_standard",
    "compile_set",
    "compile_string",
    "compile_presence",
]
