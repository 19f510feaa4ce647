"""
LLVM version model for rustc-meta.

LLVM's version numbering is not semver compatible before 4.0, and rustc
only prints the major and minor components, so the version is kept as a
plain two-component value.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Tuple


@total_ordering
@dataclass(frozen=True)
class LLVMVersion:
    """LLVM version used by the compiler.

    Attributes:
        major: Major version component.
        minor: Minor version component (always 0 from 4.0 onwards).
    """

    major: int
    minor: int = 0

    def _key(self) -> Tuple[int, int]:
        # major before minor, so tuple comparison is version precedence
        return (self.major, self.minor)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, LLVMVersion):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"
