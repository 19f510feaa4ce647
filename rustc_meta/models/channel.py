"""
Release channel model for rustc-meta.

The channel of a compiler build is derived from the first pre-release
identifier of its version (``1.5.0-nightly`` is a nightly build). Channels
are ordered from least to most stable so they can be compared and sorted
deterministically.
"""

from __future__ import annotations

from enum import Enum
from functools import total_ordering
from typing import Any


@total_ordering
class Channel(Enum):
    """Release channel of the compiler.

    Ordering is ``DEV < NIGHTLY < BETA < STABLE``.
    """

    DEV = "dev"
    NIGHTLY = "nightly"
    BETA = "beta"
    STABLE = "stable"

    @property
    def rank(self) -> int:
        """Position of the channel in stability order."""
        return _RANK[self]

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Channel):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def from_name(cls, name: str) -> Channel:
        """Resolve a channel from its case-insensitive name.

        Args:
            name: Channel name such as ``"nightly"`` or ``"Stable"``.

        Returns:
            The matching :class:`Channel`.

        Raises:
            ValueError: If ``name`` does not name a channel.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown release channel: {name!r}") from None

    def __str__(self) -> str:
        return self.value


_RANK = {
    Channel.DEV: 0,
    Channel.NIGHTLY: 1,
    Channel.BETA: 2,
    Channel.STABLE: 3,
}
