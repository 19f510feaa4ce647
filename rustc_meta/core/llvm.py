"""LLVM version token parser.

Parses the ``major[.minor]`` token printed on the ``LLVM version:`` line of
a ``rustc -vV`` banner. The grammar is deliberately stricter than
``int()``:

- ``"0"`` is the only component allowed to start with ``0``
- components must not be empty, signed, or contain non-ASCII-digit characters
- at most two components are allowed
- from LLVM 4.0 onwards the minor component must be ``0`` (and may be omitted)
- before LLVM 4.0 the minor component is significant and therefore required

Typical usage::

    from rustc_meta.core.llvm import parse_llvm_version

    parse_llvm_version("11.0")   # LLVMVersion(major=11, minor=0)
    parse_llvm_version("3.9")    # LLVMVersion(major=3, minor=9)
    parse_llvm_version("12")     # LLVMVersion(major=12, minor=0)
"""

from __future__ import annotations

from rustc_meta.models.llvm_version import LLVMVersion
from rustc_meta.constants import LLVM_SINGLE_NUMBER_MAJOR
from rustc_meta.exceptions import LLVMVersionError, LLVMVersionErrorKind

_ASCII_DIGITS = frozenset("0123456789")


def parse_llvm_version(token: str) -> LLVMVersion:
    """Parse an LLVM version token into an :class:`LLVMVersion`.

    Args:
        token: Text following the ``LLVM version: `` prefix.

    Returns:
        The parsed :class:`LLVMVersion`.

    Raises:
        LLVMVersionError: If the token violates the LLVM version grammar.
    """
    parts = token.split(".")

    major = _parse_component(parts[0], token)
    minor = 0

    if len(parts) > 1:
        minor = _parse_component(parts[1], token)
        if len(parts) > 2:
            raise LLVMVersionError(
                LLVMVersionErrorKind.TOO_MANY_COMPONENTS, token=token
            )
        if major >= LLVM_SINGLE_NUMBER_MAJOR and minor != 0:
            raise LLVMVersionError(
                LLVMVersionErrorKind.MINOR_MUST_BE_ZERO_AFTER_4, token=token
            )
    elif major < LLVM_SINGLE_NUMBER_MAJOR:
        raise LLVMVersionError(
            LLVMVersionErrorKind.MINOR_REQUIRED_BEFORE_4, token=token
        )

    return LLVMVersion(major=major, minor=minor)


def _parse_component(part: str, token: str) -> int:
    """Validate a single numeric component and convert it to ``int``."""
    if part == "0":
        return 0

    reason = None
    if not part:
        reason = LLVMVersionErrorKind.EMPTY_COMPONENT
    elif part[0] in "+-":
        reason = LLVMVersionErrorKind.SIGN
    elif part[0] == "0":
        reason = LLVMVersionErrorKind.LEADING_ZERO
    elif not set(part) <= _ASCII_DIGITS:
        reason = LLVMVersionErrorKind.INVALID_DIGIT

    if reason is not None:
        raise LLVMVersionError(reason, token=token, component=part)

    return int(part)
