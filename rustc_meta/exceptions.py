"""
Custom exception hierarchy for rustc-meta.

This module defines structured exception types used across rustc-meta.
All exceptions inherit from :class:`RustcMetaError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging. Errors that wrap a lower-level failure expose it through the
uniform :attr:`RustcMetaError.cause` accessor.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, MutableMapping, Optional, Sequence


class RustcMetaError(Exception):
    """Base exception for all rustc-meta errors.

    All rustc-meta specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
        cause: Optional underlying exception that triggered this error.
    """

    __slots__ = ("message", "details", "_cause")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        self._cause: Optional[BaseException] = cause
        super().__init__(message)

    @property
    def cause(self) -> Optional[BaseException]:
        """The underlying exception wrapped by this error, if any."""
        return self._cause

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


class ExecutionError(RustcMetaError):
    """Raised when the compiler command could not be executed.

    Args:
        message: Error description.
        command: The command line that failed to start.
        original_error: The ``OSError`` raised while spawning the process.
    """

    __slots__ = ("command",)

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "command", " ".join(command) if command else None)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details, cause=original_error)

        self.command = list(command) if command else None


class DecodeError(RustcMetaError):
    """Raised when the compiler output is not valid UTF-8.

    Args:
        message: Error description.
        original_error: The ``UnicodeDecodeError`` raised while decoding.
    """

    __slots__ = ()

    def __init__(
        self,
        message: str = "invalid UTF-8 output from `rustc -vV`",
        *,
        original_error: Optional[BaseException] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        if isinstance(original_error, UnicodeDecodeError):
            details["position"] = original_error.start

        super().__init__(message, details, cause=original_error)


# ---------------------------------------------------------------------------
# Banner parsing
# ---------------------------------------------------------------------------


class UnexpectedFormatError(RustcMetaError):
    """Raised when the ``rustc -vV`` output does not match the banner layout.

    Args:
        message: Error description.
        line_number: Zero-based index of the offending line.
        line_content: Raw content of the offending line, truncated for safety.
    """

    __slots__ = ("line_number", "line_content")

    def __init__(
        self,
        message: str = "unexpected `rustc -vV` format",
        *,
        line_number: Optional[int] = None,
        line_content: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "line", line_number)
        if line_content is not None:
            details["content"] = _truncate(line_content)

        super().__init__(message, details)

        self.line_number = line_number
        self.line_content = line_content


class LLVMVersionErrorKind(Enum):
    """Reasons an ``LLVM version:`` token can be rejected."""

    EMPTY_COMPONENT = "a version component must not be empty"
    LEADING_ZERO = "a version component must not have leading zeros"
    SIGN = "a version component must not have a sign"
    INVALID_DIGIT = "a version component must contain only ASCII digits"
    TOO_MANY_COMPONENTS = "too many version components"
    MINOR_MUST_BE_ZERO_AFTER_4 = (
        "LLVM's minor version component must be 0 for versions greater than 4.0"
    )
    MINOR_REQUIRED_BEFORE_4 = (
        "LLVM's minor version component is required for versions less than 4.0"
    )


class LLVMVersionError(UnexpectedFormatError):
    """Raised when the LLVM version token violates its numeric grammar.

    This is a specialization of :class:`UnexpectedFormatError`: callers that
    only care about a malformed banner can catch the parent class, while
    ``reason`` keeps the precise rule that was violated.

    Args:
        reason: The violated rule.
        token: The full LLVM version token being parsed.
        component: The offending component, when the rule is per-component.
    """

    __slots__ = ("reason", "token", "component")

    def __init__(
        self,
        reason: LLVMVersionErrorKind,
        *,
        token: Optional[str] = None,
        component: Optional[str] = None,
    ) -> None:
        super().__init__(f"error parsing LLVM's version: {reason.value}")

        _add_if(self.details, "token", token)
        _add_if(self.details, "component", component)

        self.reason = reason
        self.token = token
        self.component = component


class VersionSyntaxError(RustcMetaError):
    """Raised when the ``release:`` value is not a valid semantic version.

    Args:
        message: Error description.
        version: The rejected version string.
        original_error: Error raised by the semantic version parser.
    """

    __slots__ = ("version",)

    def __init__(
        self,
        message: str,
        *,
        version: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "version", version)

        super().__init__(message, details, cause=original_error)

        self.version = version


class UnknownPreReleaseTagError(RustcMetaError):
    """Raised when the pre-release tag does not name a release channel.

    Args:
        tag: The first pre-release identifier of the version.
    """

    __slots__ = ("tag",)

    def __init__(self, tag: str) -> None:
        super().__init__(f"unknown pre-release tag: {tag}")
        self.tag = tag


# ---------------------------------------------------------------------------
# Configuration and files
# ---------------------------------------------------------------------------


class ConfigError(RustcMetaError):
    """Raised when a configuration file is missing, unreadable or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file involved.
        option: Name of the offending option, if any.
        original_error: Underlying parse or I/O error.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details, cause=original_error)

        self.config_path = config_path
        self.option = option


class FileOperationError(RustcMetaError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (e.g. read).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details, cause=original_error)

        self.file_path = file_path
        self.operation = operation
