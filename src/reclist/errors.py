"""
reclist Error Hierarchy
=======================

This module defines the exception hierarchy for the reclist package.
All exceptions inherit from ReclistError, allowing callers to catch all
codec-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
ReclistError (base)
├── InvalidRecordError - Record() built with an empty type or ID
├── ScannerStateError - record() called without a pending record
├── ScanError - fatal fault while reading the input stream
├── WriteError - fatal fault while writing to the output sink
└── ConfigError - invalid codec configuration

Malformed input is NOT an error
-------------------------------
The reclist format is lenient: bad header lines, keys without values,
stray '@' characters and unterminated quoted values are silently
normalized or dropped by the scanner. Only genuine I/O faults (a read
that fails for a reason other than end of data, an undecodable byte
sequence, a sink that refuses writes) are reported, and they are
reported through the scanner's and writer's ``err`` attribute rather
than raised out of the read/write loop.

Error messages follow this format:
    filename:line: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class ReclistError(Exception):
    """
    Base exception for all reclist errors.

        try:
            records = reclist.loads(text)
        except ReclistError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in a reclist stream, for diagnostics.

    Attributes:
        filename: Name of the stream (or "<input>" for anonymous streams)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


# =============================================================================
# Record Exceptions
# =============================================================================

class InvalidRecordError(ReclistError):
    """
    Raised when a Record is constructed directly with a type or ID that
    normalizes to the empty string.

    Use Record.create() to get None instead of an exception.
    """

    def __init__(self, type_: str, id_: str):
        self.type = type_
        self.id = id_
        super().__init__(
            f"record needs a non-empty type and ID (got type={type_!r}, id={id_!r})"
        )


class ScannerStateError(ReclistError):
    """Raised when Scanner.record() is called without a pending record."""
    pass


# =============================================================================
# I/O Exceptions
# =============================================================================

class CodecIOError(ReclistError):
    """
    Base class for fatal I/O faults in the scanner and the writer.

    Attributes:
        message: The error description
        location: Where in the stream the fault occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            planets.rec:12: error: cannot decode input as utf-8
            hint: set CodecConfig.encoding to the encoding of the file
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class ScanError(CodecIOError):
    """
    Fatal fault while reading a reclist stream.

    Raised internally by the character source and stored by the Scanner,
    which stops permanently once it has seen one. End of data is never
    a ScanError.

    Examples:
        - Byte sequence that is invalid in the configured encoding
        - OSError from the underlying stream
    """
    pass


class WriteError(CodecIOError):
    """
    Fatal fault while writing to the output sink.

    Stored by the Writer, which becomes permanently failed: later
    write() and flush() calls do nothing.
    """
    pass


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(ReclistError):
    """Raised when a CodecConfig value is out of range or malformed."""
    pass
