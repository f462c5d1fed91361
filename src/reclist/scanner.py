"""
reclist Scanner
===============

This module reads records from a reclist stream. Reading is incremental
and pull-based: each call to Scanner.scan() consumes just enough input to
assemble the next record.

Format Summary
--------------
    # Solar system objects          <- comment (ignored anywhere)
    @planet=Mars                    <- header: @type=id
        radius: 0.5320              <- field: key: value
        descrip: "Mars is often     <- quoted value, may span lines
            referred as the
            \\"Red Planet\\"."

Scanning States
---------------
SEEK_HEADER     Skip lines until a valid "@type=id" header is found.
                End of stream here is the normal end of data.
READING_FIELDS  Read key/value pairs until the next header or end of
                stream. The record is emitted with whatever fields were
                read; records without fields are dropped.
DONE            End of data reached.
FAILED          A read fault (I/O error, undecodable input) stopped
                scanning for good. See Scanner.err.

Leniency
--------
Malformed input never raises. Header lines with an empty type or ID are
skipped, key lines without a value are skipped, a stray '@' ends the
current record, and a quoted value missing its closing quote keeps what
was read before the end of the stream.

Usage
-----
    >>> scanner = Scanner.from_string(text)
    >>> for record in scanner:
    ...     print(record.type, record.id, record.get("mass"))
    >>> if scanner.err:
    ...     raise scanner.err
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import IO, Iterator, Optional
import codecs
import io
import logging

from reclist.config import CodecConfig, DEFAULT_CONFIG
from reclist.errors import ScanError, ScannerStateError, SourceLocation
from reclist.quoting import QuotedValueDecoder
from reclist.record import Record

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Character Source
# =============================================================================

class CharSource:
    """
    Character reader over a text or binary stream.

    Every component of the scanner reads through this class, which:
    - decodes binary streams with the configured encoding
    - folds "\\r\\n" into a single "\\n" (a lone "\\r" is kept as is)
    - counts lines for diagnostics
    - supports pushing characters back

    End of stream is signalled by an empty string. Any other read failure
    raises ScanError.
    """

    def __init__(
        self,
        stream: IO,
        filename: str = "<input>",
        config: CodecConfig = DEFAULT_CONFIG,
    ):
        self._stream = stream
        self.filename = filename
        self._config = config

        # Current chunk of decoded text and position in it
        self._chunk = ""
        self._pos = 0
        self._eof = False

        # Created on the first bytes chunk
        self._decoder: Optional[codecs.IncrementalDecoder] = None

        # Pushed-back characters (stack, last pushed is read first)
        self._pushback: list[str] = []
        self._last = ""

        # Line currently being read (1-indexed)
        self.line = 1

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line)

    # =========================================================================
    # Raw Access
    # =========================================================================

    def _fill(self) -> bool:
        """Load the next chunk. Returns False at end of stream."""
        if self._eof:
            return False

        try:
            data = self._stream.read(self._config.read_chunk_size)
        except UnicodeDecodeError as e:
            # Text stream opened with the wrong encoding
            raise ScanError(
                f"cannot decode input: {e.reason}",
                self.location,
                hint="open the stream with the encoding of the file",
            ) from e
        except (OSError, ValueError) as e:
            # ValueError covers reads from a closed stream
            raise ScanError(f"read failed: {e}", self.location) from e

        if isinstance(data, (bytes, bytearray)):
            if self._decoder is None:
                self._decoder = codecs.getincrementaldecoder(self._config.encoding)("strict")
            try:
                text = self._decoder.decode(data, final=not data)
            except UnicodeDecodeError as e:
                raise ScanError(
                    f"cannot decode input as {self._config.encoding}: {e.reason}",
                    self.location,
                    hint="set CodecConfig.encoding to the encoding of the stream",
                ) from e
        else:
            text = data

        if not data:
            self._eof = True

        self._chunk = text
        self._pos = 0
        return bool(text) or not self._eof

    def _next_raw(self) -> str:
        if self._pushback:
            return self._pushback.pop()
        while self._pos >= len(self._chunk):
            if not self._fill():
                return ""
        char = self._chunk[self._pos]
        self._pos += 1
        return char

    # =========================================================================
    # Character Access
    # =========================================================================

    def read_char(self) -> str:
        """
        Read one logical character.

        Returns:
            The character, "\\n" for both "\\n" and "\\r\\n", or "" at end
            of stream.

        Raises:
            ScanError: On a read or decoding fault
        """
        char = self._next_raw()
        if char == "\r":
            following = self._next_raw()
            if following == "\n":
                char = "\n"
            elif following:
                self._pushback.append(following)
        if char == "\n":
            self.line += 1
        self._last = char
        return char

    def unread_char(self) -> None:
        """Push back the character returned by the last read_char()."""
        if not self._last:
            return
        if self._last == "\n":
            self.line -= 1
        self._pushback.append(self._last)
        self._last = ""

    def read_line(self) -> str:
        """
        Read through the next newline.

        Returns:
            The line including its "\\n" (absent on a final unterminated
            line), or "" at end of stream.
        """
        chars = []
        while True:
            char = self.read_char()
            if not char:
                break
            chars.append(char)
            if char == "\n":
                break
        return "".join(chars)

    def skip_line(self) -> None:
        """Skip characters through the next newline or end of stream."""
        while True:
            char = self.read_char()
            if not char or char == "\n":
                return


# =============================================================================
# Scan Cursor
# =============================================================================

class Delimiter(Enum):
    """How a key ended."""

    COLON = auto()          # "key:" - a value follows
    NEWLINE = auto()        # key line without a colon - no value
    NEXT_RECORD = auto()    # '@' in key position - next header begins
    END = auto()            # end of stream


@dataclass
class ScanCursor:
    """
    Transient per-scan state handed to every parsing step.

    Attributes:
        source: The character source being scanned
        scratch: Reusable buffer for building keys and values
        record: The record being assembled, if any
    """
    source: CharSource
    scratch: list[str] = field(default_factory=list)
    record: Optional[Record] = None

    @classmethod
    def from_string(cls, text: str) -> "ScanCursor":
        """Build a cursor over a string (mostly useful in tests)."""
        return cls(CharSource(io.StringIO(text)))


# =============================================================================
# Parsing Steps
# =============================================================================

def seek_header(cursor: ScanCursor) -> Optional[Record]:
    """
    Skip lines until a valid record header and return its new record.

    Blank lines, comment lines and lines not starting with '@' are
    skipped, as are headers whose type or ID is empty.

    Returns:
        A new, empty Record, or None at end of stream
    """
    source = cursor.source
    while True:
        line_no = source.line
        raw = source.read_line()
        if not raw:
            return None

        line = raw.strip()
        # Blank, comment and stray field lines
        if not line or line[0] != "@":
            continue

        body = line[1:]
        eq = body.find("=")
        if eq < 1:
            logger.debug(f"{source.filename}:{line_no}: skipping malformed header {line!r}")
            continue

        record = Record.create(body[:eq], body[eq + 1:])
        if record is None:
            logger.debug(f"{source.filename}:{line_no}: skipping header with empty type or ID {line!r}")
            continue

        return record


def parse_key(cursor: ScanCursor) -> tuple[str, Delimiter]:
    """
    Parse the next field key.

    Leading whitespace, blank lines and comment lines are skipped.
    Whitespace runs inside the key become a single '-'.

    Returns:
        Tuple of (key, delimiter). The key is only meaningful when the
        delimiter is COLON.
    """
    source = cursor.source
    while True:
        char = source.read_char()
        if not char:
            return "", Delimiter.END
        if char.isspace():
            continue
        if char == "#":
            source.skip_line()
            continue
        if char == "@":
            # Belongs to the next record's header
            source.unread_char()
            return "", Delimiter.NEXT_RECORD
        break

    scratch = cursor.scratch
    scratch.clear()
    space = False
    while char:
        if char == "\n":
            return "", Delimiter.NEWLINE
        if char == ":":
            return "".join(scratch), Delimiter.COLON
        if char.isspace():
            space = True
        else:
            if space:
                scratch.append("-")
                space = False
            scratch.append(char)
        char = source.read_char()
    return "", Delimiter.END


def parse_value(cursor: ScanCursor) -> str:
    """
    Parse a field value, just after the key's colon.

    A value starting with '"' is a quoted value. Anything else runs to the
    end of the physical line and is taken literally.

    Returns:
        The value ("" if the line holds no value)
    """
    source = cursor.source
    while True:
        char = source.read_char()
        if not char or char == "\n":
            return ""
        if char.isspace():
            continue
        if char == '"':
            return parse_quoted(cursor)
        break

    scratch = cursor.scratch
    scratch.clear()
    while char and char != "\n":
        scratch.append(char)
        char = source.read_char()
    return "".join(scratch)


def parse_quoted(cursor: ScanCursor) -> str:
    """
    Parse a quoted value, just after its opening quote.

    See reclist.quoting for how whitespace and line breaks are decoded.
    A missing closing quote is tolerated: the value decoded up to the end
    of the stream is returned.
    """
    source = cursor.source
    decoder = QuotedValueDecoder(cursor.scratch)
    while True:
        char = source.read_char()
        if not char:
            logger.debug(f"{source.location}: quoted value not closed before end of stream")
            return decoder.value
        if char == '"':
            return decoder.value
        if char == "\\":
            escaped = source.read_char()
            if escaped:
                decoder.feed_escaped(escaped)
            continue
        decoder.feed(char)


def read_fields(cursor: ScanCursor, record: Record) -> Record:
    """
    Read key/value pairs into a record until the next header or end of stream.

    Returns:
        The same record, with every field read so far
    """
    cursor.record = record
    source = cursor.source
    try:
        while True:
            key, delim = parse_key(cursor)
            if delim is Delimiter.END or delim is Delimiter.NEXT_RECORD:
                break
            if delim is Delimiter.NEWLINE:
                logger.debug(f"{source.filename}:{source.line - 1}: skipping key line without value")
                continue

            value = parse_value(cursor)
            if not value.strip():
                continue
            record.set(key, value)
    finally:
        cursor.record = None
    return record


def parse_record(cursor: ScanCursor) -> Optional[Record]:
    """
    Parse one record: its header and its fields.

    Returns:
        The record (possibly without fields), or None at end of stream
    """
    record = seek_header(cursor)
    if record is None:
        return None
    return read_fields(cursor, record)


# =============================================================================
# Scanner
# =============================================================================

class ScanState(Enum):
    """Scanner progress."""

    SEEK_HEADER = auto()
    READING_FIELDS = auto()
    DONE = auto()
    FAILED = auto()


class Scanner:
    """
    Reads records from a reclist stream, one at a time.

    The scanner borrows the stream: opening and closing it is up to the
    caller. Records are produced lazily; a scanner cannot be restarted
    once the stream is exhausted.

    Usage:
        scanner = Scanner(stream)
        while scanner.scan():
            rec = scanner.record()
        if scanner.err:
            ...

        # Or as an iterator
        for rec in Scanner(stream):
            ...

    Attributes:
        filename: Name used in diagnostics
        config: Codec configuration
    """

    def __init__(
        self,
        stream: IO,
        filename: str = "<input>",
        config: Optional[CodecConfig] = None,
    ):
        """
        Args:
            stream: Text stream, or binary stream decoded with config.encoding
            filename: Name used in diagnostics
            config: Codec configuration (default: DEFAULT_CONFIG)
        """
        self.filename = filename
        self.config = config or DEFAULT_CONFIG
        self._cursor = ScanCursor(CharSource(stream, filename, self.config))
        self._state = ScanState.SEEK_HEADER
        self._pending: Optional[Record] = None
        self._err: Optional[ScanError] = None

    @classmethod
    def from_string(
        cls,
        text: str,
        filename: str = "<string>",
        config: Optional[CodecConfig] = None,
    ) -> "Scanner":
        """Create a Scanner over a string."""
        return cls(io.StringIO(text), filename=filename, config=config)

    # =========================================================================
    # Scanning
    # =========================================================================

    def scan(self) -> bool:
        """
        Advance to the next record with at least one field.

        Returns:
            True if a record is ready to be taken with record(); False at
            end of data or after a read fault. Check err to tell the two
            apart.
        """
        if self._state in (ScanState.DONE, ScanState.FAILED):
            return False

        self._pending = None
        while True:
            self._state = ScanState.SEEK_HEADER
            try:
                record = seek_header(self._cursor)
            except ScanError as e:
                self._fail(e)
                return False

            if record is None:
                self._state = ScanState.DONE
                logger.debug(f"{self.filename}: end of data at line {self.line}")
                return False

            self._state = ScanState.READING_FIELDS
            try:
                read_fields(self._cursor, record)
            except ScanError as e:
                # Keep the fields read before the fault
                self._fail(e)
                if len(record) == 0:
                    return False
                self._pending = record
                return True

            if len(record) == 0:
                logger.debug(f"{self.filename}: dropping record @{record.type}={record.id} without fields")
                continue

            self._state = ScanState.SEEK_HEADER
            self._pending = record
            logger.debug(f"{self.filename}: scanned @{record.type}={record.id} ({len(record)} fields)")
            return True

    def _fail(self, error: ScanError) -> None:
        self._state = ScanState.FAILED
        self._err = error
        logger.error(f"Scanning stopped: {error}")

    def record(self) -> Record:
        """
        Return the record prepared by the last successful scan().

        Each record is handed out once.

        Raises:
            ScannerStateError: If no record is pending
        """
        if self._pending is None:
            raise ScannerStateError("record() called without a successful scan()")
        record, self._pending = self._pending, None
        return record

    def __iter__(self) -> Iterator[Record]:
        while self.scan():
            yield self.record()

    # =========================================================================
    # Diagnostics
    # =========================================================================

    @property
    def err(self) -> Optional[ScanError]:
        """The fault that stopped scanning, or None."""
        return self._err

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def line(self) -> int:
        """Line the scanner is currently on (1-indexed)."""
        return self._cursor.source.line


# =============================================================================
# Convenience Functions
# =============================================================================

def iter_records(
    stream: IO,
    filename: str = "<input>",
    config: Optional[CodecConfig] = None,
) -> Iterator[Record]:
    """
    Lazily yield the records of a stream.

    Raises:
        ScanError: After the records read before a fault have been yielded
    """
    scanner = Scanner(stream, filename=filename, config=config)
    yield from scanner
    if scanner.err is not None:
        raise scanner.err


def load(
    stream: IO,
    filename: str = "<input>",
    config: Optional[CodecConfig] = None,
) -> list[Record]:
    """Read every record of a stream."""
    return list(iter_records(stream, filename=filename, config=config))


def loads(text: str, config: Optional[CodecConfig] = None) -> list[Record]:
    """
    Read every record of a string.

    Example:
        >>> [r.id for r in loads("@star=Sun\\nmass: 333000\\n")]
        ['Sun']
    """
    return load(io.StringIO(text), filename="<string>", config=config)
