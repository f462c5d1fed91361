"""
reclist Writer
==============

This module serializes records to the reclist text format, so that
scanning the output yields records equal to the ones written.

Output Layout
-------------
    @planet=Mars
    	descrip: "Mars is the fourth planet from the Sun
    		and the second-smallest planet."
    	gravity: 0.38
    	mass:	0.107

- the header is written as "@type=id"
- fields follow in lexicographic key order, one per line
- keys shorter than 6 characters are followed by a tab, longer keys by a
  single space, which keeps the values roughly aligned
- values containing line breaks are quoted; every line break becomes a
  newline plus a two-tab indent, blank runs become single spaces, and
  quotes and backslashes are escaped

Errors
------
Output is buffered. A failure of the underlying sink is not raised;
it is stored in Writer.err and the writer stops writing for good.

Usage
-----
    >>> with Writer(sys.stdout) as writer:
    ...     for record in records:
    ...         writer.write(record)
    >>> if writer.err:
    ...     raise writer.err
"""

from typing import IO, Iterable, Optional
import io
import logging

from reclist.config import CodecConfig, DEFAULT_CONFIG
from reclist.errors import WriteError
from reclist.quoting import encode_quoted, needs_quotes
from reclist.record import Record

# Logger for this module
logger = logging.getLogger(__name__)


def _is_binary(sink: IO) -> bool:
    """Guess whether a sink expects bytes."""
    if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        return True
    if isinstance(sink, io.TextIOBase):
        return False
    return "b" in getattr(sink, "mode", "")


class Writer:
    """
    Buffered writer of reclist records.

    The writer borrows the sink: it flushes it but never closes it.

    Attributes:
        config: Codec configuration
        records_written: Number of records written so far

    Example:
        >>> out = io.StringIO()
        >>> writer = Writer(out)
        >>> rec = Record("star", "Sun")
        >>> rec.set("mass", "333000")
        >>> writer.write(rec)
        >>> writer.flush()
        >>> out.getvalue()
        '@star=Sun\\n\\tmass:\\t333000\\n'
    """

    def __init__(self, sink: IO, config: Optional[CodecConfig] = None):
        """
        Args:
            sink: Text stream, or binary stream encoded with config.encoding
            config: Codec configuration (default: DEFAULT_CONFIG)
        """
        self._sink = sink
        self.config = config or DEFAULT_CONFIG
        self._binary = _is_binary(sink)
        self._buffer: list[str] = []
        self._buffered = 0
        self._err: Optional[WriteError] = None
        self.records_written = 0

    # =========================================================================
    # Writing Records
    # =========================================================================

    def write(self, record: Optional[Record]) -> None:
        """
        Write a single record.

        Records without fields are skipped. Does nothing once the writer
        has failed.
        """
        if self._err is not None or record is None:
            return

        keys = record.keys()
        if not keys or not record.id or not record.type:
            return

        if "=" in record.type:
            logger.debug(f"Type {record.type!r} contains '=' and will not read back as written")
        self._emit(f"@{record.type}={record.id}\n")
        for key in keys:
            if ":" in key or key[0] in "#@":
                logger.debug(f"Key {key!r} of @{record.type}={record.id} will not read back as written")
            value = record.get(key)
            if not value:
                continue
            self._emit(self.format_field(key, value))
        self.records_written += 1

    def write_all(self, records: Iterable[Optional[Record]]) -> None:
        """Write every record of an iterable."""
        for record in records:
            self.write(record)

    def format_field(self, key: str, value: str) -> str:
        """
        Format one field line, newline included.

        Example:
            >>> Writer(io.StringIO()).format_field("gravity", "0.38")
            '\\tgravity: 0.38\\n'
        """
        separator = "\t" if len(key) < self.config.short_key_width else " "
        if needs_quotes(value):
            value = encode_quoted(value, self.config.continuation_indent)
        return f"{self.config.field_indent}{key}:{separator}{value}\n"

    def _emit(self, text: str) -> None:
        if self._err is not None:
            return
        self._buffer.append(text)
        self._buffered += len(text)
        if self._buffered >= self.config.buffer_size:
            self.flush()

    # =========================================================================
    # Flushing
    # =========================================================================

    def flush(self) -> None:
        """
        Write buffered output to the sink and flush the sink.

        A failure is stored in err, not raised.
        """
        if self._err is not None or not self._buffer:
            return

        data = "".join(self._buffer)
        self._buffer.clear()
        self._buffered = 0

        try:
            if self._binary:
                self._sink.write(data.encode(self.config.encoding))
            else:
                self._sink.write(data)
            flush = getattr(self._sink, "flush", None)
            if flush is not None:
                flush()
        except (OSError, ValueError) as e:
            # ValueError covers closed files and unencodable text
            self._err = WriteError(f"cannot write to sink: {e}")
            self._err.__cause__ = e
            logger.error(f"Writer failed: {self._err}")

    @property
    def err(self) -> Optional[WriteError]:
        """The failure that stopped the writer, or None."""
        return self._err

    def __enter__(self) -> "Writer":
        return self

    def __exit__(self, *args) -> None:
        self.flush()


# =============================================================================
# Convenience Functions
# =============================================================================

def dump(
    records: Iterable[Optional[Record]],
    sink: IO,
    config: Optional[CodecConfig] = None,
) -> None:
    """
    Write records to a sink.

    Raises:
        WriteError: If the sink fails
    """
    writer = Writer(sink, config=config)
    writer.write_all(records)
    writer.flush()
    if writer.err is not None:
        raise writer.err


def dumps(
    records: Iterable[Optional[Record]],
    config: Optional[CodecConfig] = None,
) -> str:
    """
    Serialize records to a string.

    Example:
        >>> rec = Record("moon", "Titan")
        >>> rec.set("parent", "Saturn")
        >>> dumps([rec])
        '@moon=Titan\\n\\tparent: Saturn\\n'
    """
    out = io.StringIO()
    dump(records, out, config=config)
    return out.getvalue()
