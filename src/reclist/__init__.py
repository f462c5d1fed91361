"""
reclist - Reader and Writer for the reclist Record Format
=========================================================

reclist is a human-readable, line-oriented text format for typed records:

    # Solar system objects
    @star=Sun
    	radius:	109.3
    	mass:	333000
    	descrip: "The Sun is the star at the center
    		of the Solar System."

    @planet=Mars
    	radius: 0.5320
    	descrip: "Mars is often referred as
    		the \\"Red Planet\\"."

Each record opens with an "@type=id" header and holds "key: value" fields.
Types and keys are case-insensitive and hyphen-joined; IDs and values keep
their case. Quoted values may span lines and escape '"' and '\\' with a
backslash. Blank lines, indentation and '#' comment lines are ignored.

The format is inspired by the record-jar format described by E. Raymond
in "The Art of Unix Programming", the list format of flat text databases
such as C. Strozzi's NoSQL, and the BibTeX bibliography format.

Main Components
---------------
- **Record**: a type, an ID and a set of fields
- **Scanner**: lazily reads records from a text or binary stream
- **Writer**: buffered serializer of records to a text or binary sink
- **CodecConfig**: encoding and layout settings

Quick Start
-----------
Read records:
    >>> from reclist import Scanner
    >>> with open("solar.rec", encoding="utf-8") as f:
    ...     scanner = Scanner(f, filename="solar.rec")
    ...     for rec in scanner:
    ...         print(rec.type, rec.id, rec.get("mass"))
    ...     if scanner.err:
    ...         raise scanner.err

Write records:
    >>> from reclist import Record, Writer
    >>> rec = Record.create("moon", "Titan")
    >>> rec.set("parent", "Saturn")
    >>> with open("moons.rec", "w", encoding="utf-8") as f, Writer(f) as writer:
    ...     writer.write(rec)

Or the string helpers:
    >>> records = reclist.loads(text)
    >>> text = reclist.dumps(records)
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from reclist.config import CodecConfig, DEFAULT_CONFIG
from reclist.errors import (
    ReclistError,
    SourceLocation,
    InvalidRecordError,
    ScannerStateError,
    CodecIOError,
    ScanError,
    WriteError,
    ConfigError,
)
from reclist.record import (
    Record,
    normalize_type,
    normalize_key,
    normalize_id,
)
from reclist.quoting import (
    QuoteState,
    QuotedValueDecoder,
    decode_quoted,
    encode_quoted,
    needs_quotes,
)
from reclist.scanner import (
    Scanner,
    ScanState,
    iter_records,
    load,
    loads,
)
from reclist.writer import (
    Writer,
    dump,
    dumps,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Exception hierarchy
    "ReclistError",
    "SourceLocation",
    "InvalidRecordError",
    "ScannerStateError",
    "CodecIOError",
    "ScanError",
    "WriteError",
    "ConfigError",
    # Records
    "Record",
    "normalize_type",
    "normalize_key",
    "normalize_id",
    # Quoting
    "QuoteState",
    "QuotedValueDecoder",
    "decode_quoted",
    "encode_quoted",
    "needs_quotes",
    # Scanner
    "Scanner",
    "ScanState",
    "iter_records",
    "load",
    "loads",
    # Writer
    "Writer",
    "dump",
    "dumps",
]
