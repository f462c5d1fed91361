"""
reclist Codec Configuration
===========================

Settings shared by the Scanner and the Writer. Configuration can come from:
- Default values (defined here)
- Explicit keyword arguments
- Environment variables (CodecConfig.from_env)

The defaults reproduce the canonical on-disk layout:

    @planet=Mars
    	mass:	0.107
    	gravity: 0.38
    	descrip: "Mars is the fourth planet from the Sun
    		and the second-smallest planet."

- one tab before every field line
- a tab after the colon for keys shorter than 6 characters, a space otherwise
- two tabs before every continuation line of a quoted value
"""

from dataclasses import dataclass
import codecs
import os

from reclist.errors import ConfigError


@dataclass(frozen=True)
class CodecConfig:
    """
    Configuration for reading and writing reclist streams.

    Attributes:
        encoding: Encoding used for binary streams (default: "utf-8")
        short_key_width: Keys shorter than this are followed by a tab,
            longer keys by a single space (default: 6)
        field_indent: Prefix written before every field line (default: tab)
        continuation_indent: Prefix written before every continuation line
            of a quoted value (default: two tabs)
        buffer_size: Writer flushes to the sink once this many characters
            are buffered (default: 4096)
        read_chunk_size: Characters the scanner pulls from the stream per
            read call (default: 4096)
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # ENCODING
    # ═══════════════════════════════════════════════════════════════════════════

    encoding: str = "utf-8"

    # ═══════════════════════════════════════════════════════════════════════════
    # LAYOUT
    # ═══════════════════════════════════════════════════════════════════════════

    short_key_width: int = 6
    field_indent: str = "\t"
    continuation_indent: str = "\t\t"

    # ═══════════════════════════════════════════════════════════════════════════
    # BUFFERING
    # ═══════════════════════════════════════════════════════════════════════════

    buffer_size: int = 4096
    read_chunk_size: int = 4096

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ConfigError(f"Unknown encoding: {self.encoding!r}") from None

        if self.short_key_width < 0:
            raise ConfigError(
                f"short_key_width must not be negative, got {self.short_key_width}"
            )

        for name in ("field_indent", "continuation_indent"):
            indent = getattr(self, name)
            # Indentation must be skipped by the scanner, so only blanks
            if indent and (not indent.isspace() or "\n" in indent or "\r" in indent):
                raise ConfigError(
                    f"{name} must contain only spaces and tabs, got {indent!r}"
                )

        if self.buffer_size <= 0:
            raise ConfigError(f"buffer_size must be positive, got {self.buffer_size}")
        if self.read_chunk_size <= 0:
            raise ConfigError(
                f"read_chunk_size must be positive, got {self.read_chunk_size}"
            )

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "CodecConfig":
        """
        Create CodecConfig from environment variables.

        Environment variables (all optional):
            RECLIST_ENCODING: Encoding for binary streams
            RECLIST_SHORT_KEY_WIDTH: Tab/space separator threshold (integer)
            RECLIST_BUFFER_SIZE: Writer buffer size (integer)
            RECLIST_READ_CHUNK_SIZE: Scanner read chunk size (integer)

        Returns:
            CodecConfig with values from environment variables

        Raises:
            ConfigError: If RECLIST_ENCODING names an unknown encoding
        """
        kwargs = {}

        if encoding := os.environ.get("RECLIST_ENCODING"):
            kwargs["encoding"] = encoding

        for env_name, attr, minimum in (
            ("RECLIST_SHORT_KEY_WIDTH", "short_key_width", 0),
            ("RECLIST_BUFFER_SIZE", "buffer_size", 1),
            ("RECLIST_READ_CHUNK_SIZE", "read_chunk_size", 1),
        ):
            if raw := os.environ.get(env_name):
                try:
                    value = int(raw)
                except ValueError:
                    continue  # Ignore invalid values
                if value >= minimum:
                    kwargs[attr] = value

        return cls(**kwargs)


# Shared instance used when no configuration is given
DEFAULT_CONFIG = CodecConfig()
