"""
Quoted Value Encoding
=====================

Quoted values may span several physical lines. Their logical content is
obtained by collapsing whitespace, and the writer must produce text that
collapses back to the same content. Both directions are driven by the same
state machine, defined here.

Decoding
--------
Inside the quotes:

- leading blanks and newlines are dropped
- a run of blanks between words becomes a single space
- a newline, together with the indentation that follows it, becomes a
  single line break ("\\n") in the value
- trailing blanks and newlines are dropped
- \\" and \\\\ stand for a literal quote and a literal backslash

So the source text

    descrip: "Mars is often referred as
            the \\"Red Planet\\"."

decodes to 'Mars is often referred as\\nthe "Red Planet".'

Encoding
--------
The writer walks the value through the same machine: every line break is
written as a newline followed by the continuation indent, every blank run
as a single space, and quotes and backslashes are escaped.

State Machine
-------------
| state         | NEWLINE     | SPACE         | CONTENT (emit first) |
|---------------|-------------|---------------|----------------------|
| START         | START       | START         | IN_LINE              |
| IN_LINE       | AFTER_BREAK | PENDING_SPACE | IN_LINE              |
| PENDING_SPACE | AFTER_BREAK | PENDING_SPACE | IN_LINE (space)      |
| AFTER_BREAK   | AFTER_BREAK | AFTER_BREAK   | IN_LINE (line break) |

A newline cancels a pending space; blanks after a newline are indentation.
"""

from enum import Enum, auto


# =============================================================================
# States and Character Classes
# =============================================================================

class QuoteState(Enum):
    """Position of the decoder relative to the content seen so far."""

    START = auto()          # Nothing emitted yet
    IN_LINE = auto()        # Just emitted content
    PENDING_SPACE = auto()  # Blanks seen since the last content
    AFTER_BREAK = auto()    # Newline seen since the last content


class CharClass(Enum):
    """Classification of an input character."""

    NEWLINE = auto()
    SPACE = auto()
    CONTENT = auto()


class Separator(Enum):
    """What to emit before the next content character."""

    NONE = auto()
    SPACE = auto()
    BREAK = auto()


def classify(char: str) -> CharClass:
    """Classify a single character for the state machine."""
    if char == "\n":
        return CharClass.NEWLINE
    if char.isspace():
        return CharClass.SPACE
    return CharClass.CONTENT


# (state, input) -> (next state, separator emitted before the content)
TRANSITIONS: dict[tuple[QuoteState, CharClass], tuple[QuoteState, Separator]] = {
    (QuoteState.START, CharClass.NEWLINE): (QuoteState.START, Separator.NONE),
    (QuoteState.START, CharClass.SPACE): (QuoteState.START, Separator.NONE),
    (QuoteState.START, CharClass.CONTENT): (QuoteState.IN_LINE, Separator.NONE),

    (QuoteState.IN_LINE, CharClass.NEWLINE): (QuoteState.AFTER_BREAK, Separator.NONE),
    (QuoteState.IN_LINE, CharClass.SPACE): (QuoteState.PENDING_SPACE, Separator.NONE),
    (QuoteState.IN_LINE, CharClass.CONTENT): (QuoteState.IN_LINE, Separator.NONE),

    (QuoteState.PENDING_SPACE, CharClass.NEWLINE): (QuoteState.AFTER_BREAK, Separator.NONE),
    (QuoteState.PENDING_SPACE, CharClass.SPACE): (QuoteState.PENDING_SPACE, Separator.NONE),
    (QuoteState.PENDING_SPACE, CharClass.CONTENT): (QuoteState.IN_LINE, Separator.SPACE),

    (QuoteState.AFTER_BREAK, CharClass.NEWLINE): (QuoteState.AFTER_BREAK, Separator.NONE),
    (QuoteState.AFTER_BREAK, CharClass.SPACE): (QuoteState.AFTER_BREAK, Separator.NONE),
    (QuoteState.AFTER_BREAK, CharClass.CONTENT): (QuoteState.IN_LINE, Separator.BREAK),
}


def step(state: QuoteState, char_class: CharClass) -> tuple[QuoteState, Separator]:
    """Apply one transition of the state machine."""
    return TRANSITIONS[(state, char_class)]


# =============================================================================
# Decoder
# =============================================================================

class QuotedValueDecoder:
    """
    Incremental decoder for the body of a quoted value.

    The caller handles the delimiters: it stops feeding at the closing
    quote, and passes the character following a backslash to
    feed_escaped(), which always treats it as content.

    Example:
        >>> dec = QuotedValueDecoder()
        >>> for ch in "  two\\n\\t\\twords":
        ...     dec.feed(ch)
        >>> dec.value
        'two\\nwords'
    """

    def __init__(self, buffer: list[str] | None = None):
        """
        Args:
            buffer: Scratch list to accumulate into (cleared first).
                Lets the scanner reuse one buffer for every value.
        """
        self._buffer = buffer if buffer is not None else []
        self._buffer.clear()
        self.state = QuoteState.START

    def feed(self, char: str) -> None:
        """Feed one unescaped character."""
        self._consume(char, classify(char))

    def feed_escaped(self, char: str) -> None:
        """Feed the character following a backslash."""
        self._consume(char, CharClass.CONTENT)

    def _consume(self, char: str, char_class: CharClass) -> None:
        self.state, separator = step(self.state, char_class)
        if char_class is not CharClass.CONTENT:
            return
        if separator is Separator.BREAK:
            self._buffer.append("\n")
        elif separator is Separator.SPACE:
            self._buffer.append(" ")
        self._buffer.append(char)

    @property
    def value(self) -> str:
        """The value decoded so far."""
        return "".join(self._buffer)


def decode_quoted(body: str) -> str:
    """
    Decode the text between the quotes of a quoted value.

    Escapes are honoured; a trailing lone backslash is dropped.
    """
    decoder = QuotedValueDecoder()
    escaped = False
    for char in body:
        if escaped:
            decoder.feed_escaped(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            decoder.feed(char)
    return decoder.value


# =============================================================================
# Encoder
# =============================================================================

# Characters that must be backslash-escaped inside quotes
ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
}


def needs_quotes(value: str) -> bool:
    """
    Return True if a value can only be written as a quoted value.

    Values spanning several lines need quotes, and so do values starting
    with a quote, which would otherwise be read back as a quoted value.
    """
    return "\n" in value or value.startswith('"')


def encode_quoted(value: str, continuation_indent: str = "\t\t") -> str:
    """
    Encode a value as a quoted value, quotes included.

    Args:
        value: The logical value
        continuation_indent: Written after every line break

    Returns:
        The quoted text; decoding it yields the value with blank runs
        collapsed and surrounding whitespace removed.

    Example:
        >>> encode_quoted('say "hi"\\nbye')
        '"say \\\\"hi\\\\"\\n\\t\\tbye"'
    """
    parts = ['"']
    state = QuoteState.START
    for char in value:
        char_class = classify(char)
        state, separator = step(state, char_class)
        if char_class is not CharClass.CONTENT:
            continue
        if separator is Separator.BREAK:
            parts.append("\n" + continuation_indent)
        elif separator is Separator.SPACE:
            parts.append(" ")
        parts.append(ESCAPES.get(char, char))
    parts.append('"')
    return "".join(parts)
