r"""Command-line parser — turn one input line into a name and arguments.

The shell understands exactly one simple command per line.  Quoting
works the way a POSIX shell user expects:

- Whitespace outside quotes separates words.
- ``"double quotes"`` group a word; inside them only ``\"``, ``\\``,
  ``\$``, ``\``` and ``\n``/``\t``/``\r`` are escapes.  Any other
  escaped character keeps its backslash.
- ``'single quotes'`` group a word with no escapes at all.
- Outside quotes a backslash escapes exactly the next character.
- ``""`` is an empty word, and ``"a"'b'c`` is the single word ``abc``.

Anything that would need a second process or a second statement is
rejected outright: pipes, redirections, ``&&``, ``||``, ``;`` and
command substitution.  These are legal when quoted.

Parsing runs in two passes.  A pre-scan walks the whole line tracking
quote state character by character, rejecting unsupported operators and
unterminated quotes before a single token is built.  Only then does the
tokenizer run.
"""

from dataclasses import dataclass, field

# Escapes recognised inside double quotes, mapped to what they produce.
_DOUBLE_QUOTE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "$": "$",
    "`": "`",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


class ParseError(Exception):
    """Raise when a command line is malformed (e.g. an unterminated quote)."""


class UnsupportedSyntaxError(Exception):
    """Raise when a command line uses a construct the shell rejects.

    Attributes:
        feature: Human-readable name of the rejected construct.

    """

    def __init__(self, feature: str) -> None:
        """Create the error for the rejected *feature*."""
        super().__init__(f"Unsupported syntax: {feature}")
        self.feature = feature


@dataclass(frozen=True)
class ParsedCommand:
    """A command name and its argument words."""

    name: str
    args: list[str] = field(default_factory=list)


def parse_command(line: str) -> ParsedCommand | None:
    """Parse *line* into a command.

    Args:
        line: One line of user input.

    Returns:
        The parsed command, or None for a blank line.

    Raises:
        UnsupportedSyntaxError: If the line uses a rejected construct.
        ParseError: If a quote is left open.

    """
    stripped = line.strip()
    if not stripped:
        return None

    _check_syntax(stripped)

    tokens = _tokenize(stripped)
    if not tokens:
        return None
    return ParsedCommand(name=tokens[0], args=tokens[1:])


def _unsupported_operator(char: str, following: str) -> str | None:
    """Name the rejected construct starting at *char*, if any."""
    pair = char + following
    if pair == "||":
        return "logical OR (||)"
    if pair == "&&":
        return "logical AND (&&)"
    if pair == "$(":
        return "command substitution ($())"
    match char:
        case "|":
            return "pipes (|)"
        case ">" | "<":
            return "redirections (>, <, >>)"
        case ";":
            return "command chaining (;)"
        case "`":
            return "command substitution (``)"
    return None


def _check_syntax(line: str) -> None:
    """Pre-scan *line* for rejected operators and open quotes."""
    in_single = False
    in_double = False
    escaped = False

    for i, char in enumerate(line):
        if escaped:
            escaped = False
            continue
        if char == "\\" and not in_single:
            escaped = True
            continue
        if char == "'" and not in_double:
            in_single = not in_single
            continue
        if char == '"' and not in_single:
            in_double = not in_double
            continue

        if not in_single and not in_double:
            feature = _unsupported_operator(char, line[i + 1 : i + 2])
            if feature is not None:
                raise UnsupportedSyntaxError(feature)

    if in_single:
        msg = "Unterminated single quote"
        raise ParseError(msg)
    if in_double:
        msg = "Unterminated double quote"
        raise ParseError(msg)


def _tokenize(line: str) -> list[str]:
    """Split a pre-checked line into words, applying quotes and escapes."""
    tokens: list[str] = []
    current: list[str] = []
    in_single = False
    in_double = False
    escaped = False
    # Empty quotes still produce a word, so track "seen anything" apart
    # from the characters themselves.
    has_content = False

    for char in line:
        if escaped:
            if in_double:
                current.append(_DOUBLE_QUOTE_ESCAPES.get(char, "\\" + char))
            else:
                current.append(char)
            escaped = False
            has_content = True
            continue

        if char == "\\" and not in_single:
            escaped = True
            continue

        if char == "'" and not in_double:
            in_single = not in_single
            has_content = True
            continue

        if char == '"' and not in_single:
            in_double = not in_double
            has_content = True
            continue

        if char.isspace() and not in_single and not in_double:
            if has_content:
                tokens.append("".join(current))
                current = []
                has_content = False
            continue

        current.append(char)
        has_content = True

    if has_content:
        tokens.append("".join(current))
    return tokens
