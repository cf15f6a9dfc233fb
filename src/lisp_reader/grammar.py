import logging
from typing import List, Callable, Dict, Union

from .constants import WHITESPACE, SYMBOL_EXCLUDED, DIGITS, DOT, QUOTE, ESCAPES, RADIX_DIGITS, RADIX_NAMES, \
    INT64_MIN, INT64_MAX, INT64_DIGITS
from .datum import Datum, NIL, Boolean, Integer, Symbol, Text, Vector, Pair, make_list

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


class IncompleteDatum(EOFError):
    """Raised when the input ends while a datum is still open."""

    def __init__(self, rule: str, pos: int, row: int, col: int) -> None:
        super().__init__(f'Unexpected EOF while reading {rule} at position {pos} (row: {row}, col: {col}).')
        self.rule: str = rule
        self.pos: int = pos
        self.row: int = row
        self.col: int = col


class ReadSyntaxError(SyntaxError):
    """Raised when the input cannot be read as a datum.

    Attributes:
        rule (str): The grammar rule that failed (e.g. "sharp", "number", "string").
        reason (str): What went wrong.
        pos (int): Offset of the offending character in the parsed text.
        row (int): 1-origin line number of the offending character.
        col (int): 1-origin column of the offending character.
    """

    def __init__(self, rule: str, reason: str, pos: int, row: int, col: int) -> None:
        super().__init__(f'{reason} while reading {rule} at position {pos} (row: {row}, col: {col})')
        self.rule: str = rule
        self.reason: str = reason
        self.pos: int = pos
        self.row: int = row
        self.col: int = col
        self.lineno = row
        self.offset = col

    def __str__(self) -> str:
        return self.msg


class Complete:
    """A datum was read. ``rest`` is the text following it."""

    def __init__(self, datum: Datum, rest: str) -> None:
        self.datum: Datum = datum
        self.rest: str = rest

    def __eq__(self, other) -> bool:
        return isinstance(other, Complete) and self.datum == other.datum and self.rest == other.rest

    def __repr__(self) -> str:
        return f'Complete({self.datum!r}, {self.rest!r})'


class Incomplete:
    """The text is a valid prefix of a datum; more input is needed."""

    def __eq__(self, other) -> bool:
        return isinstance(other, Incomplete)

    def __hash__(self) -> int:
        return hash(Incomplete)

    def __repr__(self) -> str:
        return 'INCOMPLETE'


INCOMPLETE = Incomplete()


class Invalid:
    """The text is malformed."""

    def __init__(self, error: ReadSyntaxError) -> None:
        self.error: ReadSyntaxError = error

    @property
    def reason(self) -> str:
        return self.error.reason

    @property
    def rule(self) -> str:
        return self.error.rule

    def __repr__(self) -> str:
        return f'Invalid({str(self.error)!r})'


ParseResult = Union[Complete, Incomplete, Invalid]


class Parser:
    """A recursive descent reader over a text buffer.

    Every ``read_*`` method starts at ``self.pos`` and leaves ``self.pos`` just after what it consumed.
    Running off the end of the text raises ``IncompleteDatum``; malformed input raises ``ReadSyntaxError``.

    Args:
        string_ (str): Text to read.
        final (bool): Whether the text is all there is. If True, the end of text terminates symbols, numbers
            and line comments instead of making them incomplete. (default: False)
    """

    DELIMITERS = WHITESPACE

    def __init__(self, string_: str, final: bool = False):
        self.string = string_
        self.pos = 0
        self.final = final

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.string)

    def peek(self, rule: str = 'datum') -> str:
        if self.at_end:
            self.eof_error(rule)
        return self.string[self.pos]

    def pop(self, rule: str = 'datum') -> str:
        c = self.peek(rule)
        self.pos += 1
        return c

    @property
    def read_table(self) -> Dict[str, Callable[[], Datum]]:
        return {
            "'": self.read_quote,
            "(": self.read_list,
            ")": self.read_right_paren,
            "#": self.read_sharp,
            "\"": self.read_string,
        }

    def read(self) -> Datum:
        """Read one datum, skipping whitespace and comments before it."""
        self.skip_atmosphere()
        char = self.peek()
        read_table = self.read_table
        if char in read_table:
            self.pos += 1
            return read_table[char]()
        if char == '-' or char in DIGITS:
            number = self.read_number()
            if number is not None:
                return number
        return self.read_symbol()

    def exhausted(self) -> bool:
        """Skip whitespace and comments and report whether nothing else is left."""
        self.skip_atmosphere()
        return self.at_end

    def skip_whitespace(self) -> None:
        while not self.at_end and self.string[self.pos] in self.DELIMITERS:
            self.pos += 1

    def skip_atmosphere(self) -> None:
        """Skip whitespace and comments of all three kinds."""
        while True:
            self.skip_whitespace()
            if self.at_end:
                return
            if self.string[self.pos] == ';':
                self.skip_line_comment()
            elif self.string.startswith('#|', self.pos):
                self.skip_block_comment()
            elif self.string.startswith('#;', self.pos):
                self.pos += 2
                discarded = self.read()
                logger.debug(f'datum comment discarded: {discarded}')
            else:
                return

    def skip_line_comment(self) -> None:
        end = self.string.find('\n', self.pos)
        if end == -1:
            self.pos = len(self.string)
            if not self.final:
                self.eof_error('line comment')
        else:
            self.pos = end + 1

    def skip_block_comment(self) -> None:
        end = self.string.find('|#', self.pos + 2)
        if end == -1:
            self.pos = len(self.string)
            self.eof_error('block comment')
        self.pos = end + 2

    def read_quote(self) -> Datum:
        return make_list(Symbol(QUOTE), self.read())

    def read_list(self) -> Datum:
        elements = []
        tail = NIL
        while True:
            self.skip_atmosphere()
            char = self.peek('list')
            if char == ')':
                self.pos += 1
                break
            if self.at_dot():
                self.pos += 1
                tail = self.read()
                self.skip_atmosphere()
                if self.peek('list') != ')':
                    self.syntax_error('list', "expected ')' after dotted tail")
                self.pos += 1
                break
            elements.append(self.read())
        return Pair.from_list(elements, tail)

    def at_dot(self) -> bool:
        """Whether a standalone dot token starts at the current position."""
        if self.string[self.pos] != DOT:
            return False
        if self.pos + 1 >= len(self.string):
            if self.final:
                return True
            self.pos += 1
            self.eof_error('list')
        return self.string[self.pos + 1] in SYMBOL_EXCLUDED

    def read_right_paren(self) -> Datum:
        self.pos -= 1
        self.syntax_error('datum', "unexpected ')'")

    def read_sharp(self) -> Datum:
        char = self.pop('sharp')
        key = char.lower()
        if key == 't':
            return Boolean(True)
        elif key == 'f':
            return Boolean(False)
        elif key in RADIX_DIGITS:
            radix, digits = RADIX_DIGITS[key]
            return self.read_radix_number(radix, digits)
        elif char == '(':
            return self.read_vector()
        self.pos -= 2
        self.syntax_error('sharp', f'unknown sharp syntax {("#" + char)!r}')

    def read_vector(self) -> Datum:
        items = []
        while True:
            self.skip_atmosphere()
            if self.peek('vector') == ')':
                self.pos += 1
                return Vector(items)
            items.append(self.read())

    def read_radix_number(self, radix: int, digits: str) -> Datum:
        start = self.pos
        negative = self.peek('number') == '-'
        if negative:
            self.pos += 1
        if self.peek('number') not in digits:
            self.syntax_error('number', f'expected {RADIX_NAMES[radix]} digits')
        return self._finish_number(start, radix, digits)

    def read_number(self) -> Union[Datum, None]:
        """Read a decimal integer, or return None (without consuming anything) if a symbol starts here."""
        start = self.pos
        if self.string[self.pos] == '-':
            self.pos += 1
            if (self.at_end and self.final) or self.peek('number') not in DIGITS:
                self.pos = start
                return None
        return self._finish_number(start, 10, DIGITS)

    def _finish_number(self, start: int, radix: int, digits: str) -> Datum:
        while not self.at_end and self.string[self.pos] in digits:
            self.pos += 1
        if self.at_end and not self.final:
            self.eof_error('number')
        literal = self.string[start:self.pos]
        magnitude = literal.lstrip('-').lstrip('0') or '0'
        if len(magnitude) > INT64_DIGITS[radix]:
            self.pos = start
            self.syntax_error('number', 'integer literal out of 64-bit range')
        value = int(magnitude, radix)
        if literal.startswith('-'):
            value = -value
        if not INT64_MIN <= value <= INT64_MAX:
            self.pos = start
            self.syntax_error('number', 'integer literal out of 64-bit range')
        return Integer(value)

    def read_string(self) -> Datum:
        chars = []
        while True:
            char = self.pop('string')
            if char == '"':
                return Text(''.join(chars))
            if char == '\\':
                escape = self.pop('string')
                if escape not in ESCAPES:
                    self.pos -= 2
                    sequence = '\\' + escape
                    self.syntax_error('string', f'unknown escape sequence {sequence!r}')
                chars.append(ESCAPES[escape])
            else:
                chars.append(char)

    def read_symbol(self) -> Datum:
        start = self.pos
        while not self.at_end and self.string[self.pos] not in SYMBOL_EXCLUDED:
            self.pos += 1
        if self.at_end and not self.final:
            self.eof_error('symbol')
        name = self.string[start:self.pos]
        if name == DOT:
            self.pos = start
            self.syntax_error('symbol', f"'{DOT}' is reserved for dotted pairs")
        return Symbol(name)

    def _location(self):
        pos: int = min(self.pos, len(self.string))
        buf: str = self.string[:pos]
        row: int = buf.count("\n") + 1
        col: int = len(buf.split("\n")[-1]) + 1
        return pos, row, col

    def eof_error(self, rule: str):
        pos, row, col = self._location()
        raise IncompleteDatum(rule, pos, row, col)

    def syntax_error(self, rule: str, reason: str):
        pos, row, col = self._location()
        raise ReadSyntaxError(rule, reason, pos, row, col)


def parse(text: str, final: bool = False) -> ParseResult:
    """Read one datum from the start of ``text``.

    Args:
        text (str): Buffered input.
        final (bool): Whether no more input will follow ``text``. (default: False)

    Returns:
        ParseResult: ``Complete`` with the datum and the unconsumed text, ``INCOMPLETE`` if ``text`` is a valid
        prefix of a datum, or ``Invalid`` if it is malformed.
    """
    parser = Parser(text, final=final)
    try:
        datum = parser.read()
    except IncompleteDatum:
        return INCOMPLETE
    except ReadSyntaxError as e:
        return Invalid(e)
    except RecursionError:
        pos, row, col = parser._location()
        return Invalid(ReadSyntaxError('datum', 'nesting too deep', pos, row, col))
    return Complete(datum, text[parser.pos:])


def read_all(text: str) -> List[Datum]:
    """Read every datum in a complete text.

    Raises:
        ReadSyntaxError: If the text is malformed.
        IncompleteDatum: If the text ends inside a datum.
    """
    parser = Parser(text, final=True)
    data = []
    while not parser.exhausted():
        data.append(parser.read())
    return data
