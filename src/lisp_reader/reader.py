import logging
from typing import Iterable, Iterator, Optional, Callable, TextIO

from .datum import Datum
from .grammar import parse, Complete, Invalid, ReadSyntaxError

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


class InputSourceError(IOError):
    """Raised when the input source fails to deliver a chunk."""


def _log_syntax_error(error: ReadSyntaxError) -> None:
    logger.warning(f'discarded buffered input: {error}')


class StreamReader:
    """A class to read data incrementally from a stream of text chunks.

    The reader owns a single text buffer. Each time the buffer holds a complete datum, the datum is yielded and
    the rest of the buffer is kept for the next one. When the buffer is only a prefix of a datum, the next chunk
    is appended and the whole buffer is read again. On a syntax error the whole buffer is discarded.

    Args:
        source (Iterable[str]): Text chunks, typically lines including their line endings.
        on_prompt (Optional[Callable[[], None]]): Called whenever nothing is pending, before reading on.
        on_error (Optional[Callable[[ReadSyntaxError], None]]): Called with each syntax error.
            (default: log a warning)

    Attributes:
        discarded (int): The number of times the buffer was discarded because of a syntax error.
    """

    def __init__(self,
                 source: Iterable[str],
                 on_prompt: Optional[Callable[[], None]] = None,
                 on_error: Optional[Callable[[ReadSyntaxError], None]] = None,
                 ) -> None:
        if isinstance(source, str):
            raise TypeError('source must be an iterable of chunks, not a single str')
        self._chunks: Iterator[str] = iter(source)
        self._buffer: str = ''
        self._exhausted: bool = False
        self.on_prompt: Optional[Callable[[], None]] = on_prompt
        self.on_error: Callable[[ReadSyntaxError], None] = on_error if on_error is not None else _log_syntax_error
        self.discarded: int = 0

    @classmethod
    def from_file(cls, file: TextIO, **kwargs) -> 'StreamReader':
        """Read lines from an open text file."""
        return cls(iter(file.readline, ''), **kwargs)

    @property
    def pending(self) -> str:
        """Buffered text that has not been read as a datum yet."""
        return self._buffer

    @property
    def exhausted(self) -> bool:
        """Whether the source has run out of chunks."""
        return self._exhausted

    def _pull(self) -> bool:
        """Append the next chunk to the buffer. Return False if the source is exhausted."""
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._exhausted = True
            return False
        except (OSError, UnicodeDecodeError) as e:
            raise InputSourceError(f'failed to read from input source: {e}') from e
        if not isinstance(chunk, str):
            raise InputSourceError(f"chunk must be str type, but got '{type(chunk)}' type")
        logger.debug(f'read chunk: {chunk!r}')
        self._buffer += chunk
        return True

    def read(self) -> Optional[Datum]:
        """Return the next datum, or None at the end of the stream."""
        if self._exhausted:
            return None
        while True:
            if not self._buffer.strip() and self.on_prompt is not None:
                self.on_prompt()
            while True:
                result = parse(self._buffer)
                if isinstance(result, Complete):
                    self._buffer = result.rest
                    return result.datum
                if isinstance(result, Invalid):
                    self.discarded += 1
                    self._buffer = ''
                    self.on_error(result.error)
                    break
                logger.debug(f'incomplete datum, {len(self._buffer)} characters buffered')
                if not self._pull():
                    logger.info('end of input stream')
                    return None
                if not self._buffer.strip() and self.on_prompt is not None:
                    self.on_prompt()

    def read_data(self) -> Iterator[Datum]:
        """Yield data until the end of the stream."""
        while True:
            datum = self.read()
            if datum is None:
                return
            yield datum

    def __iter__(self) -> Iterator[Datum]:
        return self.read_data()
