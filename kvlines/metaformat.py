import codecs
from typing import List
from typing import NamedTuple
from typing import Tuple

from kvlines.exception import SinkWriteError
from kvlines.options import DEFAULT_NEWLINE
from kvlines.options import DEFAULT_SEPARATOR
from kvlines.options import resolve_options
from kvlines.reporter import reporter


class ParseResult(NamedTuple):
    """The outcome of decoding a source.  Every source line ends up in
    exactly one of the two lists, and both keep source order.
    """

    pairs: List[Tuple[str, str]]
    extra_lines: List[str]

    def pairs_dict(self):
        """Returns the pairs as a dictionary.  If a key occurs more than
        once the last value wins.
        """
        return dict(self.pairs)

    def extra_lines_list(self):
        return list(self.extra_lines)


def _split_line(line, separator):
    if not separator:
        return ["", line]
    return line.split(separator, 1)


def iter_lines(source):
    """Splits a source string into lines.  Lines end at ``\\n``; a ``\\r``
    right in front of it is dropped as well.  A trailing piece without
    terminator is a line of its own, but a final terminator does not
    start an empty line.
    """
    start = 0
    length = len(source)
    while start < length:
        end = source.find("\n", start)
        if end < 0:
            yield source[start:]
            return
        line = source[start:end]
        if line[-1:] == "\r":
            line = line[:-1]
        yield line
        start = end + 1


def _decode_lines(chunks, encoding):
    # Decodes the whole stream with one decoder and splits afterwards, so
    # multi-byte encodings like UTF-16 are not cut apart at b"\n".
    decoder = codecs.getincrementaldecoder(encoding)("replace")
    buf = ""
    for chunk in chunks:
        buf += decoder.decode(chunk)
        lines = buf.split("\n")
        buf = lines.pop()
        for line in lines:
            yield line + "\n"
    buf += decoder.decode(b"", final=True)
    if buf:
        yield buf


def _strip_line_ending(line):
    if line[-1:] == "\n":
        line = line[:-1]
        if line[-1:] == "\r":
            line = line[:-1]
    return line


def tokenize(iterable, keys, separator=DEFAULT_SEPARATOR, encoding=None):
    """Classifies an iterable of lines.  Lines may still carry their line
    endings (as they do when iterating over a file) and are decoded first
    if an encoding is given.

    For every line this yields ``(key, value)`` if the line is a pair with
    an allowed key, or ``(None, line)`` if it is an extra line.  The
    iterable is consumed lazily and only once.
    """
    keys = frozenset(keys)

    if encoding is not None:
        iterable = _decode_lines(iterable, encoding)

    for line in iterable:
        line = _strip_line_ending(line)
        bits = _split_line(line, separator)
        if len(bits) == 2 and bits[0] in keys:
            reporter.report_pair(bits[0], bits[1])
            yield bits[0], bits[1]
        else:
            reporter.report_extra_line(line)
            yield None, line


def _collect(tokens):
    pairs = []
    extra_lines = []
    for key, value in tokens:
        if key is None:
            extra_lines.append(value)
        else:
            pairs.append((key, value))
    return ParseResult(pairs, extra_lines)


def deserialize(keys, source, options=None):
    """Decodes a source string into a :class:`ParseResult`.  Only lines
    whose key is in `keys` are recognized as pairs; the rest are kept
    verbatim as extra lines.
    """
    options = resolve_options(options)
    return _collect(tokenize(iter_lines(source), keys, options.separator))


def load(keys, fp, options=None, encoding="utf-8"):
    """Like :func:`deserialize` but reads from a binary file object."""
    options = resolve_options(options)
    return _collect(tokenize(fp, keys, options.separator, encoding=encoding))


def serialize(
    pairs,
    extra_lines=(),
    separator=DEFAULT_SEPARATOR,
    newline=DEFAULT_NEWLINE,
    encoding=None,
):
    """Serializes an iterable of key value pairs followed by an iterable
    of extra lines into a stream of string chunks, one per line.  If an
    encoding is provided the chunks are encoded into that.

    Nothing is escaped.  A key, value or extra line that contains the
    separator or the newline will not decode back to the same data.
    """
    encoder = None
    if encoding is not None:
        encoder = codecs.getincrementalencoder(encoding)()

    def _produce(item):
        if encoder is not None:
            item = encoder.encode(item)
        return item

    for key, value in pairs:
        yield _produce(key + separator + value + newline)

    for line in extra_lines:
        yield _produce(line + newline)

    if encoder is not None:
        tail = encoder.encode("", final=True)
        if tail:
            yield tail


def to_string(pairs, extra_lines=(), options=None):
    options = resolve_options(options)
    return "".join(
        serialize(pairs, extra_lines, options.separator, options.newline)
    )


def dump(pairs, extra_lines, fp, options=None, encoding="utf-8"):
    """Writes the serialized lines to the binary file object `fp`, one
    write per line, and returns the number of bytes written.

    If the sink fails, a :exc:`~kvlines.exception.SinkWriteError` is
    raised right away and no further writes happen.  What was written
    before stays in the sink.
    """
    options = resolve_options(options)
    written = 0
    chunks = serialize(
        pairs, extra_lines, options.separator, options.newline, encoding=encoding
    )
    for chunk in chunks:
        try:
            fp.write(chunk)
        except (OSError, ValueError) as e:
            reporter.report_sink_failure(e, written)
            raise SinkWriteError(
                "Could not write to output: %s" % e, written=written
            ) from e
        written += len(chunk)
        reporter.report_write(len(chunk))
    return written
