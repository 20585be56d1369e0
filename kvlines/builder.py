"""Chainable front ends for the encoder and decoder.

Every call returns a new builder, so a configured builder can be kept
around and reused::

    crlf = serializer().separator("=").newline("\\r\\n")
    crlf.pairs([("foo", "bar")]).serialize()
"""
import copy

from kvlines.metaformat import deserialize
from kvlines.metaformat import dump
from kvlines.metaformat import to_string
from kvlines.options import Options


class _Builder:
    def __init__(self):
        self._options = Options()

    def _derive(self, **attrs):
        rv = copy.copy(self)
        for key, value in attrs.items():
            setattr(rv, key, value)
        return rv

    @property
    def options(self):
        return self._options

    def separator(self, separator):
        return self._derive(_options=self._options._replace(separator=separator))

    def newline(self, newline):
        return self._derive(_options=self._options._replace(newline=newline))

    def with_options(self, options):
        return self._derive(_options=options)


class Serializer(_Builder):
    def __init__(self):
        _Builder.__init__(self)
        self._pairs = ()
        self._extra_lines = ()

    def pairs(self, pairs):
        return self._derive(_pairs=pairs)

    def extra_lines(self, extra_lines):
        return self._derive(_extra_lines=extra_lines)

    def serialize(self):
        return to_string(self._pairs, self._extra_lines, self._options)

    def dump(self, fp, encoding="utf-8"):
        return dump(
            self._pairs, self._extra_lines, fp, self._options, encoding=encoding
        )

    def __repr__(self):
        return "<Serializer separator=%r newline=%r>" % self._options


class Deserializer(_Builder):
    def __init__(self):
        _Builder.__init__(self)
        self._keys = frozenset()

    def keys(self, keys):
        return self._derive(_keys=frozenset(keys))

    def deserialize(self, source):
        return deserialize(self._keys, source, self._options)

    def __repr__(self):
        return "<Deserializer separator=%r keys=%r>" % (
            self._options.separator,
            sorted(self._keys),
        )


def serializer():
    return Serializer()


def deserializer():
    return Deserializer()
