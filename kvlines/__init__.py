from kvlines.builder import deserializer
from kvlines.builder import serializer
from kvlines.metaformat import deserialize
from kvlines.metaformat import dump
from kvlines.metaformat import load
from kvlines.metaformat import ParseResult
from kvlines.metaformat import serialize
from kvlines.metaformat import to_string
from kvlines.metaformat import tokenize
from kvlines.options import Options


__all__ = [
    "deserialize",
    "deserializer",
    "dump",
    "load",
    "Options",
    "ParseResult",
    "serialize",
    "serializer",
    "to_string",
    "tokenize",
]
