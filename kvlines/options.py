from typing import NamedTuple


DEFAULT_SEPARATOR = ": "
DEFAULT_NEWLINE = "\n"


class Options(NamedTuple):
    """The format settings shared by the encoder and the decoder.

    ``separator`` goes between a key and its value, ``newline`` is
    appended after every encoded line.  The decoder only looks at the
    separator; it always splits its input on ``\\n`` (with an optional
    preceding ``\\r``).
    """

    separator: str = DEFAULT_SEPARATOR
    newline: str = DEFAULT_NEWLINE

    def replace(self, **changes):
        """Returns a copy with the given fields changed.  Fields passed as
        `None` keep their current value.
        """
        return self._replace(**{k: v for k, v in changes.items() if v is not None})


default_options = Options()


def resolve_options(options=None, **overrides):
    if options is None:
        options = default_options
    return options.replace(**overrides)
