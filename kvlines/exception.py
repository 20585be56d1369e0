class KvlinesException(Exception):
    def __init__(self, message=None):
        Exception.__init__(self)
        if isinstance(message, bytes):
            message = message.decode("utf-8", "replace")
        self.message = message

    def to_json(self):
        return {
            "type": self.__class__.__name__,
            "message": self.message,
        }

    def __str__(self):
        return str(self.message)

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.message)


class ConfigError(KvlinesException):
    pass


class SinkWriteError(KvlinesException):
    """Raised by :func:`kvlines.metaformat.dump` when the output sink
    rejects a write.  Everything before ``written`` bytes made it into
    the sink; nothing after was attempted.
    """

    def __init__(self, message=None, written=0):
        KvlinesException.__init__(self, message)
        self.written = written

    def to_json(self):
        rv = KvlinesException.to_json(self)
        rv["written"] = self.written
        return rv
