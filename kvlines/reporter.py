import time
from contextlib import contextmanager

import click
from click import style
from werkzeug.local import LocalProxy
from werkzeug.local import LocalStack


_reporter_stack = LocalStack()


class Reporter:
    def __init__(self, verbosity=0):
        self.verbosity = verbosity
        self.activity_stack = []
        self.pair_count = 0
        self.extra_line_count = 0
        self.bytes_written = 0

    def push(self):
        _reporter_stack.push(self)

    def pop(self):
        _reporter_stack.pop()

    def __enter__(self):
        self.push()
        return self

    def __exit__(self, exc_type, exc_value, tb):
        self.pop()

    @property
    def show_summary(self):
        return self.verbosity >= 1

    @property
    def show_lines(self):
        return self.verbosity >= 2

    @property
    def show_debug_info(self):
        return self.verbosity >= 3

    @contextmanager
    def process(self, activity):
        now = time.time()
        self.activity_stack.append(activity)
        self.pair_count = self.extra_line_count = self.bytes_written = 0
        self.start_process(activity)
        try:
            yield
        finally:
            self.finish_process(activity, now)
            self.activity_stack.pop()

    def start_process(self, activity):
        pass

    def finish_process(self, activity, start_time):
        pass

    def report_pair(self, key, value):
        self.pair_count += 1

    def report_extra_line(self, line):
        self.extra_line_count += 1

    def report_write(self, size):
        self.bytes_written += size

    def report_sink_failure(self, exc, written):
        pass

    def report_debug_info(self, key, value):
        pass


class NullReporter(Reporter):
    def report_pair(self, key, value):
        pass

    def report_extra_line(self, line):
        pass

    def report_write(self, size):
        pass


class BufferReporter(Reporter):
    def __init__(self, verbosity=0):
        Reporter.__init__(self, verbosity)
        self.buffer = []

    def clear(self):
        self.buffer = []

    def get_events(self, event):
        return [data for name, data in self.buffer if name == event]

    def get_major_events(self):
        rv = []
        for event, data in self.buffer:
            if event not in ("debug-info", "write"):
                rv.append((event, data))
        return rv

    def _emit(self, _event, **extra):
        self.buffer.append((_event, extra))

    def start_process(self, activity):
        self._emit("start-process", activity=activity)

    def finish_process(self, activity, start_time):
        self._emit(
            "finish-process",
            activity=activity,
            pairs=self.pair_count,
            extra_lines=self.extra_line_count,
            bytes_written=self.bytes_written,
        )

    def report_pair(self, key, value):
        Reporter.report_pair(self, key, value)
        self._emit("pair", key=key, value=value)

    def report_extra_line(self, line):
        Reporter.report_extra_line(self, line)
        self._emit("extra-line", line=line)

    def report_write(self, size):
        Reporter.report_write(self, size)
        self._emit("write", size=size)

    def report_sink_failure(self, exc, written):
        self._emit("sink-failure", exc=exc, written=written)

    def report_debug_info(self, key, value):
        self._emit("debug-info", key=key, value=value)


class CliReporter(Reporter):
    """Reports to the terminal.  Output goes to stderr so the encoded or
    decoded data on stdout stays clean.
    """

    def __init__(self, verbosity=0):
        Reporter.__init__(self, verbosity)
        self.indentation = 0

    def indent(self):
        self.indentation += 1

    def outdent(self):
        self.indentation -= 1

    def _write_line(self, text):
        click.echo(" " * (self.indentation * 2) + text, err=True)

    def _write_kv_info(self, key, value):
        self._write_line("%s: %s" % (key, style(str(value), fg="yellow")))

    def start_process(self, activity):
        if self.show_summary:
            self._write_line(style("Started %s" % activity, fg="cyan"))
        self.indent()

    def finish_process(self, activity, start_time):
        self.outdent()
        if not self.show_summary:
            return
        self._write_kv_info("  pairs", self.pair_count)
        self._write_kv_info("  extra lines", self.extra_line_count)
        if self.bytes_written:
            self._write_kv_info("  bytes written", self.bytes_written)
        self._write_line(
            style(
                "Finished %s in %.2f sec" % (activity, time.time() - start_time),
                fg="cyan",
            )
        )

    def report_pair(self, key, value):
        Reporter.report_pair(self, key, value)
        if self.show_lines:
            self._write_line("%s %s" % (style("P", fg="green"), key))

    def report_extra_line(self, line):
        Reporter.report_extra_line(self, line)
        if self.show_lines:
            self._write_line("%s %r" % (style("X", fg="magenta"), line))

    def report_write(self, size):
        Reporter.report_write(self, size)
        if self.show_debug_info:
            self._write_kv_info("write", "%d bytes" % size)

    def report_sink_failure(self, exc, written):
        sign = style("E", fg="red")
        self._write_line(
            "%s write failed after %d bytes (%s)" % (sign, written, exc)
        )

    def report_debug_info(self, key, value):
        if self.show_debug_info:
            self._write_kv_info(key, value)


null_reporter = NullReporter()


@LocalProxy
def reporter():
    rv = _reporter_stack.top
    if rv is None:
        rv = null_reporter
    return rv
