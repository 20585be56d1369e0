import pytest

from kvlines.metaformat import deserialize
from kvlines.metaformat import to_string
from kvlines.reporter import BufferReporter
from kvlines.reporter import CliReporter
from kvlines.reporter import null_reporter
from kvlines.reporter import reporter as current_reporter


def test_null_reporter_is_default():
    assert current_reporter._get_current_object() is null_reporter


def test_null_reporter_keeps_no_counts():
    deserialize(["a"], "a: 1\nb\n")
    assert null_reporter.pair_count == 0
    assert null_reporter.extra_line_count == 0


def test_push_and_pop():
    rep = BufferReporter()
    with rep:
        assert current_reporter._get_current_object() is rep
    assert current_reporter._get_current_object() is null_reporter


def test_process_counts(reporter):
    with reporter.process("decode"):
        deserialize(["a"], "a: 1\nb\na: 2\n")
    assert reporter.get_events("finish-process") == [
        {"activity": "decode", "pairs": 2, "extra_lines": 1, "bytes_written": 0}
    ]


def test_process_resets_counts(reporter):
    deserialize(["a"], "a: 1\n")
    with reporter.process("decode"):
        pass
    (event,) = reporter.get_events("finish-process")
    assert event["pairs"] == 0


def test_encoding_does_not_report(reporter):
    to_string([("a", "1")], ["x"])
    assert reporter.buffer == []


def test_clear(reporter):
    reporter.report_pair("a", "1")
    assert reporter.get_events("pair") == [{"key": "a", "value": "1"}]
    reporter.clear()
    assert reporter.buffer == []


@pytest.mark.parametrize(
    "verbosity, expected, unexpected",
    [
        (0, [], ["Started decode", "pairs", "P a", "keys"]),
        (1, ["Started decode", "Finished decode in", "pairs: 1"], ["P a"]),
        (2, ["P a", "X 'b'"], ["keys: a"]),
        (3, ["keys: a"], []),
    ],
)
def test_cli_reporter_verbosity(capsys, verbosity, expected, unexpected):
    with CliReporter(verbosity=verbosity) as rep:
        with rep.process("decode"):
            rep.report_debug_info("keys", "a")
            deserialize(["a"], "a: 1\nb\n")
    captured = capsys.readouterr()
    assert captured.out == ""
    for text in expected:
        assert text in captured.err
    for text in unexpected:
        assert text not in captured.err


def test_cli_reporter_sink_failure(capsys):
    rep = CliReporter()
    rep.report_sink_failure(BrokenPipeError("pipe closed"), 10)
    assert "write failed after 10 bytes (pipe closed)" in capsys.readouterr().err
