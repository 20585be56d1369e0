import io

from kvlines.builder import deserializer
from kvlines.builder import serializer
from kvlines.options import Options


def test_serializer_defaults():
    rv = serializer().pairs([("foo", "bar"), ("baz", "123")]).serialize()
    assert rv == "foo: bar\nbaz: 123\n"


def test_serializer_chained():
    rv = (
        serializer()
        .separator("=")
        .newline("\r\n")
        .pairs(iter([("foo", "bar"), ("baz", "123")]))
        .extra_lines(iter(["extra=lines", "and stuff"]))
        .serialize()
    )
    assert rv == "foo=bar\r\nbaz=123\r\nextra=lines\r\nand stuff\r\n"


def test_serializer_only_extra_lines():
    assert serializer().extra_lines(["a", "b"]).serialize() == "a\nb\n"


def test_serializer_empty():
    assert serializer().serialize() == ""


def test_serializer_calls_do_not_mutate():
    base = serializer().separator("=")
    crlf = base.newline("\r\n")
    assert base.options == Options(separator="=")
    assert crlf.options == Options(separator="=", newline="\r\n")
    assert base.pairs([("a", "1")]).serialize() == "a=1\n"
    assert base.serialize() == ""


def test_serializer_dump():
    fp = io.BytesIO()
    written = serializer().newline("\r\n").pairs([("a", "1")]).dump(fp)
    assert fp.getvalue() == b"a: 1\r\n"
    assert written == 6


def test_serializer_with_options():
    s = serializer().with_options(Options("|", ";"))
    assert s.pairs([("a", "b")]).extra_lines(["c"]).serialize() == "a|b;c;"


def test_serializer_repr():
    assert repr(serializer().separator("=")) == (
        "<Serializer separator='=' newline='\\n'>"
    )


def test_deserializer_chained():
    source = "foo=bar\r\nbaz=123\r\nextra=lines\r\nand stuff\r\n"
    data = (
        deserializer()
        .separator("=")
        .newline("\r\n")
        .keys(["foo", "baz"])
        .deserialize(source)
    )
    assert data.pairs == [("foo", "bar"), ("baz", "123")]
    assert data.extra_lines == ["extra=lines", "and stuff"]


def test_deserializer_without_keys():
    data = deserializer().deserialize("foo: bar\n")
    assert data.pairs == []
    assert data.extra_lines == ["foo: bar"]


def test_deserializer_is_reusable():
    d = deserializer().keys(iter(["a"]))
    assert d.deserialize("a: 1\n").pairs == [("a", "1")]
    assert d.deserialize("a: 2\n").pairs == [("a", "2")]


def test_deserializer_repr():
    assert repr(deserializer().keys(["b", "a"])) == (
        "<Deserializer separator=': ' keys=['a', 'b']>"
    )
