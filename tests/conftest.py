import textwrap

import pytest

from kvlines.config import CONFIG_ENV_VAR
from kvlines.reporter import BufferReporter


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    """Keep a ``$KVLINES_CONFIG`` from the developer's shell out of the
    tests.
    """
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture(scope="function")
def reporter(request):
    reporter = BufferReporter(verbosity=4)
    reporter.push()
    request.addfinalizer(reporter.pop)
    return reporter


@pytest.fixture(scope="function")
def write_config(tmp_path):
    """Returns a function which writes an ini file and returns its path."""

    def write_config(text, name="kvlines.ini"):
        filename = tmp_path / name
        filename.write_text(textwrap.dedent(text), "utf-8")
        return str(filename)

    return write_config


@pytest.fixture(scope="function")
def crlf_config(write_config):
    return write_config(
        """
        [format]
        separator = "="
        newline = "\\r\\n"

        [decode]
        keys = foo, baz
        """
    )
