import json

import click

from kvlines.config import Config
from kvlines.exception import ConfigError
from kvlines.utils import unescape


def echo_json(data):
    click.echo(json.dumps(data, indent=2).rstrip())


def verbosityflag(cli):
    return click.option(
        "-v",
        "--verbose",
        "verbosity",
        count=True,
        help="Increases the verbosity of the logging.",
    )(cli)


def validate_escaped(ctx, param, value):
    return unescape(value)


class AliasedGroup(click.Group):

    # pylint: disable=inconsistent-return-statements
    def get_command(self, ctx, cmd_name):
        rv = click.Group.get_command(self, ctx, cmd_name)
        if rv is not None:
            return rv
        matches = [x for x in self.list_commands(ctx) if x.startswith(cmd_name)]
        if not matches:
            return None
        if len(matches) == 1:
            return click.Group.get_command(self, ctx, matches[0])
        ctx.fail("Too many matches: %s" % ", ".join(sorted(matches)))


class Context:
    def __init__(self):
        self._config_path = None
        self._config = None
        self.separator = None
        self.newline = None

    def set_config_path(self, value):
        self._config_path = value
        self._config = None

    def get_config(self):
        if self._config is not None:
            return self._config
        try:
            if self._config_path is not None:
                rv = Config(self._config_path)
            else:
                rv = Config.discover()
        except ConfigError as e:
            raise click.UsageError(e.message) from e
        self._config = rv
        return rv

    def get_options(self):
        return self.get_config().get_options(
            separator=self.separator, newline=self.newline
        )


pass_context = click.make_pass_decorator(Context, ensure=True)
