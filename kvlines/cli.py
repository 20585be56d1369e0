import json
from importlib.metadata import version

import click

from kvlines.cli_utils import AliasedGroup
from kvlines.cli_utils import echo_json
from kvlines.cli_utils import pass_context
from kvlines.cli_utils import validate_escaped
from kvlines.cli_utils import verbosityflag
from kvlines.exception import SinkWriteError
from kvlines.metaformat import dump
from kvlines.metaformat import load
from kvlines.reporter import CliReporter
from kvlines.reporter import reporter
from kvlines.utils import atomic_open


def _read_encode_input(fp):
    try:
        data = json.load(fp)
    except ValueError as e:
        raise click.UsageError("Input is not valid JSON: %s" % e) from e
    if not isinstance(data, dict):
        raise click.UsageError("Input must be a JSON object.")

    pairs = []
    for item in data.get("pairs") or ():
        if (
            not isinstance(item, (list, tuple))
            or len(item) != 2
            or not all(isinstance(x, str) for x in item)
        ):
            raise click.UsageError(
                "Pairs must be given as [key, value] lists of strings, got %r."
                % (item,)
            )
        pairs.append((item[0], item[1]))

    extra_lines = data.get("extra_lines") or []
    if not all(isinstance(x, str) for x in extra_lines):
        raise click.UsageError("Extra lines must be strings.")
    return pairs, extra_lines


@click.group(cls=AliasedGroup)
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    help="The config file to use.  Defaults to $KVLINES_CONFIG.",
)
@click.option(
    "--separator",
    default=None,
    callback=validate_escaped,
    help="The key/value separator (overrides the config).",
)
@click.option(
    "--newline",
    default=None,
    callback=validate_escaped,
    help="The line terminator used for encoding.  Backslash escapes "
    'like "\\r\\n" are understood.',
)
@click.version_option(prog_name="kvlines", version=version("kvlines"))
@pass_context
def cli(ctx, config=None, separator=None, newline=None):
    """Encodes and decodes line based key/value text.

    Every line is either "key<separator>value" or a free-form extra
    line.  Decoding only recognizes the keys it is told about; all
    other lines are passed through untouched.
    """
    if config is not None:
        ctx.set_config_path(config)
    ctx.separator = separator
    ctx.newline = newline


@cli.command("encode", short_help="Encodes JSON data into key/value lines.")
@click.argument("input", type=click.File("rb"), default="-")
@click.option(
    "-O",
    "--output-path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write to this file instead of stdout.  The file is replaced "
    "atomically.",
)
@verbosityflag
@pass_context
def encode_cmd(ctx, input, output_path, verbosity):
    """Reads a JSON object of the form

        {"pairs": [["key", "value"], ...], "extra_lines": ["...", ...]}

    from INPUT (stdin by default) and writes the encoded lines.  All
    pairs come first, then the extra lines.

    If the output can not be written the exit code is `1`.  Output that
    went to stdout before the failure is not taken back.
    """
    pairs, extra_lines = _read_encode_input(input)
    options = ctx.get_options()
    encoding = ctx.get_config().get_encoding("encode")

    with CliReporter(verbosity=verbosity):
        with reporter.process("encode"):
            reporter.report_debug_info("separator", repr(options.separator))
            reporter.report_debug_info("newline", repr(options.newline))
            try:
                if output_path is None:
                    out = click.get_binary_stream("stdout")
                    dump(pairs, extra_lines, out, options, encoding=encoding)
                    out.flush()
                else:
                    with atomic_open(output_path, "wb") as f:
                        dump(pairs, extra_lines, f, options, encoding=encoding)
            except SinkWriteError as e:
                raise click.ClickException(e.message) from e


@cli.command("decode", short_help="Decodes key/value lines.")
@click.argument("input", type=click.File("rb"), default="-")
@click.option(
    "-k",
    "--key",
    "keys",
    multiple=True,
    help="A key to recognize.  Can be given more than once and adds to "
    "the keys from the config.",
)
@click.option(
    "as_json",
    "--json/--text",
    default=True,
    help="Print the result as JSON (the default) or as plain text.",
)
@verbosityflag
@pass_context
def decode_cmd(ctx, input, keys, as_json, verbosity):
    """Decodes INPUT (stdin by default).  Lines of the form
    "key<separator>value" with a known key become pairs, every other line
    is reported as an extra line.  Decoding never fails.
    """
    config = ctx.get_config()
    keys = config.get_keys(keys)
    options = ctx.get_options()

    with CliReporter(verbosity=verbosity):
        with reporter.process("decode"):
            reporter.report_debug_info("keys", ", ".join(keys) or "(none)")
            result = load(
                keys, input, options, encoding=config.get_encoding("decode")
            )

    if as_json:
        echo_json(
            {
                "pairs": [list(pair) for pair in result.pairs],
                "extra_lines": result.extra_lines,
            }
        )
        return

    for key, value in result.pairs:
        click.echo("%s: %s" % (click.style(key, fg="green"), value))
    for line in result.extra_lines:
        click.echo("%s %s" % (click.style("|", fg="magenta"), line))


@cli.command("config-info", short_help="Shows the effective configuration.")
@click.option("as_json", "--json", is_flag=True, help="Prints out the data as json.")
@pass_context
def config_info_cmd(ctx, as_json):
    """Prints the settings that encode and decode would use, after
    merging the config file and the command line options.
    """
    config = ctx.get_config()
    options = ctx.get_options()
    data = config.to_json()
    data["separator"] = options.separator
    data["newline"] = options.newline
    if as_json:
        echo_json(data)
        return

    click.echo("File: %s" % (data["filename"] or "(none)"))
    click.echo("Separator: %r" % data["separator"])
    click.echo("Newline: %r" % data["newline"])
    click.echo("Keys: %s" % (", ".join(data["keys"]) or "(none)"))


main = cli
