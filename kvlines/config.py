import copy
import os

from inifile import IniFile

from kvlines.exception import ConfigError
from kvlines.options import DEFAULT_NEWLINE
from kvlines.options import DEFAULT_SEPARATOR
from kvlines.options import Options
from kvlines.utils import split_key_list
from kvlines.utils import unique_everseen


CONFIG_ENV_VAR = "KVLINES_CONFIG"

DEFAULT_CONFIG = {
    "FORMAT": {
        "separator": DEFAULT_SEPARATOR,
        "newline": DEFAULT_NEWLINE,
    },
    "DECODE": {
        "keys": [],
        "encoding": "utf-8",
    },
    "ENCODE": {
        "encoding": "utf-8",
    },
}


def update_config_from_ini(config, inifile):
    # Values come back unquoted and unescaped, so ``newline = "\r\n"``
    # yields an actual CRLF.
    for section_name in ("FORMAT", "DECODE", "ENCODE"):
        section_config = inifile.section_as_dict(section_name.lower())
        keys = section_config.pop("keys", None)
        config[section_name].update(section_config)
        if keys is not None:
            config[section_name]["keys"] = split_key_list(keys)


def discover_config_file():
    """Returns the config file named by ``$KVLINES_CONFIG`` or `None`."""
    return os.environ.get(CONFIG_ENV_VAR) or None


class Config:
    def __init__(self, filename=None):
        self.filename = filename
        self.values = copy.deepcopy(DEFAULT_CONFIG)

        if filename is not None:
            if not os.path.isfile(filename):
                raise ConfigError('Config file "%s" does not exist' % filename)
            try:
                inifile = IniFile(filename)
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigError(
                    'Could not read config file "%s": %s' % (filename, e)
                ) from e
            update_config_from_ini(self.values, inifile)

    @classmethod
    def discover(cls):
        return cls(discover_config_file())

    def get_options(self, separator=None, newline=None):
        """Returns the effective :class:`~kvlines.options.Options`.
        Explicit arguments win over the config file.
        """
        fmt = self.values["FORMAT"]
        return Options(fmt["separator"], fmt["newline"]).replace(
            separator=separator, newline=newline
        )

    def get_keys(self, extra_keys=()):
        """Returns the decode allow-list: the configured keys followed by
        `extra_keys`, without repeats.
        """
        keys = list(self.values["DECODE"]["keys"]) + list(extra_keys)
        return list(unique_everseen(keys))

    def get_encoding(self, section):
        return self.values[section.upper()]["encoding"]

    def to_json(self):
        return {
            "filename": self.filename,
            "separator": self.values["FORMAT"]["separator"],
            "newline": self.values["FORMAT"]["newline"],
            "keys": self.get_keys(),
            "decode_encoding": self.get_encoding("decode"),
            "encode_encoding": self.get_encoding("encode"),
        }

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self.filename)
