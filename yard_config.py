"""Settings read from the environment.

YARDCALC_DEBUG  log tokens and every reduction to stderr (default off)
YARDCALC_FOLD   fold sub-expressions while parsing (default on)
"""
import os
from typing import Mapping, NamedTuple, Optional

FALSY = frozenset(["", "0", "false", "no", "off"])


class Settings(NamedTuple):
    debug: bool = False
    fold: bool = True


def env_flag(environ, name, default):
    raw = environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in FALSY


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    return Settings(
        debug=env_flag(environ, "YARDCALC_DEBUG", False),
        fold=env_flag(environ, "YARDCALC_FOLD", True),
    )
