import logging
import os
import sys

import colorlog

from .. import constants

CONSOLE_FORMAT = '[%(levelname).4s] %(name)s: %(message)s'
COLOR_CONSOLE_FORMAT = '%(log_color)s[%(levelname).4s]%(reset)s %(cyan)s%(name)s%(reset)s: %(message)s'
FILE_FORMAT = '%(asctime)s [%(levelname).4s] %(name)s: %(message)s'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def setup_logger(debug: bool = False, module_levels: dict | None = None, log_file: str | None = None):
    """
    Configure the root logger: colored console output on a TTY, an optional
    log file, and per-module levels.

    Handlers are installed only once; later calls just adjust levels.

    Args:
        debug: Enable debug logging level
        module_levels: Per-module log levels, {name or alias: level}
        log_file: Optional path of a file that receives every record
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    if not root.handlers:
        root.addHandler(_console_handler())
        if log_file:
            _add_file_handler(root, log_file)

    if module_levels is None:
        module_levels = parse_module_levels(os.environ.get(constants.LOG_LEVELS_ENV))
    apply_module_levels(module_levels)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    # https://no-color.org/
    if sys.stdout.isatty() and not os.environ.get("NO_COLOR"):
        handler.setFormatter(colorlog.ColoredFormatter(COLOR_CONSOLE_FORMAT, log_colors=LOG_COLORS, reset=True))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _add_file_handler(root: logging.Logger, log_file: str):
    try:
        handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    except OSError as e:
        root.error(f"Failed to create log file handler for '{log_file}': {e}")
        return
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    root.addHandler(handler)
    root.info(f"Logging to file: {log_file}")


def parse_module_levels(value: str | None) -> dict:
    """Parse 'name=LEVEL,name=LEVEL' into a mapping, skipping malformed pairs."""
    module_levels = {}
    for pair in (value or "").split(','):
        name, sep, lvl = pair.partition('=')
        if sep and name.strip():
            module_levels[name.strip()] = lvl.strip().upper()
    return module_levels


def apply_module_levels(module_levels: dict):
    """Set the level of each named logger; unknown levels are reported and skipped."""
    for name, lvl_str in module_levels.items():
        lvl = logging.getLevelName(lvl_str.upper())
        if not isinstance(lvl, int):
            logging.warning(f"Ignoring unknown log level '{lvl_str}' for '{name}'")
            continue
        logging.getLogger(_normalize_module_name(name)).setLevel(lvl)


def _normalize_module_name(name: str) -> str:
    """Expand an alias (see constants.LOG_ALIAS_MAP) or prefix a bare package module with 'dexpreopt.'."""
    if name in constants.LOG_ALIAS_MAP:
        return constants.LOG_ALIAS_MAP[name]
    if name.split('.', 1)[0] in constants.KNOWN_TOP_MODULES:
        return f'dexpreopt.{name}'
    return name
