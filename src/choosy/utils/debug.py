"""Debug logging utility.

The picker owns the terminal while it runs, so debug lines only go to the
log file. Errors are always logged and also echoed to stderr.
"""

import sys
import traceback
from datetime import datetime

from choosy.utils.config import PickerConfig, get_choosy_dir

_config = None


def _get_config() -> PickerConfig:
    """Get cached config instance."""
    global _config
    if _config is None:
        _config = PickerConfig(get_choosy_dir())
    return _config


def use_config(config: PickerConfig):
    """Log according to ``config`` instead of the config file."""
    global _config
    _config = config


def reload_config():
    """Reload config (call after debug mode changes)."""
    global _config
    _config = None


def _log_to_file(line: str):
    """Append line to debug log file."""
    try:
        log_dir = _config.choosy_dir if _config is not None else get_choosy_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        with open(log_dir / "debug.log", "a") as f:
            f.write(line + "\n")
    except OSError:
        pass


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def debug(category: str, message: str, **kwargs):
    """Log debug message if debug mode is enabled.

    Args:
        category: Category like 'filter', 'nav', 'render', 'event'
        message: Debug message
        **kwargs: Additional key=value pairs to log
    """
    config = _get_config()
    if not config.debug:
        return

    extras = " ".join(f"{k}={v}" for k, v in kwargs.items()) if kwargs else ""
    line = f"[choosy:{category}] {_timestamp()} {message}"
    if extras:
        line += f" | {extras}"

    _log_to_file(line)


def debug_filter(message: str, **kwargs):
    """Log filter-related debug message."""
    debug("filter", message, **kwargs)


def debug_nav(message: str, **kwargs):
    """Log navigation-related debug message."""
    debug("nav", message, **kwargs)


def debug_render(message: str, **kwargs):
    """Log render-related debug message."""
    debug("render", message, **kwargs)


def debug_event(message: str, **kwargs):
    """Log input-event debug message."""
    debug("event", message, **kwargs)


def log_error(category: str, message: str, exc: Exception = None):
    """Log error message ALWAYS (even if debug mode is off).

    Args:
        category: Category like 'pick', 'surface'
        message: Error message
        exc: Optional exception to include traceback
    """
    line = f"[choosy:{category}] {_timestamp()} ERROR: {message}"

    if exc:
        tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
        line += "\n" + "".join(tb)

    _log_to_file(line)

    try:
        print(line, file=sys.stderr)
    except BrokenPipeError:
        pass  # Parent process closed stderr
