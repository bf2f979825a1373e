import logging

import config_paths


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler = None


def configure_logging(level="INFO", path=None):
    """Send log records to a file; the terminal belongs to curses."""
    global _handler
    path = path or config_paths.LOG_PATH
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if _handler is not None:
        root.removeHandler(_handler)
        _handler.close()

    _handler = logging.FileHandler(path, encoding="utf-8")
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
    return _handler
