import logging
import os
import sys

from ..config import APP_NAME, LOG_DIR, LOG_FILE_NAME, LOG_LEVEL


def get_app_data_dir():
    """Return the writable app data directory for the current user."""
    if LOG_DIR:
        data_dir = LOG_DIR
    else:
        appdata = os.getenv("APPDATA")  # e.g. C:\Users\<user>\AppData\Roaming
        if appdata:
            data_dir = os.path.join(appdata, APP_NAME, "data")
        else:
            data_dir = os.path.join(os.path.expanduser("~"), ".shidu_web_tracker", "data")

    os.makedirs(data_dir, exist_ok=True)
    return data_dir


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that degrades to ASCII when the console can't encode a URL."""

    def emit(self, record):
        try:
            msg = self.format(record)
            try:
                self.stream.write(msg + self.terminator)
            except (UnicodeEncodeError, UnicodeDecodeError):
                self.stream.write(msg.encode("ascii", "replace").decode("ascii") + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logger(name=APP_NAME, level=LOG_LEVEL):
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    if logger.handlers:
        return logger

    # File handler (full detail)
    try:
        log_file = os.path.join(get_app_data_dir(), LOG_FILE_NAME)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        logger.addHandler(fh)
    except OSError as exc:
        sys.stderr.write(f"{APP_NAME}: file logging disabled ({exc})\n")

    # Console handler
    ch = SafeStreamHandler(sys.stdout)
    ch.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    ch.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(ch)

    return logger


def set_console_level(level):
    """Change the console verbosity at runtime (e.g. from --log-level)."""
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    for handler in logger.handlers:
        if isinstance(handler, SafeStreamHandler):
            handler.setLevel(numeric)


logger = setup_logger()
