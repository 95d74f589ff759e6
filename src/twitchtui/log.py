import logging
from pathlib import Path

from platformdirs import user_log_dir
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def log_path() -> Path:
    log_dir = Path(user_log_dir("twitchtui"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "twitchtui.log"


def setup_logging(*, debug: bool = False, console: bool = False) -> None:
    """Configure the root logger.

    The interactive session owns the terminal, so it only logs to a file.
    One-shot commands also log to stderr through rich.
    """
    level = logging.DEBUG if debug else logging.INFO

    handlers: list[logging.Handler] = []
    try:
        file_handler = logging.FileHandler(log_path(), encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)
    except OSError:
        pass

    if console:
        handlers.append(RichHandler(rich_tracebacks=True, level=logging.DEBUG if debug else logging.WARNING))

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO if debug else logging.WARNING)
