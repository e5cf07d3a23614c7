import logging
from pathlib import Path

from schemacompat.config import get_settings

# loggers whose level follows SCHEMACOMPAT_LOG_LEVEL (no explicit level given)
_settings_leveled = set()


def get_logger(name: str, level=None) -> logging.Logger:
    """Get a named logger with standard formatting.

    Example:
        logger = get_logger(__name__)
        logger.info("store read finished")

    When ``level`` is None the level comes from SCHEMACOMPAT_LOG_LEVEL and is
    re-applied by refresh_levels(). Module loggers are created at import, so an
    invalid SCHEMACOMPAT_LOG_LEVEL makes importing schemacompat raise ValueError.

    Returns:
        logging.Logger: Configured logger instance.
    """
    settings = get_settings()
    if level is None:
        level = settings.level
        _settings_leveled.add(name)
    else:
        _settings_leveled.discard(name)
    logger = logging.getLogger(name)

    # avoid adding duplicate handlers if called repeatedly (common in tests)
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logs_dir = Path(settings.log_dir) if settings.log_dir else None
    if logs_dir is not None:
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            # read-only checkout: stream only
            logs_dir = None

    formatter = logging.Formatter(
        '%(asctime)s     || %(name)s \n%(levelname)s   || %(message)s \n',
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if logs_dir is not None:
        filehandler = logging.FileHandler(str(logs_dir / f"{name}.log"), encoding="utf-8")
        filehandler.setFormatter(formatter)
        logger.addHandler(filehandler)

    logger.setLevel(level)
    # stop passing records to the root logger (avoid duplicated messages)
    logger.propagate = False

    logger.debug("\n"
        f"--------------------------------------------------\n"
        f"                    |'{name}' initialized with level {logging.getLevelName(level)}|\n"
        f"                    --------------------------------------------------\n"
    )
    return logger


def refresh_levels() -> int:
    """Re-apply the current settings' level to loggers that follow it.

    Call after reset_settings() when SCHEMACOMPAT_LOG_LEVEL changed; loggers
    created with an explicit level are left alone. Returns how many changed.
    """
    level = get_settings().level
    changed = 0
    for name in sorted(_settings_leveled):
        logger = logging.getLogger(name)
        if logger.level != level:
            logger.setLevel(level)
            changed += 1
    return changed
