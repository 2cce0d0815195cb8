from pathlib import Path
import logging
import logging.config
import os

from app.core.config import settings


def _rotating(filename: Path, level: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "default",
        "level": level,
        "filename": str(filename),
        "maxBytes": 5 * 1024 * 1024,
        "backupCount": 3,
        "encoding": "utf-8",
    }


def configure_logging():
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": log_level,
            },
            "file": _rotating(log_dir / "app.log", log_level),
            "lifecycle_file": _rotating(log_dir / "lifecycle.log", log_level),
        },
        "root": {
            "level": log_level,
            "handlers": ["console", "file"],
        },
        "loggers": {
            "lifecycle": {
                "level": log_level,
                "handlers": ["console", "lifecycle_file"],
                "propagate": False,
            },
            # Scoring runs inside submissions, keep it next to lifecycle events
            "scoring": {
                "level": log_level,
                "handlers": ["console", "lifecycle_file"],
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(config)
