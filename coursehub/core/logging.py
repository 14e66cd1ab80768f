import logging
import logging.config
from pathlib import Path
from coursehub.core.config import settings

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        },
        "detailed": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "default",
            "stream": "ext://sys.stdout"
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "INFO",
            "formatter": "detailed",
            "filename": "logs/app.log",
            "maxBytes": 10485760,
            "backupCount": 5
        },
        "error_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": "logs/error.log",
            "maxBytes": 10485760,
            "backupCount": 5
        }
    },
    "root": {
        "level": "INFO",
        "handlers": ["console", "file", "error_file"]
    },
    "loggers": {
        "coursehub": {
            "level": "INFO",
            "handlers": ["console", "file", "error_file"],
            "propagate": False
        },
        "coursehub.middleware.logging": {
            "level": "INFO",
            "handlers": ["console", "file"],
            "propagate": False
        },
        "uvicorn.access": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False
        }
    }
}

def build_logging_config(log_dir: str, to_file: bool, level: str) -> dict:
    config = {**LOGGING_CONFIG, "handlers": dict(LOGGING_CONFIG["handlers"]), "loggers": {}}
    file_handlers = ("file", "error_file")

    if to_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        for name in file_handlers:
            handler = dict(config["handlers"][name])
            handler["filename"] = str(Path(log_dir) / Path(handler["filename"]).name)
            config["handlers"][name] = handler
    else:
        for name in file_handlers:
            config["handlers"].pop(name)

    def _keep(handlers):
        return [h for h in handlers if h in config["handlers"]]

    config["root"] = {"level": level, "handlers": _keep(LOGGING_CONFIG["root"]["handlers"])}
    for name, logger_config in LOGGING_CONFIG["loggers"].items():
        config["loggers"][name] = {**logger_config, "handlers": _keep(logger_config["handlers"])}
    config["loggers"]["coursehub"]["level"] = level
    return config

def configure_logging():
    logging.config.dictConfig(
        build_logging_config(settings.LOG_DIR, settings.LOG_TO_FILE, settings.LOG_LEVEL)
    )
