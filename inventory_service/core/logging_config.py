import logging
import logging.config
import os


def setup_logging(log_level="INFO", log_dir="logs", log_format="default"):
    """
    Configures logging for the application.

    Console and rotating file handlers are shared by the application and
    uvicorn loggers. `log_format="json"` switches both handlers to
    python-json-logger output.
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())

    # Create logs directory if it doesn't exist
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    formatter = "json" if log_format == "json" else "default"

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "level": log_level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": formatter,
                "level": log_level,
                "filename": os.path.join(log_dir, "app.log"),
                "maxBytes": 10 * 1024 * 1024, # 10MB
                "backupCount": 5,
                "encoding": "utf8"
            },
        },
        "loggers": {
            "root": {
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": True
            },
            "uvicorn": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False
            },
            "uvicorn.error": {
                "level": "INFO",
                "handlers": ["console", "file"],
                "propagate": False
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console", "file"],
                "propagate": False
            },
            "inventory_service": {  # Application specific logger
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)
    logging.getLogger("inventory_service").info(
        f"Logging configured (level={logging.getLevelName(log_level)}, dir={log_dir}, format={formatter})"
    )
