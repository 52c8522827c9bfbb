import os
import sys

from loguru import logger

from tiketloka.core.config import LOG_DIR, LOG_LEVEL, LOG_TO_FILES

_configured = False


def _channel(name):
    return lambda record: record["extra"].get("log_type") == name


def configure_logging(log_dir: str = LOG_DIR, to_files: bool = LOG_TO_FILES):
    global _configured

    if _configured:
        return logger

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=LOG_LEVEL,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[log_type]} | {message}",
    )

    if to_files:
        # Create folder if missing
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        # General application log
        logger.add(
            f"{log_dir}/app.log",
            rotation="1 week",
            retention="4 weeks",
            level="INFO",
            enqueue=True,
            format="{time} | {level} | {message}"
        )

        # Cart / pricing logs
        logger.add(
            f"{log_dir}/cart.log",
            rotation="1 week",
            retention="4 weeks",
            level="INFO",
            enqueue=True,
            filter=_channel("cart"),
            format="{time} | {level} | {message}"
        )

        # Booking logs
        logger.add(
            f"{log_dir}/bookings.log",
            rotation="1 week",
            retention="4 weeks",
            level="INFO",
            enqueue=True,
            filter=_channel("booking"),
            format="{time} | {level} | {message}"
        )

        # Payment logs
        logger.add(
            f"{log_dir}/payments.log",
            rotation="1 week",
            retention="4 weeks",
            level="INFO",
            enqueue=True,
            filter=_channel("payment"),
            format="{time} | {level} | {message}"
        )

        # Error logs
        logger.add(
            f"{log_dir}/errors.log",
            rotation="1 week",
            retention="8 weeks",
            level="ERROR",
            enqueue=True,
        )

    logger.configure(extra={"log_type": "app"})
    _configured = True
    return logger


def get_logger(log_type: str = "app"):
    configure_logging()
    return logger.bind(log_type=log_type)
