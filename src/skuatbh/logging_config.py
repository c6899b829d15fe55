"""
Logging configuration for SkuaTBH.

Library modules obtain loggers through get_logger(); nothing here touches
the root logger. Applications opt in to console/file output with
setup_logging().
"""
import logging
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = 'skuatbh'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under the package logger.

    Args:
        name: Usually __name__ of the calling module

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Configure console (and optional file) output for the package logger.

    Calling this more than once replaces the handlers it installed before.

    Args:
        level: Logging level for the package logger
        log_file: Optional path of a log file to write in addition to stderr

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, '_skuatbh_handler', False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._skuatbh_handler = True
        logger.addHandler(handler)

    return logger


def log_prediction(logger: logging.Logger, species: str, egg_volume: float,
                   egg_density: float, dbh: float, confidence: float) -> None:
    """Log the intermediate values of a successful prediction."""
    logger.debug(
        "Prediction %s: VE=%.2f cm3, DE=%.4f g/cm3, DBH=%.2f days, confidence=%.3f",
        species, egg_volume, egg_density, dbh, confidence
    )
