import logging
import sys
from typing import Dict, Optional, Union

from tqdm import tqdm

from seo_grader.utils.config_loader import get_nested_config

Level = Union[str, int]


class LogWithTqdm(logging.Handler):
    """
    Logging handler that writes through `tqdm.write()` so log lines
    do not tear through the batch progress bar.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg, file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def _to_level(level: Level, fallback: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level


def configure_logger(
        general_level: Optional[Level] = None,
        module_specific_levels: Optional[Dict[str, Level]] = None,
        silenced_loggers: Optional[Dict[str, Level]] = None
) -> None:
    """
    Configures the root logger and specific module loggers with a
    TQDM-friendly handler. Arguments left as None are read from settings.json.
    """
    if general_level is None:
        general_level = get_nested_config("logging.general_level", "INFO")
    if module_specific_levels is None:
        module_specific_levels = get_nested_config("logging.module_levels", {})
    if silenced_loggers is None:
        silenced_loggers = get_nested_config("logging.silenced", {})

    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.INFO))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, level in module_specific_levels.items():
        logging.getLogger(name).setLevel(_to_level(level, logging.INFO))

    # Muzzle noisy loggers by setting their level high.
    for name, level in silenced_loggers.items():
        logging.getLogger(name).setLevel(_to_level(level, logging.CRITICAL))
