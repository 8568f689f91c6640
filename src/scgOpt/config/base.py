"""
Base configuration utilities for scgOpt.
"""
import logging
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any, Dict
from dataclasses import asdict

from rich.console import Console
from rich.logging import RichHandler


def config_logger(log_dir: Path = Path("logs")):
    logger = logging.getLogger("scgOpt")
    # clean up existing handlers
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    logger.setLevel(logging.DEBUG)

    # Console: INFO and above
    console = Console()
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(logging.INFO)
    rich_handler.setFormatter(
        logging.Formatter("{levelname:.5s} | {name} - {message}", style="{")
    )
    logger.addHandler(rich_handler)

    # File: DEBUG and above, one file per run
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"scgOpt_{timestamp}.log"

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[{asctime}] {levelname:.5s} | {name}:{funcName}:{lineno} - {message}",
            style="{"
        )
    )
    logger.addHandler(file_handler)

    logger.debug(f"Logging configured - console: INFO+, file: DEBUG+ -> {log_file}")

    return logger


def ensure_path_exists(func):
    """Decorator to ensure the parent directory exists when accessing path properties."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        result = func(*args, **kwargs)
        if isinstance(result, Path):
            if result.suffix:
                result.parent.mkdir(parents=True, exist_ok=True, mode=0o755)
            else:  # It's a directory path
                result.mkdir(parents=True, exist_ok=True, mode=0o755)
        return result
    return wrapper


class ConfigMixin:
    """Shared helpers for configuration dataclasses."""

    def to_dict_with_paths_as_strings(self) -> Dict[str, Any]:
        """
        Convert the config object to a dictionary with all Path objects converted to strings.

        Returns:
            Dictionary representation of the config with all Path objects as strings
        """
        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)
            elif hasattr(value, "value"):  # Enum
                config_dict[key] = value.value
        return config_dict

    def show_config(self, logger: logging.Logger):
        logger.info("=" * 60)
        logger.info(f"{type(self).__name__}")
        logger.info("=" * 60)
        for key, value in self.to_dict_with_paths_as_strings().items():
            logger.info(f"  {key}: {value}")
        logger.info("=" * 60)
