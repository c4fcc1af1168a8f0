"""
Logging configuration and utilities.

This module provides centralized logging configuration for the
idlgen package with appropriate formatting and levels.
"""

import logging
import os
from typing import Optional


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the idlgen package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
    """
    if level is None:
        level = os.environ.get("IDLGEN_LOG_LEVEL", "INFO")

    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("idlgen")
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == "idlgen" or name.startswith("idlgen."):
        return logging.getLogger(name)
    return logging.getLogger(f"idlgen.{name}")


class GeneratorLogger:
    """
    Logging for the code generation pipeline.

    Wraps a module logger with messages for the events a template author
    usually wants to see when a generated file looks wrong.
    """

    def __init__(self, name: str):
        """
        Initialize logger for specific component.

        Args:
            name: Component name for logging context
        """
        self.logger = get_logger(name)

    def log_declare(self, decl_count: int, import_count: int) -> None:
        """
        Log a successful template declaration.

        Args:
            decl_count: Number of declarations taken from the snippet
            import_count: Number of literal imports merged from the snippet
        """
        self.logger.debug(
            f"Declared {decl_count} declaration(s) and merged {import_count} literal import(s)"
        )

    def log_alias_collision(self, path: str, wanted: str, resolved: str) -> None:
        """
        Log an import alias that had to be disambiguated.

        Args:
            path: Import path being registered
            wanted: Alias that was already taken
            resolved: Alias assigned instead
        """
        self.logger.debug(f"Import alias '{wanted}' for \"{path}\" is taken, using '{resolved}'")

    def log_ambiguous_literal(self, path: str, name: str) -> None:
        """
        Log a literal import whose local name the same snippet binds to another path.

        Args:
            path: Literal import path
            name: Local name written in the snippet
        """
        self.logger.warning(
            f"Literal import \"{path}\" uses name '{name}' which the same template also "
            f"binds to another import; references to '{name}' are left as written"
        )

    def log_failure(self, stage: str, error: Exception) -> None:
        """
        Log a failed declaration.

        Args:
            stage: Pipeline stage that failed (render, parse)
            error: The raised error
        """
        self.logger.debug(f"Declaration failed during {stage}: {error}")

    def log_write(self, byte_count: int, decl_count: int, import_count: int) -> None:
        """
        Log the final file write.

        Args:
            byte_count: Size of the written file
            decl_count: Number of top-level declarations written
            import_count: Number of imports written
        """
        self.logger.info(
            f"Wrote {byte_count} bytes ({decl_count} declarations, {import_count} imports)"
        )


# Initialize logging on module import
setup_logging()
