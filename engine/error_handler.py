"""
Centralized error handling and logging system.

This module provides:
- The project logger (file + console handlers)
- Custom exception types for data loading and configuration
- A helper to log exceptions with context

Character generation itself never raises: lookup misses become None fields
and impossible filters fall back to unconstrained draws. Exceptions are only
raised while loading reference data or configuration.
"""
import logging
import traceback
from pathlib import Path
from typing import Dict, List, Optional
from datetime import datetime

# Setup logging directory
LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_DIR.mkdir(exist_ok=True)

# Configure logger
logger = logging.getLogger("npcgen")
logger.setLevel(logging.DEBUG)

# Prevent duplicate handlers
if not logger.handlers:
    # File handler for detailed logs
    log_file = LOG_DIR / f"npcgen_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )

    # Console handler for warnings/errors
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter('%(levelname)s: %(message)s')
    )

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)


class GeneratorError(Exception):
    """Base exception for generator-specific errors."""
    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class ReferenceDataError(GeneratorError):
    """Reference data failed to load or did not validate."""
    def __init__(
        self,
        message: str,
        problems: Optional[Dict[str, List[str]]] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message, user_message)
        self.problems = problems or {}


class ConfigError(GeneratorError):
    """Error while reading or writing generator configuration."""
    pass


def log_error(error: Exception, context: str = "") -> None:
    """
    Log an error with context information.

    Args:
        error: The exception that occurred
        context: Where the error occurred (e.g., "load_reference_data")
    """
    error_type = type(error).__name__
    error_msg = str(error)
    trace = traceback.format_exc()

    logger.error(
        f"Error in {context}: {error_type}: {error_msg}\n{trace}",
        exc_info=True
    )
