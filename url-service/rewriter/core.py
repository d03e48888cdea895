"""
FILE DESCRIPTION: Foundational module for service configuration and logging.
KEY FUNCTIONS/CLASSES: setup_logger, CompanyFormatter, configuration constants
"""

import logging
import sys
import os
from datetime import datetime
from pathlib import Path
from dotenv import load_dotenv

# === CONFIGURATION SECTION ===

# Load .env from the repository root
load_dotenv(Path(__file__).resolve().parents[2] / '.env')

# HTTP listener
HOST = os.getenv("URL_SERVICE_HOST", "0.0.0.0")
PORT = int(os.getenv("URL_SERVICE_PORT", 8080))
ENDPOINT_PATH = "/process-url"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None

# Domain family handled by the redirection rewrite
DOMAIN_SUFFIX = "byfood.com"
REDIRECT_HOST = "www.byfood.com"
DEFAULT_SCHEME = "https"


# === LOGGING SECTION ===

ROOT_LOGGER = "url_service"


class CompanyFormatter(logging.Formatter):
    """
    FLOW: Receives a log record -> Extracts timestamp -> Formats according to company standard
    (e.g., [ Tue Jan 06 05:32:41 AM UTC 2026 ]) -> Prepends level and context -> Returns final string.
    """
    def format(self, record):
        dt = datetime.fromtimestamp(record.created)
        timestamp = dt.strftime("%a %b %d %I:%M:%S %p UTC %Y")
        context = getattr(record, 'context', 'root')
        return f"[ {timestamp} ] : {record.levelname} : {context} : {record.getMessage()}"


def setup_logger(name=ROOT_LOGGER, log_file=None, level=logging.INFO):
    """
    FLOW: Initializes/Retrieves logger -> Checks for existing handlers to prevent duplicates ->
    Sets propagation for child loggers -> Attaches Console and optional File handlers with CompanyFormatter.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    if name != ROOT_LOGGER:
        logger.propagate = True
        setup_logger(ROOT_LOGGER, log_file=log_file, level=level)
        return logger

    formatter = CompanyFormatter()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def resolve_level(name):
    """Map a level name like 'debug' to its logging constant, defaulting to INFO."""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO
