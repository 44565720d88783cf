"""
FILE DESCRIPTION: Foundational module for indexer configuration and logging.
KEY FUNCTIONS/CLASSES: setup_logger, CompanyFormatter, logger
"""

import logging
import sys
import os
from datetime import datetime
from pathlib import Path
from dotenv import load_dotenv

# === CONFIGURATION SECTION ===

# Load .env from the project root
load_dotenv(Path(__file__).resolve().parents[1] / '.env')

# Marker written into every document so the search index can tell which
# application produced it
APP_KEY = "EXT:solr"

# Document type for page records
DOCUMENT_TYPE = "pages"

# Secret mixed into site hashes and variant ids
ENCRYPTION_KEY = os.getenv("INDEXER_ENCRYPTION_KEY", "")

# Base URL of this installation, used for the system hash of variant ids
SYSTEM_URL = os.getenv("INDEXER_SYSTEM_URL", "http://localhost/")

# Upper bound when walking the page tree up to a site root
MAX_ROOTLINE_DEPTH = int(os.getenv("MAX_ROOTLINE_DEPTH", 99))

LOG_LEVEL = os.getenv("INDEXER_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("INDEXER_LOG_FILE") or None


# === LOGGING SECTION ===

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

def setup_logger(name="indexer", log_file=None, level=logging.INFO):
    """
    FLOW: Initializes/Retrieves logger -> Checks for existing handlers to prevent duplicates ->
    Sets propagation for child loggers -> Attaches Console and optional File handlers with CompanyFormatter.
    """
    logger = logging.getLogger(name)

    # Child loggers inherit the level of the root 'indexer' logger
    if name != "indexer":
        logger.propagate = True
        if not logging.getLogger("indexer").handlers:
            setup_logger("indexer", log_file=log_file, level=level)
        return logger

    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = CompanyFormatter()

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

# Global logger instance
logger = setup_logger(log_file=LOG_FILE, level=getattr(logging, LOG_LEVEL, logging.INFO))
