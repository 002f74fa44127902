"""Centralized path definitions for radiomail.

This module provides a single source of truth for all application paths.
The base directory can be moved with the ``RADIOMAIL_HOME`` environment
variable.
"""

import os
from pathlib import Path

# Base application directory
RADIOMAIL_DIR = Path(os.environ.get("RADIOMAIL_HOME") or Path.home() / ".radiomail")

# Subdirectories
LOGS_DIR = RADIOMAIL_DIR / "logs"
MAILBOX_DIR = RADIOMAIL_DIR / "mailbox"
OUTBOX_DIR = MAILBOX_DIR / "out"
FORMS_DIR = RADIOMAIL_DIR / "forms"

# Specific files
CONFIG_PATH = RADIOMAIL_DIR / "config.json"
