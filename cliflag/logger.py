# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""Package-wide logger for cliflag."""
import logging

logger: logging.Logger = logging.getLogger("cliflag")
