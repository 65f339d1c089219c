# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""Package-wide logger for argsmith."""
import logging

logger = logging.getLogger("argsmith")
