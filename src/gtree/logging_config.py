# Licensed under the Apache License, Version 2.0
import logging
import os

def setup_logging() -> None:
    """Configure root logging to stderr; level comes from GTREE_LOG_LEVEL (default WARNING)."""
    level_name = os.getenv("GTREE_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    logging.basicConfig(level=level, format=fmt)
