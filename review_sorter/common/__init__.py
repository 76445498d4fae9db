# Common utilities
from .config_loader import (
    load_config,
    load_settings,
    load_translations,
)
from .log_config import setup_logging
