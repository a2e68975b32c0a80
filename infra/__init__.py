from .paths import CONFIG_PATH, LOG_DIR, PROJECT_ROOT, SESSION_STORAGE_DIR, STORAGE_DIR
from .logger import bind_session, configure_from_config, configure_logging, get_logger

__all__ = [
    "PROJECT_ROOT",
    "STORAGE_DIR",
    "LOG_DIR",
    "SESSION_STORAGE_DIR",
    "CONFIG_PATH",
    "bind_session",
    "configure_from_config",
    "configure_logging",
    "get_logger",
]
