"""Debug mode configuration."""

import os
import logging

logger = logging.getLogger(__name__)
_save_count = 0
_debug_mode_enabled = False


def init_debug_mode() -> bool:
    global _debug_mode_enabled
    _debug_mode_enabled = os.environ.get("DEBUG", "").lower() in ("true", "1", "yes", "on")
    
    if _debug_mode_enabled:
        logger.info("🐛 Debug mode \033[92mENABLED\033[0m")
    
    return _debug_mode_enabled


def is_debug_mode() -> bool:
    return _debug_mode_enabled


def increment_save_count(count: int = 1) -> int:
    global _save_count
    _save_count += count
    return _save_count


def get_save_count() -> int:
    return _save_count


def reset_save_count() -> None:
    global _save_count
    _save_count = 0


def get_debug_status() -> dict:
    return {
        "debug_mode": _debug_mode_enabled,
        "save_count": _save_count,
    }
