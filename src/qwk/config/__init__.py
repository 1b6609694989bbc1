"""
qwk Configuration

    from qwk.config import load_config

    config = load_config()
    print(config.aliases_file)      # ~/.config/qwk/aliases.json
    print(config.default_agent)     # "claude"
"""

from .loader import ConfigLoader, load_config
from .models import QwkConfig, LogLevel, DEFAULT_AGENT, DEFAULT_PREVIEW_WIDTH
from ..utils.error_handling import ConfigurationError

__all__ = [
    "ConfigLoader",
    "load_config",
    "ConfigurationError",
    "QwkConfig",
    "LogLevel",
    "DEFAULT_AGENT",
    "DEFAULT_PREVIEW_WIDTH",
]
