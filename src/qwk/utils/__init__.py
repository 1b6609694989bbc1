"""
qwk Utilities

Logging, error types and small text helpers shared across qwk.
"""

from .logging import (
    setup_logging,
    get_logger,
    log_performance,
)

from .error_handling import (
    QwkError,
    ConfigurationError,
    StorageError,
    UsageError,
    ShortcutNotFoundError,
    AgentSpawnError,
    CompletionError,
    handle_storage_operation,
)

from .text import (
    truncate_prompt,
    backup_timestamp,
    read_prompt_from_stdin,
    confirm,
)

__all__ = [
    # Logging utilities
    "setup_logging",
    "get_logger",
    "log_performance",
    
    # Error handling utilities
    "QwkError",
    "ConfigurationError",
    "StorageError",
    "UsageError",
    "ShortcutNotFoundError",
    "AgentSpawnError",
    "CompletionError",
    "handle_storage_operation",
    
    # Text helpers
    "truncate_prompt",
    "backup_timestamp",
    "read_prompt_from_stdin",
    "confirm",
]
