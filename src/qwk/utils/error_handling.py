"""
Error types and error handling helpers for qwk.

Every failure that should reach the user as a one-line message is raised as a
QwkError subclass. The entry point turns those into stderr output and exit
status 1; anything else is a bug and is allowed to propagate.
"""

import functools
import logging
from typing import Any, Callable, Optional, Dict

from ..utils.logging import get_logger


class QwkError(Exception):
    """Base exception for all qwk errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(QwkError):
    """Configuration could not be resolved (e.g. HOME is not set)."""
    pass


class StorageError(QwkError):
    """Reading or writing a file under the config directory failed."""
    pass


class UsageError(QwkError):
    """The command line was well-formed but cannot be honoured."""
    pass


class ShortcutNotFoundError(UsageError):
    """A direct invocation named a shortcut that is not stored."""
    
    def __init__(self, name: str):
        super().__init__(f"Shortcut '{name}' not found", details={"shortcut": name})
        self.name = name


class AgentSpawnError(QwkError):
    """The configured agent executable could not be started."""
    
    def __init__(self, program: str, cause: OSError):
        super().__init__(
            f"Error executing agent '{program}': {cause}",
            details={"program": program, "original_error": str(cause)}
        )
        self.program = program


class CompletionError(QwkError):
    """Shell completion could not be set up."""
    pass


def handle_storage_operation(operation_name: str, logger: Optional[logging.Logger] = None):
    """
    Decorator to standardize file storage error handling.
    
    OSError raised by the wrapped function is logged and re-raised as a
    StorageError whose message carries the underlying cause.
    
    Args:
        operation_name: Human-readable name of the operation
        logger: Optional logger instance (defaults to an operation-specific logger)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            _logger = logger or get_logger(f"qwk.storage.{operation_name.replace(' ', '_')}")
            
            try:
                _logger.debug(f"Starting {operation_name}")
                result = func(*args, **kwargs)
                _logger.debug(f"{operation_name} completed successfully")
                return result
                
            except StorageError:
                raise
                
            except OSError as e:
                _logger.error(f"{operation_name} failed - file system error: {e}")
                raise StorageError(
                    f"Error {operation_name}: {e}",
                    details={"error_type": "filesystem", "original_error": str(e)}
                ) from e
        
        return wrapper
    
    return decorator
