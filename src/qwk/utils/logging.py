"""
Logging setup for qwk.

qwk is a short-lived command that mostly prints user-facing text, so logging
is reserved for diagnostics: warnings about recoverable problems (a corrupt
aliases file, a failed first-run setup) and debug traces when verbose logging
is enabled. Console records go to stderr so that completion output on stdout
stays clean.
"""

import os
import sys
import json
import time
import logging
import logging.handlers
from pathlib import Path
from typing import Dict
from contextlib import contextmanager
from datetime import datetime


class Colors:
    """ANSI color codes for console output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    BRIGHT_BLACK = '\033[90m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that adds colors to console output based on log level."""
    
    LEVEL_COLORS = {
        'DEBUG': Colors.BRIGHT_BLACK,
        'INFO': Colors.BRIGHT_BLUE,
        'WARNING': Colors.BRIGHT_YELLOW,
        'ERROR': Colors.BRIGHT_RED,
        'CRITICAL': Colors.BRIGHT_MAGENTA + Colors.BOLD,
    }
    
    def __init__(self, use_colors=True, stream=None):
        """Initialize the formatter.
        
        Args:
            use_colors: Whether to use colors in output
            stream: Stream the handler writes to, checked for tty support
        """
        self.stream = stream or sys.stderr
        self.use_colors = use_colors and self._supports_color()
        
        # Console format: level | module | message
        super().__init__('%(levelname)s | %(name)s | %(message)s')
    
    def _supports_color(self):
        """Check if the terminal supports color output."""
        if not hasattr(self.stream, 'isatty') or not self.stream.isatty():
            return False
        
        if os.getenv('NO_COLOR'):
            return False
        
        if os.getenv('FORCE_COLOR'):
            return True
            
        term = os.getenv('TERM', '').lower()
        return 'color' in term or term in ('xterm', 'xterm-256color', 'screen', 'linux')
    
    def format(self, record):
        """Format the log record with colors if enabled."""
        formatted = super().format(record)
        
        if not self.use_colors:
            return formatted
        
        color = self.LEVEL_COLORS.get(record.levelname, '')
        if color:
            formatted = f"{color}{formatted}{Colors.RESET}"
        
        return formatted


class JSONFileFormatter(logging.Formatter):
    """Formatter that outputs structured JSON logs for file storage."""
    
    def format(self, record):
        """Format the log record as JSON."""
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'module': record.name,
            'message': record.getMessage(),
            'extra': {
                'filename': record.filename,
                'lineno': record.lineno,
                'funcName': record.funcName,
                'process': record.process,
            },
        }
        
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)
        
        return json.dumps(log_entry, default=str)


class PerformanceTimer:
    """Context manager that logs how long an operation took."""
    
    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time = None
        self.end_time = None
    
    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.log(self.level, f"Starting {self.operation}")
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        duration = self.end_time - self.start_time
        
        if exc_type is None:
            self.logger.log(self.level, f"Completed {self.operation} in {duration:.3f}s")
        else:
            self.logger.log(self.level, f"Failed {self.operation} after {duration:.3f}s")
    

class StderrHandler(logging.StreamHandler):
    """StreamHandler that always writes to the current sys.stderr."""
    
    def __init__(self):
        super().__init__(sys.stderr)
    
    @property
    def stream(self):
        return sys.stderr
    
    @stream.setter
    def stream(self, value):
        pass


class LoggingManager:
    """Central logging manager for qwk."""
    
    def __init__(self):
        self._initialized = False
        self._loggers: Dict[str, logging.Logger] = {}
    
    def setup_logging(self, config, verbose: bool = False, force_reinit: bool = False):
        """Setup logging based on configuration.
        
        Args:
            config: QwkConfig instance
            verbose: Enable verbose logging (overrides config)
            force_reinit: Force reinitialization even if already setup
        """
        if self._initialized and not force_reinit:
            return
        
        if verbose or config.verbose_logging:
            log_level = logging.DEBUG
        else:
            log_level = getattr(logging, config.log_level.value.upper(), logging.WARNING)
        
        # Only the qwk logger tree is configured; the root logger is left alone
        qwk_logger = logging.getLogger('qwk')
        qwk_logger.setLevel(log_level)
        qwk_logger.propagate = False
        
        for handler in qwk_logger.handlers[:]:
            qwk_logger.removeHandler(handler)
            handler.close()
        
        self._setup_console_handler(qwk_logger, log_level)
        
        if config.log_file:
            self._setup_file_handler(qwk_logger, Path(config.log_file), log_level)
        
        self._initialized = True
        
        logger = self.get_logger('qwk.logging')
        logger.debug(f"Log level: {logging.getLevelName(log_level)}")
        logger.debug(f"Config directory: {config.config_dir}")
    
    def _setup_console_handler(self, logger: logging.Logger, log_level: int):
        """Setup console logging handler on stderr."""
        console_handler = StderrHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ColoredConsoleFormatter(use_colors=True, stream=sys.stderr))
        logger.addHandler(console_handler)
    
    def _setup_file_handler(self, logger: logging.Logger, log_file: Path, log_level: int):
        """Setup file logging handler with rotation."""
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=1024 * 1024,
                backupCount=3,
                encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(JSONFileFormatter())
            logger.addHandler(file_handler)
            
        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)
    
    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger instance for the given name.
        
        Args:
            name: Logger name (typically __name__)
            
        Returns:
            Logger instance
        """
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        
        return self._loggers[name]

# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(config, verbose: bool = False, force_reinit: bool = False):
    """Setup logging based on configuration.
    
    Args:
        config: QwkConfig instance
        verbose: Enable verbose logging
        force_reinit: Force reinitialization
    """
    _logging_manager.setup_logging(config, verbose, force_reinit)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name."""
    return _logging_manager.get_logger(name)


@contextmanager
def log_performance(operation: str, level: int = logging.DEBUG):
    """Context manager for timing an operation at the given log level.
    
    Yields:
        PerformanceTimer instance
    """
    timer = PerformanceTimer(get_logger('qwk.performance'), operation, level)
    with timer:
        yield timer
