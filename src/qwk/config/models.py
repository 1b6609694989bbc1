"""
Pydantic models for qwk configuration.

The configuration is resolved once per invocation and passed explicitly to
every store and handler, so tests can point qwk at a temporary directory
without touching the process environment.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_AGENT = "claude"
DEFAULT_PREVIEW_WIDTH = 60


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class QwkConfig(BaseModel):
    """Resolved configuration for one qwk invocation."""
    
    home: Path = Field(description="User home directory")
    config_dir: Optional[Path] = Field(default=None, description="Directory holding qwk state")
    shell: Optional[str] = Field(default=None, description="Value of $SHELL, used for completion setup")
    
    default_agent: str = Field(default=DEFAULT_AGENT, description="Agent command used when none is stored")
    preview_width: int = Field(default=DEFAULT_PREVIEW_WIDTH, ge=1, le=1000, description="Prompt preview width in --list")
    
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    verbose_logging: bool = Field(default=False, description="Enable verbose debug logging")
    log_file: Optional[str] = Field(default=None, description="Optional JSON log file")
    
    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v
    
    @field_validator('log_file')
    @classmethod
    def expand_log_file(cls, v):
        """Expand user home directory in the log file path."""
        if v:
            return str(Path(v).expanduser())
        return v
    
    @model_validator(mode='after')
    def default_config_dir(self):
        """Place state under ~/.config/qwk unless a directory was given."""
        if self.config_dir is None:
            self.config_dir = self.home / ".config" / "qwk"
        else:
            self.config_dir = self.config_dir.expanduser()
        return self
    
    @property
    def aliases_file(self) -> Path:
        return self.config_dir / "aliases.json"
    
    @property
    def agent_file(self) -> Path:
        return self.config_dir / "agent"
    
    @property
    def first_run_marker(self) -> Path:
        return self.config_dir / ".first_run_complete"
    
    @property
    def settings_file(self) -> Path:
        return self.config_dir / "config.yaml"
    
    def backup_file(self, timestamp: str) -> Path:
        """Path of the aliases backup taken at ``timestamp``."""
        return self.config_dir / f"aliases_backup_{timestamp}.json"
