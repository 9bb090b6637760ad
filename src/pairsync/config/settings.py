"""Configuration settings and models for pairsync."""

from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from ..utils.file_utils import FileHelper


class PairConfig(BaseModel):
    """Configuration for one sync pair."""
    name: str
    first: str
    second: str
    need_backup: bool = False
    backup_dir: str = "backup"
    enabled: bool = True

    @field_validator('first', 'second')
    def validate_path_not_empty(cls, v):
        if not v.strip():
            raise ValueError('file path must not be empty')
        return v

    @model_validator(mode='after')
    def validate_same_file_name(self):
        if not FileHelper.same_base_name(self.first, self.second):
            raise ValueError(
                f"pair '{self.name}' must name the same file in both locations "
                f"(got '{Path(self.first).name}' and '{Path(self.second).name}')"
            )
        return self


class SyncOptions(BaseModel):
    """Synchronization options shared by all pairs."""
    atomic_replace: bool = True
    mtime_tolerance: float = Field(default=0.0, ge=0)  # seconds
    create_backup_dir: bool = True


class LoggingConfig(BaseModel):
    """Logging options."""
    level: str = "INFO"
    file: Optional[str] = None
    console: bool = True
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5

    @field_validator('level')
    def validate_level(cls, v):
        if v.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f'unknown log level: {v}')
        return v.upper()


class SyncConfig(BaseModel):
    """Main configuration class."""
    pairs: List[PairConfig] = Field(default_factory=list)
    sync_options: SyncOptions = Field(default_factory=SyncOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('pairs')
    def validate_unique_names(cls, v):
        names = [pair.name for pair in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate pair names: {', '.join(duplicates)}")
        return v

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "SyncConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

    def to_yaml(self, config_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(
                self.model_dump(exclude_none=True),
                f,
                default_flow_style=False,
                indent=2,
                sort_keys=False,
            )

    def get_pair_by_name(self, name: str) -> Optional[PairConfig]:
        """Get pair configuration by name."""
        for pair in self.pairs:
            if pair.name == name:
                return pair
        return None

    def get_enabled_pairs(self) -> List[PairConfig]:
        """Get all enabled pairs."""
        return [pair for pair in self.pairs if pair.enabled]

    @classmethod
    def sample(cls) -> "SyncConfig":
        """Build the example configuration written by ``pairsync init``."""
        return cls(
            pairs=[
                PairConfig(
                    name='notes',
                    first='/home/user/Documents/notes.txt',
                    second='/media/usb/notes.txt',
                    need_backup=True,
                    backup_dir='backup',
                ),
            ],
            logging=LoggingConfig(file='logs/pairsync.log'),
        )
