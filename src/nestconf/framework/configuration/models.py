"""
Configuration data models with validation.
"""

import os
import shutil
from typing import Optional

from pydantic import BaseModel, Field, field_validator, ValidationInfo


class LoggingConfiguration(BaseModel):
    """Logging system configuration with validation."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default="text", pattern="^(json|text)$")
    output: str = Field(default="console", pattern="^(console|file|both)$")
    file_path: Optional[str] = Field(default=None, validate_default=True)

    @field_validator('file_path')
    @classmethod
    def validate_file_path(cls, v, info: ValidationInfo):
        """Validate file path when file output is used."""
        if info.data.get('output') in ['file', 'both'] and not v:
            raise ValueError("file_path is required when output is 'file' or 'both'")
        return v


class ViewConfiguration(BaseModel):
    """Introspection rendering configuration."""
    truncate_width: int = Field(default=20, ge=20)
    utf8: bool = True
    pager: str = Field(default="less -r", min_length=1)
    terminal_lines: int = Field(default=24, ge=1)

    @classmethod
    def from_environment(cls) -> "ViewConfiguration":
        """Derive rendering options from LANG, PAGER and the terminal size."""
        size = shutil.get_terminal_size()
        return cls(
            truncate_width=max(size.columns // 4, 20),
            utf8=os.environ.get('LANG', '').lower().endswith('utf-8'),
            pager=os.environ.get('PAGER') or 'less -r',
            terminal_lines=max(size.lines, 1),
        )
