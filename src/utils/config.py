"""Configuration helpers for cdn-catalog."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, model_validator


class AppConfig(BaseModel):
    """Application level configuration."""

    owner: str = "jsdelivr"
    repo: str = "jsdelivr"
    ref: str = "master"
    root_dir: str = "files"
    metadata_filename: str = "info.ini"
    api_base: str = "https://api.github.com"
    raw_base: Optional[str] = None
    subtree_concurrency: int = Field(default=8, ge=1)
    metadata_concurrency: int = Field(default=4, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0)
    output_dir: Path = Field(default=Path("./outputs/catalog"))
    target: str = "jsdelivr"
    token_env: str = "GITHUB_TOKEN"

    @model_validator(mode="after")
    def _derive_raw_base(self) -> "AppConfig":
        if self.raw_base is None:
            self.raw_base = (
                f"https://raw.githubusercontent.com/{self.owner}/{self.repo}/{self.ref}/{self.root_dir}/"
            )
        elif not self.raw_base.endswith("/"):
            self.raw_base += "/"
        return self


def load_config(path: Path) -> AppConfig:
    """Load configuration from a YAML file."""

    data: Dict[str, Any] = {}
    if path.exists():
        data = yaml.safe_load(path.read_text()) or {}
    return AppConfig(**data)
