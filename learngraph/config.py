"""
Settings for the graph build.

Precedence (lowest to highest): defaults, .env / environment variables,
optional YAML config file, command-line flags (applied by the caller).
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Project root (learngraph/config.py -> project root)
PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_INPUT = Path("data") / "resources.csv"
DEFAULT_OUTPUT = Path("data") / "graph.json"

ENV_PREFIX = "LEARNGRAPH_"
ENV_KEYS = {
    "input_path": f"{ENV_PREFIX}INPUT",
    "output_path": f"{ENV_PREFIX}OUTPUT",
    "report_path": f"{ENV_PREFIX}REPORT",
    "delimiter": f"{ENV_PREFIX}DELIMITER",
    "log_level": f"{ENV_PREFIX}LOG_LEVEL",
}


class Settings(BaseModel):
    input_path: Path = DEFAULT_INPUT
    output_path: Path = DEFAULT_OUTPUT
    report_path: Optional[Path] = None
    delimiter: str = ","
    log_level: str = "INFO"

    @field_validator('delimiter')
    @classmethod
    def single_char_delimiter(cls, v):
        if len(v) != 1:
            raise ValueError('delimiter must be a single character')
        return v

    @field_validator('log_level')
    @classmethod
    def known_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f'Unknown log level: {v}')
        return level

    def resolve_paths(self, root: Path) -> "Settings":
        """Return a copy with relative paths anchored at root."""
        def anchor(p: Optional[Path]) -> Optional[Path]:
            if p is None or p.is_absolute():
                return p
            return root / p

        return self.model_copy(update={
            'input_path': anchor(self.input_path),
            'output_path': anchor(self.output_path),
            'report_path': anchor(self.report_path),
        })


def _env_overrides() -> dict[str, Any]:
    return {
        key: os.environ[env_name]
        for key, env_name in ENV_KEYS.items()
        if os.environ.get(env_name)
    }


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """
    Load settings overrides from a YAML file.

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return data


def load_settings(
    config_path: Path | None = None,
    project_root: Path = PROJECT_ROOT,
    **overrides: Any
) -> Settings:
    """
    Build settings from defaults, environment, YAML and explicit overrides.

    Args:
        config_path: Optional YAML file with settings keys
        project_root: Base for relative paths and the .env file
        **overrides: Highest-precedence values (None values are ignored)
    """
    load_dotenv(project_root / ".env")

    values: dict[str, Any] = {}
    values.update(_env_overrides())
    if config_path is not None:
        values.update(load_yaml_config(Path(config_path)))
    values.update({k: v for k, v in overrides.items() if v is not None})

    return Settings(**values).resolve_paths(project_root)
