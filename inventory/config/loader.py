from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from inventory.config.schemas import AppConfig, SeedData, raise_config_error


class ConfigLoader:
    @staticmethod
    def load_yaml(path: Path | str) -> dict[str, Any]:
        source = Path(path)
        with source.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
        if not isinstance(payload, dict):
            raise ValueError(f"YAML root must be a mapping: {source}")
        return payload

    @classmethod
    def load_app_config(cls, path: Path | str | None = None) -> AppConfig:
        if path is None or not Path(path).exists():
            return AppConfig()
        payload = cls.load_yaml(path)
        try:
            return AppConfig.model_validate(payload)
        except ValidationError as error:
            raise raise_config_error("inventory.yaml", error) from error

    @classmethod
    def load_seed(cls, path: Path | str) -> SeedData:
        payload = cls.load_yaml(path)
        try:
            return SeedData.model_validate(payload)
        except ValidationError as error:
            raise raise_config_error(Path(path).name, error) from error
