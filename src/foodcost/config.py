"""
Food cost configuration management.

Supports loading from YAML files, environment variables, and keyword overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator


class ThresholdConfig(BaseModel):
    """Food cost percentage band considered healthy."""

    low_food_cost_pct: float = Field(default=28.0, ge=0, description="Below this, pricing may be too high")
    high_food_cost_pct: float = Field(default=35.0, ge=0, description="Above this, costs need attention")

    @model_validator(mode="after")
    def _check_band(self) -> ThresholdConfig:
        if self.low_food_cost_pct > self.high_food_cost_pct:
            raise ValueError("low_food_cost_pct must not exceed high_food_cost_pct")
        return self


class FoodCostConfig(BaseModel):
    """Root configuration for the food cost calculator."""

    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)

    # Storage
    data_dir: str = Field(default="./foodcost_data", description="Directory for ingredient/recipe JSON files")

    # Display
    currency_symbol: str = Field(default="฿")
    decimals: int = Field(default=2, ge=0, le=6)

    log_level: str = Field(default="WARNING")

    @property
    def ingredients_path(self) -> Path:
        return Path(self.data_dir) / "ingredients.json"

    @property
    def recipes_path(self) -> Path:
        return Path(self.data_dir) / "recipes.json"

    @classmethod
    def load(cls, config_path: str | None = None, **overrides: Any) -> FoodCostConfig:
        """Load configuration from file, env vars, and overrides.

        Priority: overrides > env vars > config file > defaults.
        """
        data: dict[str, Any] = {}

        # 1. Load from YAML file if provided
        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

        # 2. Override from environment variables
        env_dir = os.environ.get("FOODCOST_DATA_DIR")
        env_symbol = os.environ.get("FOODCOST_CURRENCY_SYMBOL")
        env_level = os.environ.get("FOODCOST_LOG_LEVEL")

        if env_dir:
            data["data_dir"] = env_dir
        if env_symbol:
            data["currency_symbol"] = env_symbol
        if env_level:
            data["log_level"] = env_level.upper()

        # 3. Apply keyword overrides
        data.update(overrides)

        return cls.model_validate(data)
