from __future__ import annotations
from pydantic import BaseModel, Field, model_validator
from typing import Optional
import os, yaml
from dotenv import load_dotenv

from weightnorm.domain.portfolio.types import BPS_DENOMINATOR, AssetSpec

class NormalizerCfg(BaseModel):
    target_bps: int = Field(default=BPS_DENOMINATOR, gt=0)

class AssetCfg(BaseModel):
    symbol: str
    min_weight: int = Field(default=0, ge=0)
    max_weight: int = Field(default=BPS_DENOMINATOR, ge=0)
    active: bool = True

    @model_validator(mode="after")
    def _bounds_ordered(self) -> "AssetCfg":
        if self.min_weight > self.max_weight:
            raise ValueError(
                f"{self.symbol}: min_weight {self.min_weight} > max_weight {self.max_weight}"
            )
        return self

    def to_spec(self) -> AssetSpec:
        return AssetSpec(
            symbol=self.symbol,
            min_weight=self.min_weight,
            max_weight=self.max_weight,
            active=self.active,
        )

class PortfolioCfg(BaseModel):
    allocator: str = "equal_weight"     # plugin name
    balancer: str = "threshold"         # plugin name
    threshold_bps: int = Field(default=100, ge=0)  # only rebalance if |delta| >= threshold
    splits: Optional[list[int]] = None  # fixed_split only
    assets: list[AssetCfg] = []
    current_weights: dict[str, int] = {}

    @model_validator(mode="after")
    def _unique_symbols(self) -> "PortfolioCfg":
        seen: set[str] = set()
        for a in self.assets:
            if a.symbol in seen:
                raise ValueError(f"duplicate asset symbol: {a.symbol}")
            seen.add(a.symbol)
        return self

    def allocator_options(self) -> dict:
        return {"splits": list(self.splits)} if self.splits else {}

class LoggingCfg(BaseModel):
    level: str = "INFO"

class AppConfig(BaseModel):
    normalizer: NormalizerCfg = NormalizerCfg()
    portfolio: PortfolioCfg = PortfolioCfg()
    logging: LoggingCfg = LoggingCfg()

def load_config(path: str) -> AppConfig:
    load_dotenv(override=False)
    import pathlib
    p = pathlib.Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    raw.setdefault("normalizer", {})
    raw.setdefault("logging", {})
    norm_cfg = raw["normalizer"] or {}
    log_cfg = raw["logging"] or {}

    def coalesce(yaml_val, env_val):
        return env_val if (yaml_val in (None, "", 0) and env_val not in (None, "")) else yaml_val

    env_target = os.getenv("WEIGHTNORM_TARGET_BPS")
    env_level  = os.getenv("WEIGHTNORM_LOG_LEVEL")

    norm_cfg["target_bps"] = coalesce(norm_cfg.get("target_bps"), int(env_target) if env_target and env_target.isdigit() else None)
    log_cfg["level"]       = coalesce(log_cfg.get("level"),       env_level)

    # let the model defaults apply when neither YAML nor env set a value
    raw["normalizer"] = {k: v for k, v in norm_cfg.items() if v is not None}
    raw["logging"] = {k: v for k, v in log_cfg.items() if v is not None}
    return AppConfig.model_validate(raw)
