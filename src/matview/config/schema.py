"""Pydantic models for the matview configuration."""
from __future__ import annotations

import math
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ModesConfig(BaseModel):
    circular: bool = False
    eps: float = 0.0
    M: float | None = Field(default=None, gt=0)
    mu: float | None = Field(default=None, gt=0)
    sigma2: float | None = Field(default=None, ge=0)
    ground_pdf: List[float] | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("eps")
    @classmethod
    def _finite_eps(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("eps must be finite")
        return v

    @field_validator("ground_pdf")
    @classmethod
    def _check_pdf(cls, v: List[float] | None) -> List[float] | None:
        if v is None:
            return v
        if not v:
            raise ValueError("ground_pdf must not be empty")
        if any(not math.isfinite(x) or x < 0 for x in v):
            raise ValueError("ground_pdf values must be finite and non-negative")
        if sum(v) <= 0:
            raise ValueError("ground_pdf must have a positive sum")
        return v


class HistogramConfig(BaseModel):
    bins: int = Field(default=256, ge=1)
    lo: float = 0.0
    hi: float = 1.0
    circular: bool = False

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_range(self) -> "HistogramConfig":
        if not self.hi > self.lo:
            raise ValueError(f"histogram range is empty: lo={self.lo}, hi={self.hi}")
        return self


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["text", "json"] = "text"

    model_config = ConfigDict(extra="forbid")

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.upper() if isinstance(v, str) else v


class MatviewConfig(BaseModel):
    modes: ModesConfig = Field(default_factory=ModesConfig)
    histogram: HistogramConfig = Field(default_factory=HistogramConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


__all__ = ["ModesConfig", "HistogramConfig", "LoggingConfig", "MatviewConfig"]
