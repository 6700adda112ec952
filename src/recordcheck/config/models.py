"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, recordcheck.toml only holds
overrides.  Credentials normally come from the environment or ``.env.test``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from recordcheck.infrastructure.generator import DEFAULT_ADDITIONAL_NEEDS


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    base_url: str | None = None
    username: str | None = None
    password: str | None = None
    timeout: float = 10.0


class GeneratorConfig(BaseModel):
    """[generator] section."""

    model_config = {"frozen": True}

    seed: int | None = None
    checkin_window_days: int = Field(default=30, ge=0)
    stay_max_days: int = Field(default=5, ge=0)
    min_price: int = Field(default=50, ge=0)
    max_price: int = Field(default=500, ge=0)
    additional_needs: tuple[str, ...] = Field(default=DEFAULT_ADDITIONAL_NEEDS, min_length=1)

    @model_validator(mode="after")
    def _check_price_range(self) -> GeneratorConfig:
        if self.min_price > self.max_price:
            raise ValueError(
                f"min_price ({self.min_price}) must not exceed max_price ({self.max_price})"
            )
        return self


class ValidationConfig(BaseModel):
    """[validation] section."""

    model_config = {"frozen": True}

    default_schema: str = "booking"
