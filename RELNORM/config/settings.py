"""Typed view of the ``normalization`` configuration section."""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from RELNORM.config.loader import get_config


class NormalizationSettings(BaseModel):
    """Limits applied to the exponential subset enumerations."""
    max_closure_universe: int = Field(default=20, ge=1)
    enumeration_warning_threshold: int = Field(default=16, ge=1)

    model_config = ConfigDict(extra="ignore", frozen=True)


@lru_cache(maxsize=1)
def get_normalization_settings() -> NormalizationSettings:
    """Load and cache the normalization settings for this process."""
    return NormalizationSettings.model_validate(get_config("normalization") or {})
