"""Annotation settings.

Mirrors the annotation switches a portal user controls: whether curated custom
driver labels count, which custom tiers count, and whether hotspots count.
Settings can be built directly or read from ONCOMERGE_* environment variables
(a .env file is loaded by the CLI).
"""

import os
from typing import Mapping

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "ONCOMERGE_"
TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


class AnnotationSettings(BaseModel):
    """Which driver evidence sources are enabled."""

    custom_driver_annotations_active: bool = Field(
        False, description="Count curated Putative_Driver labels as driver evidence"
    )
    custom_driver_tier_selection: dict[str, bool] = Field(
        default_factory=dict, description="Custom tier label -> counts as driver"
    )
    hotspot_annotations_active: bool = Field(
        False, description="Count recurrent hotspots as driver evidence"
    )
    driver_cache_size: int = Field(10_000, ge=1, description="Maximum cached driver evaluations")

    @field_validator("custom_driver_tier_selection", mode="before")
    @classmethod
    def tiers_from_list(cls, v):
        """Accept a plain list of selected tiers."""
        if isinstance(v, (list, tuple, set)):
            return {tier: True for tier in v}
        return v

    @property
    def selected_tiers(self) -> tuple[str, ...]:
        return tuple(sorted(tier for tier, selected in self.custom_driver_tier_selection.items() if selected))

    def flags(self) -> tuple[bool, bool, tuple[str, ...]]:
        """Settings that change a driver evaluation, in a hashable form."""
        return (
            self.custom_driver_annotations_active,
            self.hotspot_annotations_active,
            self.selected_tiers,
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "AnnotationSettings":
        """Read settings from ONCOMERGE_* environment variables.

        ONCOMERGE_CUSTOM_DRIVERS: enable custom driver labels (true/false)
        ONCOMERGE_HOTSPOTS: enable hotspot evidence (true/false)
        ONCOMERGE_DRIVER_TIERS: comma separated selected tiers
        ONCOMERGE_CACHE_SIZE: driver evaluation cache size

        Raises:
            ValidationError: If a value cannot be parsed (e.g. a non-numeric cache size)
        """
        env = os.environ if env is None else env
        tiers = env.get(f"{ENV_PREFIX}DRIVER_TIERS", "")
        settings: dict[str, object] = {
            "custom_driver_annotations_active": _env_flag(env, "CUSTOM_DRIVERS", False),
            "hotspot_annotations_active": _env_flag(env, "HOTSPOTS", False),
            "custom_driver_tier_selection": [t.strip() for t in tiers.split(",") if t.strip()],
        }
        cache_size = env.get(f"{ENV_PREFIX}CACHE_SIZE")
        if cache_size:
            settings["driver_cache_size"] = cache_size
        return cls(**settings)
