"""
Detection tuning values.

All knobs of the pipeline live in one DetectionConfig that is passed
explicitly into the detector, so tests can parameterize any of them.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigurationError


ENV_PREFIX = "QUAD_"


@dataclass(frozen=True)
class DetectionConfig:
    """
    Tuning values for quadrilateral detection.

    Attributes:
        blur_kernel_size: Gaussian blur kernel size (odd, pixels)
        canny_low: Lower hysteresis threshold of the edge detector (0-255)
        canny_high: Upper hysteresis threshold of the edge detector (0-255)
        dilate_kernel_size: Square kernel used to bridge gaps in edges
        dilate_iterations: Number of dilation passes
        approx_epsilon: Polygon approximation tolerance as ratio of perimeter
        min_area_fraction: Minimum candidate area as ratio of image area
        size_weight: Weight of the relative size in the confidence
        rectangularity_weight: Weight of the angle regularity in the confidence
        max_results: Maximum number of ranked candidates returned
    """
    blur_kernel_size: int = 5
    canny_low: int = 50
    canny_high: int = 150
    dilate_kernel_size: int = 3
    dilate_iterations: int = 1
    approx_epsilon: float = 0.02
    min_area_fraction: float = 0.02
    size_weight: float = 0.6
    rectangularity_weight: float = 0.4
    max_results: int = 5

    def __post_init__(self):
        if self.blur_kernel_size < 1 or self.blur_kernel_size % 2 == 0:
            raise ConfigurationError("blur_kernel_size", self.blur_kernel_size, "must be a positive odd number")
        if not 0 <= self.canny_low <= self.canny_high:
            raise ConfigurationError("canny_low", self.canny_low, "must satisfy 0 <= canny_low <= canny_high")
        if self.dilate_kernel_size < 1:
            raise ConfigurationError("dilate_kernel_size", self.dilate_kernel_size, "must be positive")
        if self.dilate_iterations < 0:
            raise ConfigurationError("dilate_iterations", self.dilate_iterations, "must not be negative")
        if not 0 < self.approx_epsilon < 1:
            raise ConfigurationError("approx_epsilon", self.approx_epsilon, "must be in (0, 1)")
        if not 0 <= self.min_area_fraction <= 1:
            raise ConfigurationError("min_area_fraction", self.min_area_fraction, "must be in [0, 1]")
        if self.size_weight < 0 or self.rectangularity_weight < 0:
            raise ConfigurationError("size_weight", self.size_weight, "weights must not be negative")
        if abs(self.size_weight + self.rectangularity_weight - 1.0) > 1e-6:
            raise ConfigurationError(
                "rectangularity_weight",
                self.rectangularity_weight,
                "size_weight + rectangularity_weight must equal 1",
            )
        if self.max_results < 0:
            raise ConfigurationError("max_results", self.max_results, "must not be negative")

    def with_overrides(self, **overrides) -> "DetectionConfig":
        """Return a copy with the given fields replaced; None values are ignored."""
        values = {key: value for key, value in overrides.items() if value is not None}
        if not values:
            return self
        return replace(self, **values)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, dotenv_path: Optional[str] = None) -> "DetectionConfig":
        """
        Build a config from environment variables.

        A .env file is loaded first (without overriding variables already
        set), then every field can be overridden by <prefix><FIELD_NAME>,
        e.g. QUAD_CANNY_LOW=40.

        Args:
            prefix: Environment variable prefix
            dotenv_path: Explicit .env file, defaults to searching upwards from cwd

        Returns:
            DetectionConfig with overrides applied
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        defaults = cls()
        overrides = {}
        for field in fields(cls):
            raw = os.getenv(prefix + field.name.upper())
            if raw is None or raw.strip() == "":
                continue
            default_value = getattr(defaults, field.name)
            try:
                overrides[field.name] = type(default_value)(raw.strip())
            except ValueError as e:
                raise ConfigurationError(field.name, raw, f"cannot parse as {type(default_value).__name__}") from e

        return replace(defaults, **overrides)


DEFAULT_CONFIG = DetectionConfig()
