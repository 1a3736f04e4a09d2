"""
Report Configuration Management

Provides centralized, validated configuration for report generation.
Values come from environment variables (a local ``.env`` file is loaded first)
and are validated on construction, failing fast on anything malformed.

Usage:
    from report_studio.config import get_config

    config = get_config()
    print(config.output_dir)
    print(config.bar_reference_floor)

Environment variables:
    REPORT_OUTPUT_DIR           Directory for rendered HTML (default: .tmp/reports)
    REPORT_LOG_LEVEL            DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
    REPORT_LOG_JSON             "true"/"false", JSON console logs (default: false)
    REPORT_BAR_REFERENCE_FLOOR  Minimum bar chart scale (default: 100)
    REPORT_BAR_MIN_FRACTION     Minimum visible bar height, 0-1 (default: 0.02)
    REPORT_PIE_ROTATION         Pie chart rotation in degrees (default: -90)

Raises:
    ConfigurationError: If configuration is invalid
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass(frozen=True)
class ReportConfig:
    """
    Validated report generation configuration.

    The chart settings are rendering conventions: they change how the
    geometry is scaled and rotated, never the underlying data.
    """

    output_dir: Path = Path(".tmp/reports")
    log_level: str = "INFO"
    json_logs: bool = False
    bar_reference_floor: float = 100.0
    bar_min_visible_fraction: float = 0.02
    pie_rotation: float = -90.0

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate report configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"REPORT_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}: {self.log_level}")

        if self.bar_reference_floor <= 0:
            raise ConfigurationError(
                f"REPORT_BAR_REFERENCE_FLOOR must be positive: {self.bar_reference_floor}"
            )

        if not 0 <= self.bar_min_visible_fraction <= 1:
            raise ConfigurationError(
                f"REPORT_BAR_MIN_FRACTION must be between 0 and 1: {self.bar_min_visible_fraction}"
            )

        if not -360 <= self.pie_rotation <= 360:
            raise ConfigurationError(f"REPORT_PIE_ROTATION must be between -360 and 360: {self.pie_rotation}")


def _parse_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number: {raw!r}") from None


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be true or false: {raw!r}")


def load_config() -> ReportConfig:
    """
    Build a ReportConfig from the environment.

    Returns:
        Validated ReportConfig

    Raises:
        ConfigurationError: If any variable is malformed
    """
    load_dotenv()

    return ReportConfig(
        output_dir=Path(os.getenv("REPORT_OUTPUT_DIR", ".tmp/reports")),
        log_level=os.getenv("REPORT_LOG_LEVEL", "INFO").upper(),
        json_logs=_parse_bool("REPORT_LOG_JSON", False),
        bar_reference_floor=_parse_float("REPORT_BAR_REFERENCE_FLOOR", 100.0),
        bar_min_visible_fraction=_parse_float("REPORT_BAR_MIN_FRACTION", 0.02),
        pie_rotation=_parse_float("REPORT_PIE_ROTATION", -90.0),
    )


# Global configuration instance
_config: ReportConfig | None = None


def get_config() -> ReportConfig:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        ReportConfig: Validated configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
