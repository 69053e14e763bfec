"""
Configuration settings for the grid fixture generator
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class ProjectionConfig:
    """Flat grid projection constants"""
    # Mean earth radius used by the small-angle projection (meters).
    # Existing golden fixtures depend on this exact value.
    earth_mean_radius_m: float = 6371008.8

    # Size of one grid character (meters) when the caller gives none
    default_gridsize_m: float = 100.0


@dataclass
class WriterConfig:
    """PBF writer settings"""
    generator: str = "gridfixture-test-creator"
    file_format: str = "pbf"

    # Every entity is written as its first version
    entity_version: int = 1
    overwrite: bool = True

    # Fixed timestamp for reproducible output, None means "now"
    timestamp: Optional[datetime] = None


@dataclass
class TileBuildConfig:
    """Settings handed to the external tile builder"""
    concurrency: int = 1
    pbf_filename: str = "map.pbf"


@dataclass
class FixtureConfig:
    """Fixture generator configuration"""
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    writer: WriterConfig = field(default_factory=WriterConfig)
    tiles: TileBuildConfig = field(default_factory=TileBuildConfig)


# Global config instance
config = FixtureConfig()


def get_config() -> FixtureConfig:
    """Get global configuration"""
    return config


def validate_config(config: FixtureConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.projection is None:
        errors.append("projection configuration is required but not set")
    else:
        if not config.projection.earth_mean_radius_m or config.projection.earth_mean_radius_m <= 0:
            errors.append(
                f"projection.earth_mean_radius_m must be positive, got {config.projection.earth_mean_radius_m}"
            )
        if not config.projection.default_gridsize_m or config.projection.default_gridsize_m <= 0:
            errors.append(
                f"projection.default_gridsize_m must be positive, got {config.projection.default_gridsize_m}"
            )

    if config.writer is None:
        errors.append("writer configuration is required but not set")
    else:
        if not config.writer.generator:
            errors.append("writer.generator is required but not set")
        if not config.writer.file_format:
            errors.append("writer.file_format is required but not set")
        if config.writer.entity_version is None or config.writer.entity_version < 1:
            errors.append(f"writer.entity_version must be >= 1, got {config.writer.entity_version}")

    if config.tiles is None:
        errors.append("tiles configuration is required but not set")
    else:
        if config.tiles.concurrency is None or config.tiles.concurrency < 1:
            errors.append(f"tiles.concurrency must be >= 1, got {config.tiles.concurrency}")
        if not config.tiles.pbf_filename:
            errors.append("tiles.pbf_filename is required but not set")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
