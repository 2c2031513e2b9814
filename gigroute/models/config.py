"""Configuration data models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class WorkerConfig:
    """
    One entry of the `workers:` list

    Attributes:
        name: Unique worker name
        type: Registered worker type (e.g. 'inbox')
        interval: Seconds between cycles
        enabled: Whether `gigroute watch` runs this worker
        config: Type-specific settings (see the worker's from_config)
    """
    name: str
    type: str
    interval: int = 60
    enabled: bool = True
    config: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Worker name cannot be empty")
        if not self.type:
            raise ValueError(f"Worker '{self.name}' has no type")
        if self.interval <= 0:
            raise ValueError(f"Worker '{self.name}' interval must be positive, got {self.interval}")

    @classmethod
    def from_dict(cls, data: dict) -> 'WorkerConfig':
        settings = data.get('config') or {}
        if not isinstance(settings, dict):
            raise ValueError(f"Worker '{data.get('name', '')}' config must be a mapping")

        return cls(
            name=str(data.get('name') or ''),
            type=str(data.get('type') or ''),
            interval=int(data.get('interval', 60)),
            enabled=bool(data.get('enabled', True)),
            config=dict(settings)
        )


@dataclass
class OptimizerConfig:
    """
    Route optimizer settings

    Attributes:
        average_speed_kmh: Assumed urban driving speed
        fallback_latitude: Latitude used for jobs without coordinates
        fallback_longitude: Longitude used for jobs without coordinates
    """
    average_speed_kmh: float = 25.0
    fallback_latitude: float = 47.6062
    fallback_longitude: float = -122.3321

    def __post_init__(self):
        if self.average_speed_kmh <= 0:
            raise ValueError(f"Average speed must be positive, got {self.average_speed_kmh}")
        if not -90 <= self.fallback_latitude <= 90:
            raise ValueError(f"Fallback latitude out of range: {self.fallback_latitude}")
        if not -180 <= self.fallback_longitude <= 180:
            raise ValueError(f"Fallback longitude out of range: {self.fallback_longitude}")

    @classmethod
    def from_dict(cls, data: dict) -> 'OptimizerConfig':
        defaults = cls()
        return cls(
            average_speed_kmh=float(data.get('average_speed_kmh', defaults.average_speed_kmh)),
            fallback_latitude=float(data.get('fallback_latitude', defaults.fallback_latitude)),
            fallback_longitude=float(data.get('fallback_longitude', defaults.fallback_longitude))
        )


@dataclass
class RedisConfig:
    """Connection settings for the draft cache"""
    host: str = "localhost"
    port: int = 6379
    db: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> 'RedisConfig':
        return cls(
            host=str(data.get('host', 'localhost')),
            port=int(data.get('port', 6379)),
            db=int(data.get('db', 0))
        )


@dataclass
class AppConfig:
    """
    Contents of config.yaml

    Attributes:
        log_level: Logging level name
        output_dir: Directory for drafts and exports
        optimizer: Route optimizer settings
        redis: Draft cache connection
        workers: Worker entries for `gigroute watch`
    """
    log_level: str = "INFO"
    output_dir: str = "output"
    optimizer: OptimizerConfig = field(default_factory=OptimizerConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    workers: List[WorkerConfig] = field(default_factory=list)

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{self.log_level}'. Must be one of: {', '.join(LOG_LEVELS)}")

        names = [w.name for w in self.workers]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate worker names: {', '.join(duplicates)}")

    def get_enabled_workers(self) -> List[WorkerConfig]:
        return [w for w in self.workers if w.enabled]

    def get_worker_by_name(self, name: str) -> Optional[WorkerConfig]:
        return next((w for w in self.workers if w.name == name), None)

    @classmethod
    def from_dict(cls, data: dict) -> 'AppConfig':
        """
        Build the configuration from parsed YAML

        Missing sections take their defaults; invalid values raise ValueError.
        """
        return cls(
            log_level=str(data.get('log_level') or 'INFO'),
            output_dir=str(data.get('output_dir') or 'output'),
            optimizer=OptimizerConfig.from_dict(data.get('optimizer') or {}),
            redis=RedisConfig.from_dict(data.get('redis') or {}),
            workers=[WorkerConfig.from_dict(w) for w in data.get('workers') or []]
        )
