"""Factory for creating workers from configuration"""

import logging
from typing import Dict, List, Optional, Type

from gigroute.models.config import WorkerConfig, AppConfig
from gigroute.workers.base_worker import BaseWorker
from gigroute.workers.inbox_worker import InboxWorker


class WorkerFactory:
    """
    Creates workers from `workers:` entries of the configuration

    The `type` of an entry selects the class in WORKER_TYPES; the class
    builds itself with from_config().
    """

    WORKER_TYPES: Dict[str, Type[BaseWorker]] = {
        'inbox': InboxWorker,
    }

    def __init__(self, app_config: Optional[AppConfig] = None):
        """
        Args:
            app_config: Application configuration passed on to the workers
                (output directory, Redis settings)
        """
        self.logger = logging.getLogger("gigroute.factory")
        self.app_config = app_config

    def create_worker(self, config: WorkerConfig) -> BaseWorker:
        """
        Create one worker

        Raises:
            ValueError: If the worker type is not registered
        """
        worker_class = self.WORKER_TYPES.get(config.type.lower())
        if worker_class is None:
            raise ValueError(
                f"Unknown worker type '{config.type}'. "
                f"Supported types: {', '.join(sorted(self.WORKER_TYPES))}"
            )

        worker = worker_class.from_config(config, self.app_config)
        self.logger.info(f"Created {worker_class.__name__} '{config.name}' (every {config.interval}s)")
        return worker

    def create_workers_from_configs(self, configs: List[WorkerConfig]) -> List[BaseWorker]:
        """
        Create the enabled workers, logging and skipping entries that fail

        Returns:
            Created workers in configuration order
        """
        workers = []

        for config in configs:
            if not config.enabled:
                self.logger.info(f"Skipping disabled worker: {config.name}")
                continue

            try:
                workers.append(self.create_worker(config))
            except Exception as e:
                self.logger.error(f"Failed to create worker '{config.name}': {e}", exc_info=True)

        return workers

    @classmethod
    def register_worker_type(cls, type_name: str, worker_class: type) -> None:
        """
        Make a worker class available under a config type name

        Raises:
            TypeError: If worker_class doesn't inherit from BaseWorker
        """
        if not (isinstance(worker_class, type) and issubclass(worker_class, BaseWorker)):
            raise TypeError(f"Worker class must inherit from BaseWorker, got {worker_class!r}")

        cls.WORKER_TYPES[type_name.lower()] = worker_class
