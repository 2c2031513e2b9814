"""Worker modules for gigroute"""

from .base_worker import BaseWorker
from .inbox_worker import InboxWorker
from .worker_manager import WorkerManager
from .worker_factory import WorkerFactory

__all__ = ["BaseWorker", "InboxWorker", "WorkerManager", "WorkerFactory"]
