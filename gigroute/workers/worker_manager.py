"""Worker lifecycle management"""

import signal
import time
import logging
from dataclasses import dataclass
from typing import Dict, List

from .base_worker import BaseWorker


@dataclass
class WorkerStatus:
    """Snapshot of one registered worker"""
    name: str
    type: str
    running: bool
    interval: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "running": self.running,
            "interval": self.interval
        }


class WorkerManager:
    """
    Runs the configured workers until SIGINT/SIGTERM

    Each worker gets its own process. run_once() instead runs a single cycle
    of every worker in the current process and returns.

    Signal handlers are installed on construction, so a manager that will
    call run() must be created in the main thread.
    """

    POLL_SECONDS = 0.5

    def __init__(self, install_signal_handlers: bool = True):
        self.logger = logging.getLogger("gigroute.manager")
        self.workers: Dict[str, BaseWorker] = {}
        self._shutdown_requested = False

        if install_signal_handlers:
            signal.signal(signal.SIGTERM, self._signal_handler)
            signal.signal(signal.SIGINT, self._signal_handler)

    def register_worker(self, worker: BaseWorker) -> None:
        """Register a worker, replacing any worker with the same name"""
        if worker.name in self.workers:
            self.logger.warning(f"Replacing already registered worker {worker.name}")
        self.workers[worker.name] = worker
        self.logger.debug(f"Registered worker: {worker.name}")

    def register_workers(self, workers: List[BaseWorker]) -> None:
        for worker in workers:
            self.register_worker(worker)

    def start_all(self) -> int:
        """
        Start every registered worker

        Returns:
            Number of workers running afterwards
        """
        for name, worker in self.workers.items():
            try:
                worker.start()
            except Exception as e:
                self.logger.error(f"Failed to start worker {name}: {e}", exc_info=True)

        running = sum(1 for w in self.workers.values() if w.is_running())
        self.logger.info(f"{running}/{len(self.workers)} workers running")
        return running

    def stop_all(self, timeout: int = 10) -> None:
        for name, worker in self.workers.items():
            if not worker.is_running():
                continue
            try:
                worker.stop(timeout=timeout)
            except Exception as e:
                self.logger.error(f"Error stopping worker {name}: {e}", exc_info=True)

    def run_once(self) -> int:
        """
        Run one cycle of every worker in this process

        Returns:
            Number of workers whose cycle failed
        """
        failures = 0
        for worker in self.workers.values():
            if not worker.run_cycle():
                failures += 1

        self.logger.info(f"Ran {len(self.workers)} worker(s) once, {failures} failed")
        return failures

    def get_status(self) -> Dict[str, dict]:
        """Status of every worker keyed by name"""
        return {
            name: WorkerStatus(
                name=worker.name,
                type=type(worker).__name__,
                running=worker.is_running(),
                interval=worker.interval
            ).to_dict()
            for name, worker in self.workers.items()
        }

    def log_status(self) -> None:
        for name, info in self.get_status().items():
            state = "RUNNING" if info["running"] else "STOPPED"
            self.logger.info(f"  {name:20s} | {info['type']:14s} | {state:8s} | every {info['interval']}s")

    def request_shutdown(self) -> None:
        self._shutdown_requested = True

    def wait_for_shutdown(self) -> None:
        """Block until a shutdown is requested"""
        try:
            while not self._shutdown_requested:
                time.sleep(self.POLL_SECONDS)
        except KeyboardInterrupt:
            self._shutdown_requested = True

    def _signal_handler(self, signum, frame) -> None:
        self.logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        self.request_shutdown()

    def run(self) -> None:
        """Start all workers and keep them running until shutdown"""
        if not self.workers:
            self.logger.warning("No workers registered")
            return

        try:
            self.start_all()
            self.log_status()
            self.logger.info("Watching for job postings. Press Ctrl+C to stop.")
            self.wait_for_shutdown()
        finally:
            self.stop_all()
            self.logger.info("All workers stopped")
