"""Base worker class for gigroute"""

from abc import ABC, abstractmethod
from multiprocessing import Process, Event
from typing import Optional
import logging
import os


class BaseWorker(ABC):
    """
    Interval worker that runs do_work() in a background process

    A worker can also run a single cycle in the calling process with
    run_cycle(), which is how `gigroute watch --once` drains the inbox.
    """

    def __init__(self, name: str, interval: int = 60):
        """
        Args:
            name: Worker name, also used in the logger name
            interval: Seconds to wait after each cycle
        """
        self.name = name
        self.interval = interval
        self.logger = logging.getLogger(f"gigroute.worker.{self.name}")

        self.cycles = 0
        self.failed_cycles = 0

        self._process: Optional[Process] = None
        self._stop_event = Event()

    @classmethod
    def from_config(cls, config, app_config=None) -> 'BaseWorker':
        """
        Build the worker from its configuration entry

        Subclasses with their own settings override this to read
        config.config and the application-wide settings.

        Args:
            config: WorkerConfig of this worker
            app_config: Optional AppConfig
        """
        return cls(name=config.name, interval=config.interval)

    @abstractmethod
    def do_work(self) -> None:
        """One unit of work, called once per cycle"""

    def run_cycle(self) -> bool:
        """
        Run do_work() once, logging any error instead of raising

        Returns:
            True if the cycle finished without an error
        """
        self.cycles += 1
        try:
            self.do_work()
            return True
        except Exception as e:
            self.failed_cycles += 1
            self.logger.error(
                f"Cycle {self.cycles} of worker {self.name} failed: {type(e).__name__}: {e}",
                exc_info=True
            )
            return False

    def start(self) -> None:
        """Start the cycle loop in a daemon process"""
        if self.is_running():
            self.logger.warning(f"Worker {self.name} is already running")
            return

        self._stop_event.clear()
        self._process = Process(target=self._run_loop, name=self.name, daemon=True)
        self._process.start()

        self.logger.info(f"Worker {self.name} started (PID: {self._process.pid}, every {self.interval}s)")

    def stop(self, timeout: int = 10) -> None:
        """
        Ask the loop to finish its current cycle and exit

        The process is terminated if it hasn't exited after timeout seconds.
        """
        if self._process is None:
            self.logger.warning(f"Worker {self.name} was never started")
            return

        self._stop_event.set()
        self._process.join(timeout=timeout)

        if self._process.is_alive():
            self.logger.warning(f"Worker {self.name} still busy after {timeout}s, terminating")
            self._process.terminate()
            self._process.join(timeout=2)
        else:
            self.logger.info(f"Worker {self.name} stopped")

        self._process = None

    def is_running(self) -> bool:
        return self._process is not None and self._process.is_alive()

    def _run_loop(self) -> None:
        # Runs in the child process
        self.logger = logging.getLogger(f"gigroute.worker.{self.name}")
        self.logger.debug(f"Worker {self.name} loop started in PID {os.getpid()}")

        while not self._stop_event.is_set():
            self.run_cycle()
            self._stop_event.wait(timeout=self.interval)

        self.logger.debug(f"Worker {self.name} loop finished after {self.cycles} cycles")
