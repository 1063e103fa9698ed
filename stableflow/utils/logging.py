import logging
import sys
from typing import Optional, TextIO
from datetime import datetime
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Setup root logging configuration

    Args:
        level: Logging level
        log_file: Optional file receiving a copy of the log
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

class SimulationLogger:
    def __init__(self,
                 name: str = "stableflow",
                 level: int = logging.INFO,
                 stream: Optional[TextIO] = sys.stdout):
        """
        Initialize simulation logger

        Args:
            name: Logger name
            level: Logging level
            stream: Output stream for console logging, None to rely on
                whatever handlers are already configured
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self._handler = None

        if stream is not None:
            self._handler = logging.StreamHandler(stream)
            self._handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
            self.logger.addHandler(self._handler)

        self.start_time = None
        self.current_step = 0
        self.total_steps = 0

    def start_simulation(self, total_steps: int):
        """
        Start simulation logging

        Args:
            total_steps: Total number of simulation steps
        """
        self.start_time = datetime.now()
        self.current_step = 0
        self.total_steps = total_steps

        self.logger.info("Starting simulation")
        self.logger.info(f"Total steps: {total_steps}")

    def update_progress(self, step: int, message: Optional[str] = None):
        """
        Update simulation progress

        Args:
            step: Current simulation step
            message: Optional progress message
        """
        self.current_step = step
        progress = (step / self.total_steps) * 100 if self.total_steps else 100.0
        elapsed = datetime.now() - self.start_time

        if step > 0:
            remaining_time = elapsed / step * (self.total_steps - step)
        else:
            remaining_time = None

        progress_msg = f"Progress: {progress:.1f}% (Step {step}/{self.total_steps})"
        if remaining_time:
            progress_msg += f" - ETA: {remaining_time}"
        if message:
            progress_msg += f" - {message}"

        self.logger.info(progress_msg)

    def end_simulation(self, success: bool = True):
        """
        End simulation logging

        Args:
            success: Whether simulation completed successfully
        """
        runtime = datetime.now() - self.start_time

        if success:
            self.logger.info("Simulation completed successfully")
        else:
            self.logger.error("Simulation failed")

        self.logger.info(f"Total runtime: {runtime}")

    def cleanup(self):
        """Detach the handler added by this logger"""
        if self._handler is not None:
            self._handler.close()
            self.logger.removeHandler(self._handler)
            self._handler = None

class Timer:
    def __init__(self, name: str):
        """
        Initialize timer

        Args:
            name: Timer name
        """
        self.name = name
        self.start_time = None
        self.end_time = None

    def start(self):
        """Start timer"""
        self.start_time = datetime.now()
        self.end_time = None

    def stop(self):
        """Stop timer"""
        self.end_time = datetime.now()

    def get_elapsed(self) -> float:
        """
        Get elapsed time in seconds

        Returns:
            Elapsed time
        """
        if self.start_time is None:
            return 0.0

        end = self.end_time or datetime.now()
        return (end - self.start_time).total_seconds()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        logging.getLogger(__name__).debug(f"{self.name}: {self.get_elapsed():.6f}s")
        return False
