"""Process enumeration and termination backed by psutil."""

import logging

import psutil

from termtop.errors import FetchError, TerminationError
from termtop.models import ProcessSample

logger = logging.getLogger(__name__)

# Attributes fetched for every process in one pass
ATTRS = ["pid", "username", "cpu_percent", "memory_percent", "name"]


class ProcessSource:
    """
    Lists running processes as ProcessSample objects.

    Samples are returned sorted by CPU usage, highest first. Processes that
    disappear during enumeration are left out. Zombies and processes that
    deny access are kept, with blank or zero values for what could not be
    read.
    """

    def __init__(self) -> None:
        """Prime per-process CPU counters (the first reading is always 0.0)."""
        try:
            list(psutil.process_iter(attrs=["cpu_percent"]))
        except (psutil.Error, OSError) as exc:
            logger.warning("Could not prime CPU counters: %s", exc)

    def fetch(self) -> list[ProcessSample]:
        """
        Collect a fresh sample of every process.

        Raises:
            FetchError: If the process table cannot be read at all.
        """
        samples: list[ProcessSample] = []
        try:
            for proc in psutil.process_iter(attrs=ATTRS):
                samples.append(self._sample(proc.info))
        except (psutil.Error, OSError) as exc:
            logger.warning("Process enumeration failed: %s", exc)
            raise FetchError(exc) from exc

        samples.sort(key=lambda sample: sample.cpu_percent, reverse=True)
        return samples

    @staticmethod
    def _sample(info: dict) -> ProcessSample:
        """Build a sample with safe defaults for values psutil could not read."""
        return ProcessSample(
            pid=str(info["pid"]),
            user=info.get("username") or "",
            cpu_percent=info.get("cpu_percent") or 0.0,
            memory_percent=info.get("memory_percent") or 0.0,
            command=info.get("name") or "",
        )

    def __call__(self) -> list[ProcessSample]:
        return self.fetch()


class ProcessTerminator:
    """Forcibly kills processes by identifier (SIGKILL on POSIX)."""

    def terminate(self, pid: str) -> None:
        """
        Kill the process with the given identifier.

        The target is not checked afterwards.

        Raises:
            TerminationError: If the identifier is not a positive integer or
                the process cannot be killed.
        """
        try:
            number = int(pid)
        except ValueError as exc:
            raise TerminationError(pid, "not a process identifier") from exc
        if number <= 0:
            raise TerminationError(pid, "not a process identifier")

        try:
            psutil.Process(number).kill()
        except psutil.NoSuchProcess as exc:
            raise TerminationError(pid, "no such process") from exc
        except psutil.AccessDenied as exc:
            raise TerminationError(pid, "permission denied") from exc
        except (psutil.Error, OSError) as exc:
            raise TerminationError(pid, exc) from exc

        logger.info("Killed process %s", pid)

    def __call__(self, pid: str) -> None:
        self.terminate(pid)
