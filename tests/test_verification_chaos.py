"""Verification Test: Chaos Monkey - process churn while listing and killing.

Processes appear and disappear between and during fetches. The source must
keep returning lists without raising, and the terminator must keep working
on the survivors.
"""

import multiprocessing
import random
import time

import pytest

from termtop.errors import TerminationError
from termtop.monitor import ProcessSource, ProcessTerminator


def dummy_worker(duration: float = 60.0) -> None:
    """A dummy worker process that sleeps for a given duration."""
    try:
        time.sleep(duration)
    except (KeyboardInterrupt, SystemExit):
        pass


class TestChaosMonkey:
    """Chaos Monkey verification suite tests."""

    def test_fetch_survives_process_termination(self):
        """
        Test that fetching doesn't crash when processes die mid-listing.

        A batch of children is killed while the source is polled repeatedly.
        """
        processes = []
        for _ in range(30):
            p = multiprocessing.Process(target=dummy_worker, args=(60.0,))
            p.start()
            processes.append(p)

        source = ProcessSource()
        terminator = ProcessTerminator()

        try:
            before = {sample.pid for sample in source.fetch()}
            assert {str(p.pid) for p in processes} <= before

            killed = random.sample(processes, 15)
            for p in killed:
                try:
                    terminator.terminate(str(p.pid))
                except TerminationError:
                    pass  # Already gone
                try:
                    samples = source.fetch()
                except Exception as e:
                    pytest.fail(f"fetch raised during churn: {e}")
                assert isinstance(samples, list)

            for p in killed:
                p.join(timeout=5.0)
            after = {sample.pid for sample in source.fetch()}
            survivors = {str(p.pid) for p in processes if p.is_alive()}
            assert survivors <= after
            assert len(survivors) == 15

        finally:
            for p in processes:
                if p.is_alive():
                    p.terminate()
            for p in processes:
                p.join(timeout=1.0)

    def test_rapid_creation_and_termination(self):
        """Test the source stays usable during rapid process churn."""
        source = ProcessSource()
        processes = []

        try:
            start_time = time.time()
            fetches = 0
            while time.time() - start_time < 2.0:
                for _ in range(3):
                    p = multiprocessing.Process(target=dummy_worker, args=(10.0,))
                    p.start()
                    processes.append(p)

                alive = [p for p in processes if p.is_alive()]
                if len(alive) > 6:
                    for p in random.sample(alive, 3):
                        p.terminate()

                assert isinstance(source.fetch(), list)
                fetches += 1

            assert fetches > 0

        finally:
            for p in processes:
                if p.is_alive():
                    p.terminate()
            for p in processes:
                p.join(timeout=0.5)
