import subprocess

import pytest

from desktop.core.config import get_settings


class FakeProcess:
    """Stands in for ``subprocess.Popen`` without touching the OS."""

    def __init__(self, args, pid=4242, exits_on_terminate=True):
        self.args = list(args)
        self.pid = pid
        self.returncode = None
        self.exits_on_terminate = exits_on_terminate
        self.calls = []

    def poll(self):
        return self.returncode

    def terminate(self):
        self.calls.append("terminate")
        if self.exits_on_terminate:
            self.returncode = -15

    def kill(self):
        self.calls.append("kill")
        self.returncode = -9

    def wait(self, timeout=None):
        self.calls.append("wait")
        if self.returncode is None:
            raise subprocess.TimeoutExpired(self.args, timeout)
        return self.returncode


class FakeSpawner:
    def __init__(self, **process_kwargs):
        self.process_kwargs = process_kwargs
        self.spawned = []

    def __call__(self, args):
        process = FakeProcess(args, **self.process_kwargs)
        self.spawned.append(process)
        return process


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def spawner():
    return FakeSpawner()


@pytest.fixture
def stubborn_spawner():
    """Spawns processes that ignore terminate() until killed."""

    return FakeSpawner(exits_on_terminate=False)


@pytest.fixture
def backend_dir(tmp_path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    (bin_dir / "hyper").write_text("#!/bin/sh\n", encoding="utf-8")
    return bin_dir
