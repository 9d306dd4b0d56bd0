"""Unit tests for the scheduled purge job."""

import asyncio

import pytest

from arbor.config import MaintenanceSettings
from arbor.interface.api.app import run_purge_job


class _BrokenContainer:
    """Container whose request scope fails, then cancels the job."""

    def __init__(self, failures: int):
        self.failures = failures
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self

    async def __aenter__(self):
        if self.calls > self.failures:
            raise asyncio.CancelledError()
        raise RuntimeError("connection pool exhausted")

    async def __aexit__(self, *exc_info):
        return False


class TestRunPurgeJob:
    """Tests for run_purge_job."""

    @pytest.mark.asyncio
    async def test_unexpected_errors_do_not_stop_the_loop(self):
        # Arrange
        container = _BrokenContainer(failures=2)
        settings = MaintenanceSettings(purge_interval_minutes=0)

        # Act
        with pytest.raises(asyncio.CancelledError):
            await run_purge_job(container, settings)

        # Assert
        assert container.calls == 3
