"""
Unit tests for the daily scheduler and its retry policy.
"""

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, call, patch

import pytest

from tibber_refiner.scheduler.simple_scheduler import SimpleScheduler


@pytest.fixture
def refiner_service():
    return AsyncMock()


@pytest.fixture
def scheduler(settings, refiner_service):
    return SimpleScheduler(settings, refiner_service)


class TestRetries:
    """Tests for run_with_retries."""

    @pytest.mark.asyncio
    async def test_first_attempt_succeeds(self, scheduler, refiner_service):
        refiner_service.tick.return_value = 24

        with patch("tibber_refiner.scheduler.simple_scheduler.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            assert await scheduler.run_with_retries() is True

        refiner_service.tick.assert_awaited_once()
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_exponential_backoff(self, scheduler, refiner_service):
        refiner_service.tick.side_effect = [RuntimeError("down"), RuntimeError("down"), 24]

        with patch("tibber_refiner.scheduler.simple_scheduler.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            assert await scheduler.run_with_retries() is True

        assert refiner_service.tick.await_count == 3
        assert mock_sleep.await_args_list == [call(1), call(2)]

    @pytest.mark.asyncio
    async def test_gives_up_after_retries(self, scheduler, refiner_service):
        refiner_service.tick.side_effect = RuntimeError("down")

        with patch("tibber_refiner.scheduler.simple_scheduler.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            assert await scheduler.run_with_retries() is False

        # settings fixture allows 3 attempts; no sleep after the last one
        assert refiner_service.tick.await_count == 3
        assert mock_sleep.await_args_list == [call(1), call(2)]


class TestSchedule:
    """Tests for run time calculation and the loop lifecycle."""

    def test_calculate_next_run(self, scheduler, oslo):
        now = oslo.localize(datetime(2025, 1, 15, 10, 0))
        assert scheduler.calculate_next_run(now) == oslo.localize(datetime(2025, 1, 16, 0, 0))

    def test_calculate_next_run_uses_update_time(self, settings, refiner_service, oslo):
        settings.update_time = 14
        scheduler = SimpleScheduler(settings, refiner_service)

        now = oslo.localize(datetime(2025, 1, 15, 10, 0))
        assert scheduler.calculate_next_run(now) == oslo.localize(datetime(2025, 1, 15, 14, 0))

    @pytest.mark.asyncio
    async def test_start_and_stop(self, scheduler):
        with patch.object(scheduler, "calculate_next_run"), \
                patch("tibber_refiner.scheduler.simple_scheduler.seconds_until", return_value=3600.0):
            await scheduler.start()
            assert scheduler.is_running is True

            await scheduler.stop()
            assert scheduler.is_running is False

    @pytest.mark.asyncio
    async def test_loop_runs_refinement(self, scheduler, refiner_service):
        async def tick():
            scheduler._running = False
            return 24

        refiner_service.tick.side_effect = tick

        with patch("tibber_refiner.scheduler.simple_scheduler.seconds_until", return_value=0.0):
            await scheduler.start()
            await asyncio.wait_for(scheduler._task, timeout=5)

        refiner_service.tick.assert_awaited_once()
        assert scheduler.is_running is False
