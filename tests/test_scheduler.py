"""
Tests for the APScheduler wiring of the token refresh jobs.
"""

from unittest.mock import Mock, patch

import pytest

import mixtape.scheduler as scheduler_module
from mixtape.scheduler import (
    CLIENT_TOKEN_JOB_ID,
    SERVER_TOKEN_JOB_ID,
    _on_job_error,
    _on_job_missed,
    get_scheduler,
    init_scheduler,
    register_token_jobs,
    shutdown_scheduler,
)
from mixtape.services.token_jobs import (
    refresh_client_access_token,
    refresh_server_access_token,
)


@pytest.fixture(autouse=True)
def reset_scheduler():
    """Reset global scheduler state between tests."""
    scheduler_module._scheduler = None
    yield
    shutdown_scheduler()


def test_disabled_returns_none():
    assert init_scheduler(enabled=False) is None
    assert get_scheduler() is None


def test_registers_both_jobs_on_fixed_interval():
    scheduler = init_scheduler(enabled=True, minutes=15)

    assert scheduler is not None and scheduler.running
    client_job = scheduler.get_job(CLIENT_TOKEN_JOB_ID)
    server_job = scheduler.get_job(SERVER_TOKEN_JOB_ID)
    assert client_job.func is refresh_client_access_token
    assert server_job.func is refresh_server_access_token
    assert client_job.trigger.interval.total_seconds() == 15 * 60
    assert server_job.trigger.interval.total_seconds() == 15 * 60


def test_second_init_returns_running_scheduler():
    first = init_scheduler(enabled=True)
    assert init_scheduler(enabled=True) is first


def test_register_replaces_existing_jobs():
    scheduler = Mock()
    register_token_jobs(scheduler, minutes=5)

    assert scheduler.add_job.call_count == 2
    for call in scheduler.add_job.call_args_list:
        assert call.kwargs["trigger"] == "interval"
        assert call.kwargs["minutes"] == 5
        assert call.kwargs["replace_existing"] is True


def test_init_failure_returns_none():
    with patch.object(scheduler_module, "BackgroundScheduler", side_effect=RuntimeError("no threads")):
        assert init_scheduler(enabled=True) is None
    assert get_scheduler() is None


def test_listeners_log(caplog):
    event = Mock(job_id="refresh_client_access_token", exception=RuntimeError("x"), traceback=None)
    with caplog.at_level("WARNING", logger="mixtape.scheduler"):
        _on_job_error(event)
        _on_job_missed(event)

    assert "failed with exception" in caplog.text
    assert "missed its scheduled run time" in caplog.text
