"""Tests for the deployment status state machine."""

from datetime import datetime, timezone

import pytest
from fabricarch.deployments import (
    PROGRESS_STEPS,
    InvalidTransitionError,
    advance,
    can_transition,
    fail,
    next_progress,
    resume,
    start_deployment,
    stop,
)
from fabricarch.domain.models import Deployment, NetworkStatus

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def deploying(production_network) -> Deployment:
    return Deployment(id="d1", **start_deployment(production_network, NOW))


def apply(deployment: Deployment, changes: dict) -> Deployment:
    return deployment.model_copy(update=changes)


class TestStart:
    def test_counts_and_initial_state(self, deploying):
        assert deploying.status is NetworkStatus.deploying
        assert deploying.progress == 0
        assert deploying.peer_count == 2
        assert deploying.orderer_count == 1
        assert deploying.ca_count == 2
        assert deploying.total_nodes == 5
        assert deploying.network_name == "Production Network"
        assert deploying.created_at == NOW.isoformat()


class TestProgress:
    def test_next_progress_walks_steps(self):
        assert next_progress(None) == 10
        assert next_progress(10) == 25
        assert next_progress(30) == 40
        assert next_progress(100) == 100

    def test_advancing_through_every_step_activates(self, deploying):
        seen = []
        for _ in PROGRESS_STEPS:
            deploying = apply(deploying, advance(deploying, NOW))
            seen.append((deploying.progress, deploying.status))

        assert [p for p, _ in seen] == list(PROGRESS_STEPS)
        assert all(status is NetworkStatus.deploying for _, status in seen[:-1])
        assert seen[-1][1] is NetworkStatus.active
        assert deploying.last_active == NOW.isoformat()

    def test_explicit_target(self, deploying):
        changes = advance(deploying, NOW, progress=100)

        assert changes["status"] is NetworkStatus.active

    def test_cannot_go_backwards(self, deploying):
        deploying = apply(deploying, advance(deploying, NOW, progress=60))

        with pytest.raises(InvalidTransitionError):
            advance(deploying, NOW, progress=40)

    def test_cannot_exceed_complete(self, deploying):
        with pytest.raises(InvalidTransitionError):
            advance(deploying, NOW, progress=120)

    def test_active_deployment_cannot_progress(self, deploying):
        active = apply(deploying, advance(deploying, NOW, progress=100))

        with pytest.raises(InvalidTransitionError) as exc_info:
            advance(active, NOW)
        assert exc_info.value.details == {"status": "active"}


class TestTransitions:
    def test_allowed(self):
        assert can_transition(NetworkStatus.deploying, NetworkStatus.active)
        assert can_transition(NetworkStatus.deploying, NetworkStatus.error)
        assert can_transition(NetworkStatus.active, NetworkStatus.stopped)
        assert can_transition(NetworkStatus.stopped, NetworkStatus.active)
        assert can_transition(NetworkStatus.error, NetworkStatus.error)

    def test_forbidden(self):
        assert not can_transition(NetworkStatus.active, NetworkStatus.deploying)
        assert not can_transition(NetworkStatus.error, NetworkStatus.active)
        assert not can_transition(NetworkStatus.stopped, NetworkStatus.error)

    def test_fail_only_while_deploying(self, deploying):
        failed = apply(deploying, fail(deploying, NOW))
        assert failed.status is NetworkStatus.error

        with pytest.raises(InvalidTransitionError):
            stop(failed, NOW)

    def test_stop_and_resume(self, deploying):
        active = apply(deploying, advance(deploying, NOW, progress=100))

        stopped = apply(active, stop(active, NOW))
        assert stopped.status is NetworkStatus.stopped

        resumed = apply(stopped, resume(stopped, NOW))
        assert resumed.status is NetworkStatus.active

        with pytest.raises(InvalidTransitionError):
            resume(resumed, NOW)
