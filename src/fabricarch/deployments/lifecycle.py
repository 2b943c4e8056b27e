"""
Deployment status state machine.

A deployment starts ``deploying`` at progress 0 and is advanced by an external
driver through ``PROGRESS_STEPS``. Reaching 100 makes it ``active``. An active
deployment can be stopped and resumed; a deploying one can fail. Nothing here
runs a timer or touches a store.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fabricarch.core.errors import FabricArchError
from fabricarch.domain.models import Deployment, NetworkConfig, NetworkStatus

PROGRESS_STEPS = (10, 25, 40, 60, 80, 100)
COMPLETE = 100

ALLOWED_TRANSITIONS: dict[NetworkStatus, frozenset[NetworkStatus]] = {
    NetworkStatus.deploying: frozenset({NetworkStatus.active, NetworkStatus.error}),
    NetworkStatus.active: frozenset({NetworkStatus.stopped}),
    NetworkStatus.stopped: frozenset({NetworkStatus.active}),
    NetworkStatus.error: frozenset(),
}


class InvalidTransitionError(FabricArchError):
    """A deployment was asked to move to a status it cannot reach."""


def can_transition(current: NetworkStatus, target: NetworkStatus) -> bool:
    return current == target or target in ALLOWED_TRANSITIONS[current]


def check_transition(current: NetworkStatus, target: NetworkStatus) -> None:
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot move deployment from {current.value} to {target.value}",
            details={"from": current.value, "to": target.value},
        )


def start_deployment(network: NetworkConfig, now: datetime) -> dict[str, Any]:
    """Fields for a fresh deployment of ``network``; the repository assigns the id."""
    peer_count = len(network.peers)
    orderer_count = len(network.orderers)
    ca_count = len(network.cas)
    return {
        "network_id": network.id,
        "network_name": network.name,
        "status": NetworkStatus.deploying,
        "total_nodes": peer_count + orderer_count + ca_count,
        "peer_count": peer_count,
        "orderer_count": orderer_count,
        "ca_count": ca_count,
        "progress": 0,
        "created_at": now.isoformat(),
    }


def next_progress(current: int | None) -> int:
    """The first step strictly above ``current``."""
    current = current or 0
    for step in PROGRESS_STEPS:
        if step > current:
            return step
    return COMPLETE


def advance(deployment: Deployment, now: datetime, progress: int | None = None) -> dict[str, Any]:
    """
    Changes that move a deploying deployment forward.

    Args:
        deployment: Current record
        now: Timestamp recorded as ``last_active``
        progress: Target percentage; the next step when omitted

    Raises:
        InvalidTransitionError: If the deployment is not deploying, or the
            target is outside 0..100 or below the current progress
    """
    if deployment.status != NetworkStatus.deploying:
        raise InvalidTransitionError(
            f"Deployment {deployment.id} is {deployment.status.value}, not deploying",
            details={"status": deployment.status.value},
        )

    current = deployment.progress or 0
    target = next_progress(current) if progress is None else progress
    if not 0 <= target <= COMPLETE or target < current:
        raise InvalidTransitionError(
            f"Progress must move forward within 0..100 (current {current}, requested {target})",
            details={"current": current, "requested": target},
        )

    return {
        "progress": target,
        "status": NetworkStatus.active if target == COMPLETE else NetworkStatus.deploying,
        "last_active": now.isoformat(),
    }


def fail(deployment: Deployment, now: datetime) -> dict[str, Any]:
    check_transition(deployment.status, NetworkStatus.error)
    return {"status": NetworkStatus.error, "last_active": now.isoformat()}


def stop(deployment: Deployment, now: datetime) -> dict[str, Any]:
    check_transition(deployment.status, NetworkStatus.stopped)
    return {"status": NetworkStatus.stopped, "last_active": now.isoformat()}


def resume(deployment: Deployment, now: datetime) -> dict[str, Any]:
    if deployment.status != NetworkStatus.stopped:
        raise InvalidTransitionError(
            f"Only a stopped deployment can be resumed (status {deployment.status.value})",
            details={"status": deployment.status.value},
        )
    return {"status": NetworkStatus.active, "last_active": now.isoformat()}
