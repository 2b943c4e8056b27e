from fabricarch.deployments.lifecycle import (
    PROGRESS_STEPS,
    InvalidTransitionError,
    advance,
    can_transition,
    check_transition,
    fail,
    next_progress,
    resume,
    start_deployment,
    stop,
)

__all__ = [
    "PROGRESS_STEPS",
    "InvalidTransitionError",
    "advance",
    "can_transition",
    "check_transition",
    "fail",
    "next_progress",
    "resume",
    "start_deployment",
    "stop",
]
