"""Exceptions raised by the Ludo engine.

Invalid player input (rolling out of turn, picking an ineligible piece) is
never raised; the turn machine simply ignores it. These exceptions are for
broken invariants and caller bugs.
"""


class LudoEngineError(Exception):
    """Base class for engine errors."""


class InvariantViolation(LudoEngineError, AssertionError):
    """A core invariant was broken (bad travelled value, wrong piece count...)."""

    def __init__(self, message: str, **context):
        self.context = context
        if context:
            details = ", ".join(f"{k}={v!r}" for k, v in context.items())
            message = f"{message} ({details})"
        super().__init__(message)
