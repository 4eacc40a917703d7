"""Jury judging exceptions."""


class JuryError(Exception):
    """Base class for judging errors reported to the immediate caller."""


class Unauthorized(JuryError):
    """Raised when a stats request carries the wrong admin credential.

    The message is deliberately generic; callers map it to an
    authorization failure without further detail.
    """

    def __init__(self) -> None:
        super().__init__("unauthorized")


class InvalidOutcome(JuryError, ValueError):
    """Raised when a vote falls outside the comparison domain.

    The rejected event leaves every counter and the running estimate
    untouched.
    """

    def __init__(self, reason: str, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        msg = reason if not detail else f"{reason}: {detail}"
        super().__init__(msg)


__all__ = ["InvalidOutcome", "JuryError", "Unauthorized"]
