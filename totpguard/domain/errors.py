class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class BackendUnavailable(DomainError):
    """A cache or the user store could not be reached.

    Kept apart from a rejected authentication so callers can tell
    "wrong code" from "backend down".
    """

    def __init__(self, backend: str) -> None:
        super().__init__(f"{backend} unavailable")
        self.backend = backend
