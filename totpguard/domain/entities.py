from enum import Enum

# Returned by identity lookups that found nobody.
UNRESOLVED_USER_ID = -1

# IP cache value meaning the last full check rejected the user's address.
BLOCKED_IP_ADDRESS = "__blocked__"


class AuthDecision(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def accepted(self) -> bool:
        return self is AuthDecision.ACCEPTED
