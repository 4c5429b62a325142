from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from totpguard.application.ip_allow_list import IpAllowList
from totpguard.application.phrase_reader import TotpPhraseReader
from totpguard.application.replay_guard import CounterReplayGuard
from totpguard.domain import totp
from totpguard.domain.entities import UNRESOLVED_USER_ID, AuthDecision
from totpguard.domain.ports.cache import CachePort
from totpguard.domain.ports.user_store import UserStorePort

logger = logging.getLogger(__name__)


class TotpAuthenticator:
    """
    Decides whether a request carrying a one-time code is authenticated.

    Order of checks: bypass flag, unresolved user, source ip, enrolled
    secret, same-counter short-circuit, then the code itself. Cache writes
    happen in the ip check and after a verified code only.

    Errors from the caches or the store are not caught here; they reach the
    caller as BackendUnavailable rather than turning into a rejection.
    """

    def __init__(
        self,
        *,
        user_store: UserStorePort,
        ip_cache: CachePort,
        counter_cache: CachePort,
        phrase_cache: CachePort,
        epoch_seconds: int = 0,
        digits: int = 6,
        skew_window: int = 0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ip_allow_list = IpAllowList(user_store, ip_cache)
        self.phrases = TotpPhraseReader(user_store, phrase_cache)
        self.replay_guard = CounterReplayGuard(counter_cache)
        self._epoch = epoch_seconds
        self._digits = digits
        self._skew_window = skew_window
        self._clock = clock

    async def authenticate(
        self,
        user_id: int,
        candidate_ip: str,
        code: int | str,
        *,
        step_seconds: int,
        auth_enabled: bool,
        now: Optional[float] = None,
    ) -> AuthDecision:
        if not auth_enabled:
            logger.debug("totp auth disabled, accepting", extra={"user_id": user_id})
            return AuthDecision.ACCEPTED

        if user_id == UNRESOLVED_USER_ID:
            return self._reject(user_id, "unresolved user")

        if not await self.ip_allow_list.validate_ip(user_id, candidate_ip):
            return self._reject(user_id, "ip not allowed")

        phrase = await self.phrases.get_phrase(user_id)
        if not phrase:
            return self._reject(user_id, "no totp phrase")

        if now is None:
            now = self._clock()
        counter = totp.compute_counter(now, self._epoch, step_seconds)

        # Already proven inside this step.
        if await self.replay_guard.should_short_circuit(user_id, counter):
            return AuthDecision.ACCEPTED

        valid = totp.verify(
            phrase,
            code,
            now,
            self._epoch,
            step_seconds,
            digits=self._digits,
            window=self._skew_window,
        )
        if not valid:
            return self._reject(user_id, "invalid code")

        await self.replay_guard.record_success(user_id, counter)
        logger.info("totp accepted", extra={"user_id": user_id, "counter": counter})
        return AuthDecision.ACCEPTED

    @staticmethod
    def _reject(user_id: int, reason: str) -> AuthDecision:
        logger.info("totp rejected", extra={"user_id": user_id, "reason": reason})
        return AuthDecision.REJECTED
