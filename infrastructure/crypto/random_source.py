"""
Random byte generation with ordered fallback providers.

Salts and tokens must never make registration or login fail just because
the operating system's secure generator is momentarily unavailable, so
providers are tried in order and the tier that actually produced the
bytes is reported alongside them. Every fallback is logged as a warning.
"""

from __future__ import annotations

import logging
import random
import secrets
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)

TIER_SECURE = "secure"
TIER_PSEUDO = "pseudo"
TIER_TIME_SEEDED = "time-seeded"

# Errors a provider may raise when its underlying source is unavailable.
PROVIDER_ERRORS = (OSError, NotImplementedError, RuntimeError)


class RandomSourceUnavailable(RuntimeError):
    """Raised when every configured provider failed."""


@dataclass(frozen=True)
class RandomProvider:
    """A named generator: `generate(n)` returns exactly `n` bytes."""

    tier: str
    generate: Callable[[int], bytes]


@dataclass(frozen=True)
class RandomBytes:
    data: bytes
    tier: str

    @property
    def degraded(self) -> bool:
        return self.tier != TIER_SECURE

    def hex(self) -> str:
        return self.data.hex()


def _pseudo_bytes(length: int) -> bytes:
    return random.getrandbits(8 * length).to_bytes(length, "big") if length else b""


def _time_seeded_bytes(length: int) -> bytes:
    rng = random.Random(time.time_ns())
    return bytes(rng.randrange(256) for _ in range(length))


def default_providers() -> List[RandomProvider]:
    return [
        RandomProvider(TIER_SECURE, secrets.token_bytes),
        RandomProvider(TIER_PSEUDO, _pseudo_bytes),
        RandomProvider(TIER_TIME_SEEDED, _time_seeded_bytes),
    ]


class RandomSource:
    """
    Produce random bytes from the first provider that succeeds.

    The default order is the OS CSPRNG, then the process-wide Mersenne
    Twister, then a fresh generator seeded from the current time.
    """

    def __init__(self, providers: Optional[Sequence[RandomProvider]] = None) -> None:
        self._providers = list(providers) if providers is not None else default_providers()
        if not self._providers:
            raise ValueError("RandomSource needs at least one provider")

    @property
    def tiers(self) -> List[str]:
        return [p.tier for p in self._providers]

    def random_bytes(self, length: int) -> RandomBytes:
        if length < 0:
            raise ValueError("length must be non-negative")

        last_error: Optional[BaseException] = None
        for index, provider in enumerate(self._providers):
            try:
                data = provider.generate(length)
            except PROVIDER_ERRORS as exc:
                last_error = exc
                following = self._providers[index + 1 :]
                if following:
                    logger.warning(
                        "Random provider %r failed (%s), falling back to %r",
                        provider.tier,
                        exc,
                        following[0].tier,
                    )
                continue

            if len(data) != length:
                last_error = RuntimeError(
                    f"provider {provider.tier!r} returned {len(data)} bytes, expected {length}"
                )
                logger.warning("%s", last_error)
                continue

            if index > 0:
                logger.warning(
                    "Generated %d random bytes with degraded provider %r", length, provider.tier
                )
            return RandomBytes(data=data, tier=provider.tier)

        logger.error("All random providers failed: %s", ", ".join(self.tiers))
        raise RandomSourceUnavailable(f"no random provider available: {last_error}")
