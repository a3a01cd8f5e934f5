"""
Unique token issuance.

The generators in careshare.domain.tokens never check for collisions; this
helper retries generate -> store lookup until the lookup comes back empty,
giving up after a fixed number of attempts.
"""

import logging
from typing import Awaitable, Callable

from careshare.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10


async def issue_unique_token(
    generate: Callable[[], str],
    exists: Callable[[str], Awaitable[bool]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Result[str]:
    """
    Generate a token that no stored record currently uses.

    Args:
        generate: Token generator without side effects
        exists: Async check returning True when the token is already taken
        max_attempts: Upper bound on generate/check rounds

    Returns:
        Result with the token, or TOKEN_GENERATION_FAILED
    """
    for attempt in range(1, max_attempts + 1):
        token = generate()
        if not await exists(token):
            return Return.ok(token)
        logger.warning(f"Token collision on attempt {attempt}/{max_attempts}")

    logger.error(f"Could not generate a unique token in {max_attempts} attempts")
    return Return.err(
        Error("TOKEN_GENERATION_FAILED", "Could not generate a unique token, please retry")
    )
