"""Simulated billing: subscription tier changes.

No payment is taken; a tier change is a direct write to the user record.
"""

from __future__ import annotations

import logging

from marketplace.core.errors import InvalidArgument, NotFound
from marketplace.models.user import SUBSCRIPTION_TIERS, UNLIMITED_TIERS, User
from marketplace.repos.registry import Repos

logger = logging.getLogger(__name__)


async def update_subscription(
    repos: Repos, user_id: int, tier: str, has_unlimited_access: bool
) -> User:
    if tier not in SUBSCRIPTION_TIERS:
        raise InvalidArgument(
            f"subscriptionTier must be one of {', '.join(SUBSCRIPTION_TIERS)}"
        )
    user = await repos.users.update_subscription(user_id, tier, has_unlimited_access)
    if user is None:
        raise NotFound("User not found")
    logger.info(
        "Subscription changed user=%s tier=%s unlimited=%s",
        user_id,
        tier,
        has_unlimited_access,
    )
    return user


async def upgrade(repos: Repos, user_id: int, tier: str) -> User:
    """Move to *tier*; premium and unlimited also grant unlimited access."""
    return await update_subscription(repos, user_id, tier, tier in UNLIMITED_TIERS)
