from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SubscriptionTier = Literal["free", "standard", "premium", "unlimited"]
SUBSCRIPTION_TIERS: tuple[str, ...] = ("free", "standard", "premium", "unlimited")

# Tiers whose upgrade path also grants the unlimited-access flag.
UNLIMITED_TIERS: frozenset[str] = frozenset({"premium", "unlimited"})


@dataclass(frozen=True, slots=True)
class User:
    id: int
    username: str
    email: str
    password_hash: str
    subscription_tier: SubscriptionTier = "free"
    has_unlimited_access: bool = False

    @property
    def is_free_tier(self) -> bool:
        return self.subscription_tier == "free"
