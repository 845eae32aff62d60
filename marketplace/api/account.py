"""Per-user account views: dashboard statistics and subscription tier."""

from __future__ import annotations

from fastapi import APIRouter

from marketplace.api.dependencies import CurrentUser, ReposDep
from marketplace.api.schemas import CamelModel, DashboardStatsOut, UserOut
from marketplace.models.user import SubscriptionTier
from marketplace.services import dashboard_service, subscription_service

router = APIRouter(prefix="/api", tags=["account"])


class SubscriptionIn(CamelModel):
    subscription_tier: SubscriptionTier
    has_unlimited_access: bool


class UpgradeIn(CamelModel):
    tier: SubscriptionTier


@router.get("/dashboard/stats", response_model=DashboardStatsOut)
async def dashboard_stats(user: CurrentUser, repos: ReposDep) -> DashboardStatsOut:
    stats = await dashboard_service.get_dashboard_stats(repos, user.id)
    return DashboardStatsOut.from_domain(stats)


@router.patch("/user/subscription", response_model=UserOut)
async def update_subscription(
    payload: SubscriptionIn, user: CurrentUser, repos: ReposDep
) -> UserOut:
    updated = await subscription_service.update_subscription(
        repos, user.id, payload.subscription_tier, payload.has_unlimited_access
    )
    return UserOut.from_domain(updated)


@router.post("/subscriptions/upgrade", response_model=UserOut)
async def upgrade_subscription(
    payload: UpgradeIn, user: CurrentUser, repos: ReposDep
) -> UserOut:
    updated = await subscription_service.upgrade(repos, user.id, payload.tier)
    return UserOut.from_domain(updated)
