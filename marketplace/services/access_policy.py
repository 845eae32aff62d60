"""Enrollment access policy.

A pure decision over already-fetched data: no repository access and no
side effects, so it can be evaluated and tested in isolation.

Rules, first match wins:

  1. already enrolled              -> deny  (ALREADY_ENROLLED)
  2. course does not exist         -> deny  (COURSE_NOT_FOUND)
  3. course is free (price == 0)   -> allow
  4. user has unlimited access     -> allow
  5. user is on the free tier      -> deny  (PAYMENT_REQUIRED)
  6. any paid tier                 -> allow

Rule 6 does not distinguish standard/premium/unlimited: any paid tier may
enroll in any priced course.  Tier-level entitlements are not modeled.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from marketplace.models.catalog import Course
from marketplace.models.user import User


class DenyReason(enum.Enum):
    ALREADY_ENROLLED = "already_enrolled"
    COURSE_NOT_FOUND = "course_not_found"
    PAYMENT_REQUIRED = "payment_required"


@dataclass(frozen=True, slots=True)
class AccessDecision:
    allowed: bool
    reason: DenyReason | None = None

    @classmethod
    def allow(cls) -> AccessDecision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> AccessDecision:
        return cls(allowed=False, reason=reason)


def can_enroll(
    user: User,
    course: Course | None,
    already_enrolled: bool,
) -> AccessDecision:
    if already_enrolled:
        return AccessDecision.deny(DenyReason.ALREADY_ENROLLED)
    if course is None:
        return AccessDecision.deny(DenyReason.COURSE_NOT_FOUND)
    if course.is_free:
        return AccessDecision.allow()
    if user.has_unlimited_access:
        return AccessDecision.allow()
    if user.is_free_tier:
        return AccessDecision.deny(DenyReason.PAYMENT_REQUIRED)
    return AccessDecision.allow()
