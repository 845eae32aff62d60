"""Repository bundle handed to services.

Endpoints receive a ``Repos`` from the ``get_repos`` dependency: the
module-level in-memory bundle when no DATABASE_URL is configured, or a
Postgres bundle bound to the request's session otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.repos.catalog_repo import CatalogRepo, InMemoryCatalogRepo
from marketplace.repos.enrollment_repo import EnrollmentRepo, InMemoryEnrollmentRepo
from marketplace.repos.marketing_repo import InMemoryMarketingRepo, MarketingRepo
from marketplace.repos.pg_catalog_repo import PgCatalogRepo
from marketplace.repos.pg_enrollment_repo import PgEnrollmentRepo
from marketplace.repos.pg_marketing_repo import PgMarketingRepo
from marketplace.repos.pg_user_repo import PgUserRepo
from marketplace.repos.user_repo import InMemoryUserRepo, UserRepo


@dataclass(frozen=True)
class Repos:
    users: UserRepo
    catalog: CatalogRepo
    enrollments: EnrollmentRepo
    marketing: MarketingRepo


@dataclass(frozen=True)
class InMemoryRepos(Repos):
    users: InMemoryUserRepo
    catalog: InMemoryCatalogRepo
    enrollments: InMemoryEnrollmentRepo
    marketing: InMemoryMarketingRepo

    def clear(self) -> None:
        self.users.clear()
        self.catalog.clear()
        self.enrollments.clear()
        self.marketing.clear()


def build_in_memory_repos() -> InMemoryRepos:
    return InMemoryRepos(
        users=InMemoryUserRepo(),
        catalog=InMemoryCatalogRepo(),
        enrollments=InMemoryEnrollmentRepo(),
        marketing=InMemoryMarketingRepo(),
    )


def build_pg_repos(session: AsyncSession) -> Repos:
    return Repos(
        users=PgUserRepo(session),
        catalog=PgCatalogRepo(session),
        enrollments=PgEnrollmentRepo(session),
        marketing=PgMarketingRepo(session),
    )


# Module-level singleton used when DATABASE_URL is not configured.
memory_repos = build_in_memory_repos()
