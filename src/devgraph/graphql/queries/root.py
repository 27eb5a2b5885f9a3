"""
Root GraphQL query definitions
"""

import strawberry

from ..types.developer import Developer


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(description="Get a list of developers")
    async def developers(
        self, info: strawberry.Info, id: int | None = None, name: str | None = None
    ) -> list[Developer | None] | None:
        from ..resolvers.developer import resolve_developers

        return await resolve_developers(info, id, name)

    @strawberry.field(description="Get a single developer")
    async def developer(self, info: strawberry.Info, id: int | None = None) -> Developer | None:
        from ..resolvers.developer import resolve_developer_by_id

        return await resolve_developer_by_id(info, id)
