"""
Root GraphQL mutation definitions
"""

from typing import Any

import strawberry

from ..types.developer import Developer


def supplied_arguments(**arguments: Any) -> dict[str, Any]:
    """Collect the arguments a client actually sent into a raw argument map."""
    return {name: value for name, value in arguments.items() if value is not None}


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(description="Create new developer")
    async def create(
        self,
        info: strawberry.Info,
        first_name: str | None = None,
        last_name: str | None = None,
        github_url: str | None = None,
        stack: list[str | None] | None = None,
    ) -> Developer | None:
        from ..resolvers.developer import create_developer

        return await create_developer(
            info,
            supplied_arguments(
                first_name=first_name, last_name=last_name, github_url=github_url, stack=stack
            ),
        )

    @strawberry.mutation(description="Update a developer")
    async def update(
        self,
        info: strawberry.Info,
        id: int | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        github_url: str | None = None,
        stack: list[str | None] | None = None,
    ) -> Developer | None:
        from ..resolvers.developer import update_developer

        return await update_developer(
            info,
            supplied_arguments(
                id=id,
                first_name=first_name,
                last_name=last_name,
                github_url=github_url,
                stack=stack,
            ),
        )
