"""GraphQL schema, types and resolvers for the developer API."""
