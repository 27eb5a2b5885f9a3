"""Root GraphQL query type."""
