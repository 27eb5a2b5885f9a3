"""Root GraphQL mutation type."""
