"""Resolver package for GraphQL schema.

Resolvers receive the storage gateway through the execution context
(``info.context["repository"]``) and translate domain errors into field errors.
"""
