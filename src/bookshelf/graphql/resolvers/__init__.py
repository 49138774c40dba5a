"""Resolver package for the GraphQL schema.

Resolvers open one database session per call and delegate to the catalog
repository; relational fields are resolved independently for each parent.
"""
