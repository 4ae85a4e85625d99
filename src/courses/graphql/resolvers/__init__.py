"""Resolver package for the GraphQL schema.

Resolvers read and write the document store through the shared connection
handle from ``courses.database.connection``.
"""
