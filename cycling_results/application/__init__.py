"""Application layer for the cycling results package.

This layer contains the services that resolve public identifiers, run the
store queries and hand back adapted domain records.
"""
