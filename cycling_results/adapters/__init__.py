"""Adapters layer for the cycling results package.

This layer translates between the core domain and the relational store:
the database manager issues the queries and the mapping adapters turn the
raw rows they return into domain records.
"""
