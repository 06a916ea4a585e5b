"""Relational store access: models, row shapes and the database manager."""
