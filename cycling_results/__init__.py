"""Cycling results data adaptation and result resolution layer."""

__version__ = "0.1.0"
