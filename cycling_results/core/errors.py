"""Exceptions raised by the cycling results layer.

Expected absence (an identifier that does not resolve to anything) is never
an exception; services return None for it. Everything here is exceptional.
"""


class CyclingResultsError(Exception):
    """Base exception for the cycling results layer."""

    pass


class DataStoreError(CyclingResultsError):
    """The data store failed for a reason other than "no rows".

    Raised for connectivity problems, malformed queries and failed
    procedure calls. The underlying exception is chained.
    """

    pass


class RowNotFoundError(CyclingResultsError):
    """A single-row point lookup matched zero rows.

    Expected absence, kept apart from DataStoreError so a handler for store
    failures never catches it.
    """

    def __init__(self, table: str, public_id: str):
        super().__init__(f"No row in {table} with short_id={public_id!r}")
        self.table = table
        self.public_id = public_id


class InvalidUserRecordError(CyclingResultsError, ValueError):
    """A user row carries an unknown role or lacks its role-dependent fields."""

    pass
