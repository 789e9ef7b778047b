"""Storage-level errors raised by repositories.

Services translate these into the tracking error taxonomy; nothing above
the service layer sees them.
"""


class StoreError(Exception):
    """A storage or transport fault."""


class DuplicateEntityError(StoreError):
    """A write violated a uniqueness constraint."""


class StaleWriteError(StoreError):
    """A conditional write was rejected because the record changed since it was read."""
