"""
Exceptions for the dispatch services
"""


class DispatchError(Exception):
    """Base exception for all dispatch errors."""
    pass


class CompanyFetchError(DispatchError):
    """Exception raised when companies cannot be loaded from the datastore."""
    pass


class SendRecordError(DispatchError):
    """Exception raised when send records cannot be persisted."""
    pass


class IngestionError(Exception):
    """Exception raised when enriched records cannot be inserted."""
    pass


class NoCompaniesFoundError(DispatchError):
    """Exception raised when none of the requested companies exist."""
    pass
