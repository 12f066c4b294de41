"""Docroutes custom exceptions."""


class DocRoutesError(Exception):
    """Base exception for docroutes errors."""


class DeclarationNotFoundError(DocRoutesError):
    """Declaration not found in the store."""


class UnknownModuleError(DocRoutesError):
    """Module name is not part of the store's module index."""


class StoreUnavailableError(DocRoutesError):
    """The declaration store cannot be accessed.

    Every later read would fail too, so this aborts enumeration.
    """


class CacheError(DocRoutesError):
    """Route cache document is unreadable or malformed."""
