"""Error kinds raised by the lunch store.

Callers branch on the exception type (and its attributes), never on the
message text.
"""


class LunchError(Exception):
    """Base class for every store failure."""


class StorageError(LunchError):
    """The underlying database failed to execute a query."""


class DuplicateNameError(LunchError):
    def __init__(self, name: str):
        super().__init__(f"Restaurant '{name}' already exists")
        self.name = name


class NotFoundError(LunchError):
    def __init__(self, name: str):
        super().__init__(f"Restaurant '{name}' not found")
        self.name = name


class NoCandidatesError(LunchError):
    def __init__(self, category: str):
        super().__init__(f"No restaurants found in category '{category}'")
        self.category = category


__all__ = ['LunchError', 'StorageError', 'DuplicateNameError', 'NotFoundError', 'NoCandidatesError']
