"""Domain-level errors for the content tree."""


class ContentTreeError(Exception):
    """Base class for every content tree failure."""


class NodeValidationError(ContentTreeError):
    """Raised when a path or payload does not describe a valid node."""


class NodeNotFoundError(ContentTreeError):
    """Raised when a content node cannot be located."""


class StoreError(ContentTreeError):
    """Raised when the underlying document store fails."""


class PartialTreeError(ContentTreeError):
    """A child collection that could not be read during tree assembly.

    The tree loader logs it and returns the affected node without children.
    """

    def __init__(self, path, cause: Exception):
        self.path = tuple(path)
        self.cause = cause
        super().__init__(f"Failed to load children of {'/'.join(self.path)}: {cause}")
