"""
Domain exceptions raised by the services and translated into HTTP
responses by the routers.
"""


class PropDocError(Exception):
    """Base exception for all service errors."""
    pass


class NotFoundError(PropDocError):
    """Raised when a document, template or user id does not exist."""
    def __init__(self, message: str, resource: str = None, resource_id=None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(message)


class ConflictError(PropDocError):
    """
    Raised when a document row changed underneath a write.

    Documents carry a version counter; a write against a stale version
    is refused instead of silently overwriting the newer state.
    """
    def __init__(self, message: str, document_id: int = None):
        self.document_id = document_id
        super().__init__(message)


class AuthError(PropDocError):
    """Raised on bad credentials or an invalid/expired bearer token."""
    def __init__(self, message: str, status_code: int = 401):
        self.status_code = status_code
        super().__init__(message)
