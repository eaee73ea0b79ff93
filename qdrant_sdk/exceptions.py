"""Exceptions raised by the Qdrant SDK."""


class QdrantException(Exception):
    """Raised when a Qdrant operation fails.

    Attributes:
        status_code: Name of the gRPC status code (e.g. ``"NOT_FOUND"``) when the
            failure came from the server, otherwise None.
    """

    def __init__(self, message: str, status_code: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CertificateValidationError(QdrantException):
    """Raised when the server certificate does not match the pinned thumbprint."""

    ...


__all__ = ["CertificateValidationError", "QdrantException"]
