"""Root of the domain exception hierarchy."""


class DomainException(Exception):
    """
    A failure the gift card engine reports to its caller.

    Subclasses carry a stable machine-readable ``code`` that the HTTP
    layer copies into the ``error`` field of the response body.
    """

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
