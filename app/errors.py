"""Failures the core reports to the HTTP layer.

Each error knows the status code it maps to, so the web layer needs a single
handler instead of per-route translation.
"""


class LinkError(Exception):
    status_code = 500
    error = "Internal"
    detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidUrl(LinkError):
    status_code = 400
    error = "InvalidUrl"
    detail = "Invalid URL provided"


class InvalidCodeFormat(LinkError):
    status_code = 400
    error = "InvalidCodeFormat"
    detail = "Code must be 6-8 alphanumeric characters"


class CodeConflict(LinkError):
    status_code = 409
    error = "CodeConflict"

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Code '{code}' already exists")


class CodeGenerationExhausted(LinkError):
    status_code = 500
    error = "CodeGenerationExhausted"

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Failed to generate a unique code after {attempts} attempts")


class LinkNotFound(LinkError):
    status_code = 404
    error = "NotFound"

    def __init__(self, code: str):
        self.code = code
        super().__init__("Link not found")


class StoreError(LinkError):
    """The store could not be reached or refused the operation.

    Distinct from LinkNotFound: a failed lookup says nothing about whether
    the link exists. ``retryable`` is set for connectivity and timeout
    failures, where the same request may succeed later.
    """

    status_code = 500
    error = "Internal"

    def __init__(self, operation: str, retryable: bool = False):
        self.operation = operation
        self.retryable = retryable
        super().__init__("Internal server error")
