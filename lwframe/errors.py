class LwframeError(Exception):
    """
    User-facing, structured error.

    Safe to print directly in CLI output and reports without a stack trace.
    """

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class CorpusIOError(LwframeError):
    """A corpus directory or file could not be read or written."""

    def __init__(self, code: str, message: str, path: str = ""):
        self.path = path
        super().__init__(code, message)
