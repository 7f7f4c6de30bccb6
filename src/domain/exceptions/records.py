class RecordStoreError(Exception):
    """Raised when the backing record store rejects or fails a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
