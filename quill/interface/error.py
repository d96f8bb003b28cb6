"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class ApiError(InterfaceError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"API error {status_code}: {detail}")
