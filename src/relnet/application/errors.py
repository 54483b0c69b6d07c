"""Errors raised by PersonRepository implementations."""


class DataServiceError(Exception):
    """A data service call failed. cause is the underlying driver error, if any."""

    def __init__(self, message: str = "failed", cause: BaseException | None = None) -> None:
        if cause is not None:
            message = f"{message}. {cause}"
        super().__init__(message)
        self.cause = cause


class NotFoundUser(DataServiceError):
    def __init__(self) -> None:
        super().__init__("not found user")


class NotFoundId(DataServiceError):
    def __init__(self, record_id: str | None = None) -> None:
        super().__init__("not found id" if record_id is None else f"not found id: {record_id}")
        self.record_id = record_id


class FailedToUpdate(DataServiceError):
    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__("failed to update", cause)
