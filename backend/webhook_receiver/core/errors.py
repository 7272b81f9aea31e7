"""Error classification for webhook processing.

Every failure after the method check is answered with the same HTTP
status today. The kind is kept on the exception so the mapping in
``STATUS_BY_KIND`` is the only place that needs to change to split them.
"""

import enum
import json


class ErrorKind(str, enum.Enum):
    PAYLOAD_PARSE = "payload_parse"
    CONFIGURATION = "configuration"
    STORAGE_WRITE = "storage_write"
    UNKNOWN = "unknown"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.PAYLOAD_PARSE: 500,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.STORAGE_WRITE: 500,
    ErrorKind.UNKNOWN: 500,
}


class WebhookError(Exception):
    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PayloadParseError(WebhookError):
    kind = ErrorKind.PAYLOAD_PARSE


class ConfigurationError(WebhookError):
    kind = ErrorKind.CONFIGURATION


class StorageWriteError(WebhookError):
    kind = ErrorKind.STORAGE_WRITE

    def __init__(self, storage_message: str):
        super().__init__(f"Erro no banco de dados: {storage_message}")
        self.storage_message = storage_message


class StorageError(Exception):
    """Raised by storage clients when an insert is rejected or cannot be sent.

    Not part of the handler taxonomy: the handler always wraps it in
    ``StorageWriteError`` before it reaches the caller.
    """

    def __init__(
        self, message: str, code: str | None = None, details: str | None = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code, "details": self.details}

    def __repr__(self) -> str:
        return f"StorageError({json.dumps(self.to_dict(), ensure_ascii=False)})"


def classify(exc: BaseException) -> ErrorKind:
    if isinstance(exc, WebhookError):
        return exc.kind
    return ErrorKind.UNKNOWN


def status_for(exc: BaseException) -> int:
    return STATUS_BY_KIND[classify(exc)]
