from enum import Enum


class Role(str, Enum):
    EDITOR = "editor"
    VIEWER = "viewer"


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    INVALID_ARGUMENT = "invalid-argument"
    NOT_FOUND = "not-found"
    FAILED_PRECONDITION = "failed-precondition"
    INTERNAL = "internal"

    @property
    def status(self) -> str:
        return self.value.replace("-", "_").upper()

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FAILED_PRECONDITION: 400,
    ErrorKind.INTERNAL: 500,
}
