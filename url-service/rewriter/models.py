from enum import Enum
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


class Operation(Enum):
    CANONICAL = "canonical"
    REDIRECTION = "redirection"
    ALL = "all"

    @property
    def cleans(self) -> bool:
        return self in (Operation.CANONICAL, Operation.ALL)

    @property
    def redirects(self) -> bool:
        return self in (Operation.REDIRECTION, Operation.ALL)


class TransformErrorKind(Enum):
    INVALID_URL = "INVALID_URL"
    NOT_BYFOOD_DOMAIN = "NOT_BYFOOD_DOMAIN"


class TransformError(Exception):
    """Raised by the transformer. Carries a closed error kind, never an HTTP message."""

    def __init__(self, kind: TransformErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


class RequestError(Exception):
    """Base for failures while turning a request body into a ProcessRequest."""


class MalformedRequestBody(RequestError):
    pass


class MissingField(RequestError):
    pass


class InvalidOperation(RequestError):
    pass


def _optional_str(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedRequestBody(f"field '{key}' must be a string")
    return value


@dataclass(frozen=True)
class ProcessRequest:
    """
    Inbound request for one URL transformation.
    Only built through from_payload(), so both fields are always valid.
    """
    url: str
    operation: Operation

    @classmethod
    def from_payload(cls, payload: Optional[Any]) -> "ProcessRequest":
        """
        FLOW: Decoded JSON value -> object shape check -> field type check ->
        presence check -> operation enum lookup.
        A JSON null is an empty request, not a malformed one.
        """
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise MalformedRequestBody("request body must be a JSON object")

        url = _optional_str(payload, "url")
        operation = _optional_str(payload, "operation")
        if not url or not operation:
            raise MissingField("url and operation are required")

        try:
            return cls(url=url, operation=Operation(operation))
        except ValueError:
            raise InvalidOperation(f"unknown operation '{operation}'")


@dataclass(frozen=True)
class ProcessResponse:
    processed_url: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class ErrorResponse:
    error: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
