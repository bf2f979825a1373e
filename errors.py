from dataclasses import dataclass


class ConfigError(Exception):
    """Missing or unusable startup configuration (e.g. no GitHub token)."""


class FetchError(Exception):
    kind = "fetch"


class TransportError(FetchError):
    kind = "transport"


class ResponseError(FetchError):
    kind = "response"


class DecodeError(FetchError):
    kind = "decode"


@dataclass(frozen=True)
class ErrorInfo:
    kind: str
    message: str

    @classmethod
    def from_exception(cls, exc):
        kind = getattr(exc, "kind", "unexpected")
        message = str(exc) or exc.__class__.__name__
        return cls(kind, message)

    def __str__(self):
        return f"{self.kind}: {self.message}"
