"""Exception hierarchy for chain specification construction."""

from __future__ import annotations


class ChainSpecError(Exception):
    """
    Base exception for all chain specification errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class KeyDerivationError(ChainSpecError):
    """
    Raised when a seed or secret URI cannot be turned into key material.

    Seeds are compile-time constants in practice, so this signals a
    programmer error rather than bad user input.

    Attributes:
        uri: The offending seed or secret URI.
        detail: Description of what went wrong.
    """

    def __init__(self, uri: str, detail: str) -> None:
        self.uri = uri
        self.detail = detail
        super().__init__(f"Cannot derive key from {uri!r}: {detail}")


class MissingRuntimeCode(ChainSpecError):
    """
    Raised when the compiled runtime code blob of a network is unavailable.

    Attributes:
        network: Display name of the network family.
        path: Location where the blob was expected.
    """

    def __init__(self, network: str, path: str) -> None:
        self.network = network
        self.path = path
        super().__init__(f"{network} development wasm not available (looked in {path})")


class MalformedTelemetryEndpoint(ChainSpecError):
    """
    Raised when a compiled-in telemetry endpoint is invalid.

    Endpoints are constants, so this can only follow a code change and is fatal.

    Attributes:
        url: The offending endpoint URL.
        detail: Why the endpoint was rejected.
    """

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Invalid telemetry endpoint {url!r}: {detail}")


class MalformedChainSpecBytes(ChainSpecError):
    """
    Raised when a pre-baked chain specification document cannot be parsed.

    Attributes:
        source: Where the bytes came from (resource name or file path).
        detail: Description of the parse failure.
    """

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Malformed chain specification {source}: {detail}")


class InvalidAuthoritySet(ChainSpecError):
    """Raised when an authority list cannot bootstrap a network."""
