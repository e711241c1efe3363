"""Telemetry endpoints attached to staging and live profiles."""

from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import AnyUrl, ConfigDict, RootModel, TypeAdapter, ValidationError, field_validator

from relay_spec.types import MalformedTelemetryEndpoint

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)

TELEMETRY_SCHEMES = frozenset({"ws", "wss"})
"""Telemetry is submitted over websockets."""

MAX_VERBOSITY = 255
"""Verbosity is a single byte."""

_MULTIADDR_RE = re.compile(r"(/[^/\s]+)+")
"""A multiaddress: one or more non-empty `/`-prefixed protocol segments."""


def _check_endpoint(url: str, verbosity: int, allow_multiaddr: bool = False) -> None:
    """
    Validate one `(url, verbosity)` pair.

    Node software also accepts multiaddresses such as
    `/dns/telemetry.polkadot.io/tcp/443/x-parity-wss/%2Fsubmit%2F`. Loaded
    documents may carry them when `allow_multiaddr` is set.

    Raises:
        ValueError: If the URL does not parse, is not a websocket URL, has no
            host, or the verbosity does not fit in a byte.
    """
    if not 0 <= verbosity <= MAX_VERBOSITY:
        raise ValueError(f"verbosity must be within [0, {MAX_VERBOSITY}], got {verbosity}")
    if allow_multiaddr and _MULTIADDR_RE.fullmatch(url):
        return

    try:
        parsed = _URL_ADAPTER.validate_python(url)
    except ValidationError as e:
        raise ValueError(f"not a URL: {e.errors()[0]['msg']}") from e

    if parsed.scheme not in TELEMETRY_SCHEMES:
        raise ValueError(f"scheme must be one of {sorted(TELEMETRY_SCHEMES)}, got {parsed.scheme}")
    if not parsed.host:
        raise ValueError("URL has no host")


class TelemetryEndpoints(RootModel[list[tuple[str, int]]]):
    """
    Telemetry submission targets as `(url, verbosity)` pairs.

    Serializes as a list of two-element arrays, the form node software reads.
    """

    model_config = ConfigDict(frozen=True)

    @field_validator("root")
    @classmethod
    def check_endpoints(cls, endpoints: list[tuple[str, int]]) -> list[tuple[str, int]]:
        """Reject documents carrying unusable endpoints. Multiaddresses are accepted."""
        for url, verbosity in endpoints:
            _check_endpoint(url, verbosity, allow_multiaddr=True)
        return endpoints

    @classmethod
    def new(cls, endpoints: Iterable[tuple[str, int]]) -> TelemetryEndpoints:
        """
        Build endpoints from compiled-in constants, which must be websocket URLs.

        Raises:
            MalformedTelemetryEndpoint: If any endpoint is invalid. Endpoints
                are constants, so callers should treat this as fatal.
        """
        pairs = list(endpoints)
        for url, verbosity in pairs:
            try:
                _check_endpoint(url, verbosity)
            except ValueError as e:
                raise MalformedTelemetryEndpoint(url, str(e)) from e
        return cls(pairs)

    @property
    def endpoints(self) -> list[tuple[str, int]]:
        """The `(url, verbosity)` pairs."""
        return list(self.root)
