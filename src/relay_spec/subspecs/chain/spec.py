"""
Chain specifications: profile metadata plus a genesis.

A `ChainSpec` is built one of two ways, never both:

- Generated: a genesis builder closure is invoked and its `GenesisState`
  attached to a profile.
- Loaded: a pre-baked JSON document is parsed. Its bytes are kept, so
  re-serializing reproduces the stored document exactly.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import Field, ValidationError

from relay_spec.types import MalformedChainSpecBytes, StrictBaseModel

from ..genesis import GenesisState
from .extensions import ChainSpecExtensions
from .telemetry import TelemetryEndpoints

logger = logging.getLogger(__name__)

GENESIS_FORMATS = ("raw", "runtime")
"""Accepted shapes of a document's genesis section."""


class ChainType(Enum):
    """Kind of network a profile describes."""

    DEVELOPMENT = "Development"
    """Single-node development chain."""

    LOCAL = "Local"
    """Multi-node chain on a local machine or network."""

    LIVE = "Live"
    """Public network."""


class ChainProfile(StrictBaseModel):
    """Deployment metadata of a chain, independent of its genesis."""

    name: str
    """Human-readable chain name."""

    chain_id: str = Field(alias="id")
    """Machine identifier, also the key of the chain's database directory."""

    chain_type: ChainType

    boot_nodes: list[str] = []
    """Multiaddresses of nodes to connect to on startup."""

    telemetry_endpoints: TelemetryEndpoints | None = None
    """Where nodes submit telemetry. Only staging and live profiles have one."""

    protocol_id: str | None = None
    """Network protocol identifier."""

    properties: dict[str, Any] | None = None
    """Free-form chain properties (token symbol, decimals, address format)."""

    extensions: ChainSpecExtensions = ChainSpecExtensions()


class RawGenesis(StrictBaseModel):
    """A genesis section taken verbatim from a pre-baked document."""

    document: dict[str, Any]

    @property
    def format(self) -> str:
        """Either "raw" (storage key/value pairs) or "runtime" (subsystem configs)."""
        return next(iter(self.document))


class _ChainSpecDocument(StrictBaseModel):
    """Top-level shape of a chain specification document. Unknown keys are ignored."""

    model_config = StrictBaseModel.model_config | {"extra": "ignore"}

    name: str
    chain_id: str = Field(alias="id")
    chain_type: ChainType
    boot_nodes: list[str]
    telemetry_endpoints: TelemetryEndpoints | None
    protocol_id: str | None
    properties: dict[str, Any] | None
    fork_blocks: Any
    bad_blocks: Any
    consensus_engine: None = None
    genesis: dict[str, Any]


class ChainSpec(StrictBaseModel):
    """A chain profile together with its resolved genesis, identified by `chain_id`."""

    profile: ChainProfile
    genesis: GenesisState | RawGenesis

    source_bytes: bytes | None = Field(default=None, repr=False)
    """Bytes a loaded document was parsed from, written back unchanged."""

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def chain_id(self) -> str:
        return self.profile.chain_id

    @property
    def chain_type(self) -> ChainType:
        return self.profile.chain_type

    @property
    def extensions(self) -> ChainSpecExtensions:
        return self.profile.extensions

    @classmethod
    def from_genesis(cls, profile: ChainProfile, builder: Callable[[], GenesisState]) -> ChainSpec:
        """Attach the genesis produced by `builder` to `profile`."""
        logger.debug("Building genesis for %s", profile.chain_id)
        return cls(profile=profile, genesis=builder())

    @classmethod
    def from_json_bytes(cls, data: bytes | None, source: str = "<bytes>") -> ChainSpec:
        """
        Parse a pre-baked chain specification document.

        Args:
            data: Document bytes. `None` stands for a document that is absent.
            source: Resource name or path, used in error messages.

        Raises:
            MalformedChainSpecBytes: If the bytes are absent, are not JSON, or
                do not describe a chain specification.
        """
        if data is None:
            raise MalformedChainSpecBytes(source, "document is absent")

        try:
            document = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedChainSpecBytes(source, f"invalid JSON: {e}") from e
        if not isinstance(document, dict):
            raise MalformedChainSpecBytes(source, "top level must be a JSON object")

        try:
            header = _ChainSpecDocument.model_validate(document, strict=False)
            extensions = ChainSpecExtensions.model_validate(
                {"fork_blocks": header.fork_blocks, "bad_blocks": header.bad_blocks},
                strict=False,
            )
        except ValidationError as e:
            raise MalformedChainSpecBytes(source, str(e)) from e

        genesis = document["genesis"]
        if len(genesis) != 1 or next(iter(genesis)) not in GENESIS_FORMATS:
            raise MalformedChainSpecBytes(
                source, f"genesis must hold exactly one of {list(GENESIS_FORMATS)}"
            )

        profile = ChainProfile(
            name=header.name,
            chain_id=header.chain_id,
            chain_type=header.chain_type,
            boot_nodes=header.boot_nodes,
            telemetry_endpoints=header.telemetry_endpoints,
            protocol_id=header.protocol_id,
            properties=header.properties,
            extensions=extensions,
        )
        logger.debug("Loaded chain specification %s from %s", profile.chain_id, source)
        return cls(profile=profile, genesis=RawGenesis(document=genesis), source_bytes=data)

    def genesis_document(self) -> dict[str, Any]:
        """The genesis section of the serialized document."""
        if isinstance(self.genesis, RawGenesis):
            return self.genesis.document
        return {"runtime": self.genesis.to_json()}

    def to_json_document(self) -> dict[str, Any]:
        """Build the document in its canonical key order."""
        profile = self.profile
        telemetry = profile.telemetry_endpoints
        return {
            "name": profile.name,
            "id": profile.chain_id,
            "chainType": profile.chain_type.value,
            "bootNodes": list(profile.boot_nodes),
            "telemetryEndpoints": None if telemetry is None else telemetry.model_dump(mode="json"),
            "protocolId": profile.protocol_id,
            "properties": profile.properties,
            **profile.extensions.model_dump(mode="json", by_alias=True),
            "consensusEngine": None,
            "genesis": self.genesis_document(),
        }

    def to_json_bytes(self) -> bytes:
        """
        Serialize to the document form read by node software.

        A loaded document is returned exactly as it was stored.
        """
        if self.source_bytes is not None:
            return self.source_bytes
        document = json.dumps(self.to_json_document(), indent=2, ensure_ascii=False)
        return (document + "\n").encode("utf-8")
