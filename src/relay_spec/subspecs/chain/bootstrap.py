"""
Bootstrap accounts of the staging profiles.

Staging networks start from fixed, publicly known accounts instead of the
development roster. The table lives in `res/bootstrap.yaml`:

    westend:
      endowed:
        - "0x6648d7f3..."
      root_key: "0x6648d7f3..."
      authorities:
        - stash: "0x9ae581fe..."
          controller: "0x8011fb36..."
          block_production: "0x72bae70a..."
          ...
"""

from __future__ import annotations

from functools import cache
from pathlib import Path

import yaml
from pydantic import ValidationError, field_validator

from relay_spec import config
from relay_spec.types import Bytes32, CamelModel, MalformedChainSpecBytes

from ..genesis import AuthorityKeySet
from ..keys import AccountId

BOOTSTRAP_FILE = "bootstrap.yaml"
"""Resource holding the staging bootstrap table."""


class _BootstrapModel(CamelModel):
    model_config = CamelModel.model_config | {"extra": "forbid", "frozen": True}


class BootstrapAuthority(_BootstrapModel):
    """One staging validator as written in the bootstrap table."""

    stash: Bytes32
    controller: Bytes32
    block_production: Bytes32
    finality: Bytes32 | None = None
    peer_online: Bytes32
    validator: Bytes32
    discovery: Bytes32 | None = None

    def to_key_set(self) -> AuthorityKeySet:
        """Convert to the key set the genesis assembler consumes."""
        return AuthorityKeySet(
            stash=self.stash,
            controller=self.controller,
            block_production=self.block_production,
            finality=self.finality,
            peer_online=self.peer_online,
            validator=self.validator,
            discovery=self.discovery,
        )


class NetworkBootstrap(_BootstrapModel):
    """Accounts one staging network starts from."""

    endowed: list[Bytes32] = []
    """Accounts credited the full endowment."""

    authorities: list[BootstrapAuthority] = []
    """Initial validator set, in order."""

    root_key: Bytes32 | None = None
    """Administrative account, for networks that have one."""

    @field_validator("endowed", mode="before")
    @classmethod
    def reject_null_list(cls, v: object) -> object:
        """An empty YAML key parses as `None`; treat it as an empty list."""
        return [] if v is None else v

    @property
    def endowed_accounts(self) -> list[AccountId]:
        return list(self.endowed)

    @property
    def key_sets(self) -> list[AuthorityKeySet]:
        return [authority.to_key_set() for authority in self.authorities]


@cache
def _load_table(path: Path) -> dict[str, NetworkBootstrap]:
    try:
        with path.open() as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise MalformedChainSpecBytes(str(path), f"cannot read bootstrap table: {e}") from e

    if not isinstance(raw, dict):
        raise MalformedChainSpecBytes(str(path), "bootstrap table must be a mapping")
    try:
        return {network: NetworkBootstrap.model_validate(entry) for network, entry in raw.items()}
    except ValidationError as e:
        raise MalformedChainSpecBytes(str(path), str(e)) from e


def load_bootstrap(network: str, path: Path | None = None) -> NetworkBootstrap:
    """
    Look up the staging bootstrap accounts of a network.

    The table is parsed once per process. A network missing from the table
    starts with no endowed accounts and no authorities.
    """
    table = _load_table(path or config.RES_DIR / BOOTSTRAP_FILE)
    return table.get(network, NetworkBootstrap())
