"""Tests for GenesisState construction invariants."""

import pytest
from pydantic import ValidationError

from relay_spec.subspecs.genesis import Forcing, GenesisState, SessionKeys, StakerStatus
from relay_spec.subspecs.genesis.state import (
    AuthorityListConfig,
    BalancesConfig,
    IndicesConfig,
    KeyListConfig,
    SessionConfig,
    StakingConfig,
    SystemConfig,
)
from relay_spec.types import Bytes32

STASH_A = Bytes32(b"\x01" * 32)
STASH_B = Bytes32(b"\x02" * 32)
SESSION_KEY = Bytes32(b"\x03" * 32)


def session_entry(stash: Bytes32) -> tuple[Bytes32, Bytes32, SessionKeys]:
    keys = SessionKeys(block_production=SESSION_KEY, peer_online=SESSION_KEY, validator=SESSION_KEY)
    return (stash, stash, keys)


def staking(stakers: list[Bytes32], invulnerables: list[Bytes32]) -> StakingConfig:
    return StakingConfig(
        validator_count=2,
        minimum_validator_count=1,
        stakers=[(stash, stash, 100, StakerStatus.VALIDATOR) for stash in stakers],
        invulnerables=invulnerables,
        force_era=Forcing.NOT_FORCING,
        slash_reward_fraction=100_000_000,
    )


def genesis(session: list[Bytes32], staking_config: StakingConfig) -> GenesisState:
    return GenesisState(
        system=SystemConfig(code=b"\x00asm"),
        balances=BalancesConfig(balances=[]),
        indices=IndicesConfig(),
        session=SessionConfig(keys=[session_entry(stash) for stash in session]),
        staking=staking_config,
        block_production=AuthorityListConfig(),
        peer_online=KeyListConfig(),
    )


class TestGenesisInvariants:
    """Construction rejects inconsistent validator descriptions."""

    def test_consistent_state_accepted(self) -> None:
        state = genesis([STASH_A, STASH_B], staking([STASH_A, STASH_B], [STASH_A, STASH_B]))
        assert len(state.session.keys) == 2

    def test_staker_without_session_keys(self) -> None:
        with pytest.raises(ValidationError, match="session-key entries"):
            genesis([STASH_A], staking([STASH_A, STASH_B], [STASH_A, STASH_B]))

    def test_staker_with_two_session_entries(self) -> None:
        with pytest.raises(ValidationError, match="session-key entries"):
            genesis([STASH_A, STASH_A], staking([STASH_A], [STASH_A]))

    def test_duplicate_invulnerables(self) -> None:
        with pytest.raises(ValidationError, match="duplicate"):
            genesis([STASH_A], staking([STASH_A], [STASH_A, STASH_A]))

    def test_invulnerables_must_match_stakers(self) -> None:
        with pytest.raises(ValidationError, match="invulnerables must equal"):
            genesis([STASH_A], staking([STASH_A], [STASH_B]))

    def test_validator_count_below_minimum(self) -> None:
        with pytest.raises(ValidationError, match="minimum_validator_count"):
            StakingConfig(
                validator_count=0,
                minimum_validator_count=1,
                stakers=[],
                invulnerables=[],
                force_era=Forcing.NOT_FORCING,
                slash_reward_fraction=0,
            )


def test_code_serializes_as_hex() -> None:
    assert SystemConfig(code=b"\x00asm").model_dump(mode="json") == {"code": "0x0061736d"}
