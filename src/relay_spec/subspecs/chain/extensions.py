"""Fork-choice hints carried alongside every chain profile."""

from __future__ import annotations

from relay_spec.types import Bytes32, StrictBaseModel, Uint32


class ChainSpecExtensions(StrictBaseModel):
    """
    Advisory block-import metadata, independent of the profile.

    Neither field is interpreted here. They are passed through unchanged to
    the fork-choice and block-import collaborators. Both default to `None`,
    meaning no hints.
    """

    fork_blocks: list[tuple[Uint32, Bytes32]] | None = None
    """Block heights whose hash is pinned to a known value."""

    bad_blocks: list[Bytes32] | None = None
    """Hashes of blocks known to be invalid."""

    def expected_hash(self, height: int) -> Bytes32 | None:
        """Return the pinned hash at `height`, if any."""
        for fork_height, block_hash in self.fork_blocks or []:
            if fork_height == height:
                return block_hash
        return None

    def is_bad_block(self, block_hash: Bytes32) -> bool:
        """Check whether a block hash is on the known-bad list."""
        return block_hash in (self.bad_blocks or [])
