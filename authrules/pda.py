"""Addresses of the rule set, rule set state and buffer accounts."""

from __future__ import annotations

from .pubkey import PROGRAM_ID, Pubkey, find_program_address

# The string prefix for Rule Set PDA seeds.
PREFIX = "rule_set"

# The string prefix for Rule Set State PDA seeds.
STATE_PDA = "rule_set_state"


def find_rule_set_address(creator: Pubkey, rule_set_name: str) -> tuple[Pubkey, int]:
    """Find the address and bump of a rule set account."""
    return find_program_address(
        [PREFIX.encode(), creator, rule_set_name.encode()],
        PROGRAM_ID,
    )


def find_rule_set_state_address(
    creator: Pubkey, rule_set_name: str, mint: Pubkey
) -> tuple[Pubkey, int]:
    """Find the address and bump of a rule set state account."""
    return find_program_address(
        [STATE_PDA.encode(), creator, rule_set_name.encode(), mint],
        PROGRAM_ID,
    )


def find_buffer_address(creator: Pubkey) -> tuple[Pubkey, int]:
    """Find the address and bump of a rule set buffer account."""
    return find_program_address([PREFIX.encode(), creator], PROGRAM_ID)