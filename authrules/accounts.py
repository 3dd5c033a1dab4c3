"""Account references passed to instructions and helpers for optional accounts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .errors import NotEnoughAccountKeys
from .pubkey import PROGRAM_ID, Pubkey


@dataclass(frozen=True)
class AccountMeta:
    """An account an instruction refers to, with its signer and writable flags."""

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    @classmethod
    def writable(cls, pubkey: Pubkey, is_signer: bool) -> "AccountMeta":
        """A writable account reference."""
        return cls(pubkey, is_signer, True)

    @classmethod
    def readonly(cls, pubkey: Pubkey, is_signer: bool) -> "AccountMeta":
        """A read-only account reference."""
        return cls(pubkey, is_signer, False)


def cmp_pubkeys(a: Pubkey, b: Pubkey) -> bool:
    """Compare two keys byte for byte."""
    return bytes(a) == bytes(b)


def next_optional_account_info(accounts: Iterator[AccountMeta]) -> Optional[AccountMeta]:
    """Take the next account from an iterator, treating the program id as "absent".

    Clients fill unused optional positions with the program id, which is
    returned here as None. Raises NotEnoughAccountKeys when the iterator is
    exhausted.
    """
    try:
        account = next(accounts)
    except StopIteration:
        raise NotEnoughAccountKeys() from None
    if cmp_pubkeys(account.pubkey, PROGRAM_ID):
        return None
    return account