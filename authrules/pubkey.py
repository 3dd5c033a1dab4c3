"""Public keys, their base58 text form and program-derived addresses."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable, Union

PUBKEY_BYTES = 32
MAX_SEEDS = 16
MAX_SEED_LEN = 32

# Max name length for any of the names used by the rule set program.
MAX_NAME_LENGTH = 32

_PDA_MARKER = b"ProgramDerivedAddress"
_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_ALPHABET_INDEX = {char: index for index, char in enumerate(_ALPHABET)}

_P = 2**255 - 19
_D = (-121665 * pow(121666, -1, _P)) % _P


def b58encode(data: bytes) -> str:
    """Encode bytes in base58, keeping leading zero bytes as '1'."""
    raw = bytes(data)
    stripped = raw.lstrip(b"\0")
    leading = len(raw) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    return "1" * leading + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text; raises ValueError on characters outside the alphabet."""
    number = 0
    for char in text:
        try:
            digit = _ALPHABET_INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
        number = number * 58 + digit
    leading = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * leading + body


@dataclass(frozen=True, order=True)
class Pubkey:
    """A 32-byte public key."""

    key: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.key, (bytes, bytearray, memoryview)):
            raise TypeError("a public key is built from bytes")
        key = bytes(self.key)
        if len(key) != PUBKEY_BYTES:
            raise ValueError(f"a public key is {PUBKEY_BYTES} bytes, got {len(key)}")
        object.__setattr__(self, "key", key)

    @classmethod
    def from_string(cls, value: str) -> "Pubkey":
        """Parse the base58 text form of a key."""
        return cls(b58decode(value))

    def __str__(self) -> str:
        return b58encode(self.key)

    def __bytes__(self) -> bytes:
        return self.key

    def __repr__(self) -> str:
        return f"Pubkey({self})"


PROGRAM_ID = Pubkey.from_string("autNTWWsmgHkTc9xGwaED2K7UMXB1YurFEuwiCKXpS9")
SYSTEM_PROGRAM_ID = Pubkey(bytes(PUBKEY_BYTES))

Seed = Union[bytes, bytearray, memoryview, Pubkey]


def is_on_curve(data: Union[bytes, Pubkey]) -> bool:
    """Tell whether 32 bytes decompress to a point on the ed25519 curve."""
    raw = bytes(data)
    if len(raw) != PUBKEY_BYTES:
        raise ValueError(f"expected {PUBKEY_BYTES} bytes, got {len(raw)}")
    y = (int.from_bytes(raw, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    if v == 0:
        return False
    x2 = u * pow(v, -1, _P) % _P
    return x2 == 0 or pow(x2, (_P - 1) // 2, _P) == 1


def _seed_bytes(seed: Seed) -> bytes:
    if isinstance(seed, Pubkey):
        return seed.key
    if isinstance(seed, (bytes, bytearray, memoryview)):
        return bytes(seed)
    raise TypeError(f"a seed must be bytes or a Pubkey, not {type(seed).__name__}")


def _checked_seeds(seeds: Iterable[Seed]) -> list[bytes]:
    converted = [_seed_bytes(seed) for seed in seeds]
    if len(converted) > MAX_SEEDS:
        raise ValueError(f"at most {MAX_SEEDS} seeds are allowed")
    if any(len(seed) > MAX_SEED_LEN for seed in converted):
        raise ValueError(f"a seed may be at most {MAX_SEED_LEN} bytes")
    return converted


def _derive(seeds: list[bytes], program_id: Pubkey) -> Pubkey | None:
    digest = hashlib.sha256()
    for seed in seeds:
        digest.update(seed)
    digest.update(bytes(program_id))
    digest.update(_PDA_MARKER)
    candidate = digest.digest()
    if is_on_curve(candidate):
        return None
    return Pubkey(candidate)


def create_program_address(seeds: Iterable[Seed], program_id: Pubkey) -> Pubkey:
    """Derive the program address for exactly these seeds.

    Raises ValueError if the seeds are too many or too long, or if the
    derived address lies on the curve.
    """
    derived = _derive(_checked_seeds(seeds), program_id)
    if derived is None:
        raise ValueError("invalid seeds, address must fall off the curve")
    return derived


def find_program_address(seeds: Iterable[Seed], program_id: Pubkey) -> tuple[Pubkey, int]:
    """Find a valid program address and its bump seed, trying bumps from 255 down."""
    base = [_seed_bytes(seed) for seed in seeds]
    if len(base) + 1 > MAX_SEEDS or any(len(seed) > MAX_SEED_LEN for seed in base):
        raise ValueError("Unable to find a viable program address bump seed")
    for bump in range(255, 0, -1):
        derived = _derive([*base, bytes([bump])], program_id)
        if derived is not None:
            return derived, bump
    raise ValueError("Unable to find a viable program address bump seed")