"""The payload handed to the rule set program for validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional, Tuple, Union

from .codec import BorshReader, BorshWriter
from .errors import RuleSetError, RuleSetException
from .pubkey import PUBKEY_BYTES, Pubkey

_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class SeedsVec:
    """Derivation seeds used by the `PDAMatch` rule."""

    seeds: Tuple[bytes, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "seeds", tuple(bytes(seed) for seed in self.seeds))


@dataclass(frozen=True)
class ProofInfo:
    """A merkle proof used by the tree-match rules."""

    proof: Tuple[bytes, ...]

    def __post_init__(self) -> None:
        proof = tuple(bytes(node) for node in self.proof)
        if any(len(node) != 32 for node in proof):
            raise ValueError("every merkle proof node is 32 bytes")
        object.__setattr__(self, "proof", proof)


PayloadValue = Union[Pubkey, SeedsVec, ProofInfo, int]

_TAG_PUBKEY = 0
_TAG_SEEDS = 1
_TAG_MERKLE_PROOF = 2
_TAG_NUMBER = 3


def _check_value(value: PayloadValue) -> PayloadValue:
    if isinstance(value, (Pubkey, SeedsVec, ProofInfo)):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= _U64_MAX:
            raise ValueError(f"a payload number must fit in 64 unsigned bits, got {value}")
        return value
    raise TypeError(f"unsupported payload value type {type(value).__name__}")


def _check_key(key: str) -> str:
    if not isinstance(key, str):
        raise TypeError(f"payload keys are strings, not {type(key).__name__}")
    return key


def _encode_value(writer: BorshWriter, value: PayloadValue) -> None:
    if isinstance(value, Pubkey):
        writer.write_u8(_TAG_PUBKEY)
        writer.write_fixed(bytes(value))
    elif isinstance(value, SeedsVec):
        writer.write_u8(_TAG_SEEDS)
        writer.write_u32(len(value.seeds))
        for seed in value.seeds:
            writer.write_bytes(seed)
    elif isinstance(value, ProofInfo):
        writer.write_u8(_TAG_MERKLE_PROOF)
        writer.write_u32(len(value.proof))
        for node in value.proof:
            writer.write_fixed(node)
    else:
        writer.write_u8(_TAG_NUMBER)
        writer.write_u64(value)


def _decode_value(reader: BorshReader) -> PayloadValue:
    tag = reader.read_u8()
    if tag == _TAG_PUBKEY:
        return Pubkey(reader.read_fixed(PUBKEY_BYTES))
    if tag == _TAG_SEEDS:
        count = reader.read_u32()
        return SeedsVec(tuple(reader.read_bytes() for _ in range(count)))
    if tag == _TAG_MERKLE_PROOF:
        count = reader.read_u32()
        return ProofInfo(tuple(reader.read_fixed(32) for _ in range(count)))
    if tag == _TAG_NUMBER:
        return reader.read_u64()
    raise RuleSetException(RuleSetError.BORSH_DESERIALIZATION_ERROR)


class Payload:
    """A map from field names to the values rules are checked against."""

    def __init__(
        self,
        items: Union[Mapping[str, PayloadValue], Iterable[Tuple[str, PayloadValue]], None] = None,
    ) -> None:
        self._map: dict[str, PayloadValue] = {}
        if items is None:
            return
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            self.insert(key, value)

    def insert(self, key: str, value: PayloadValue) -> Optional[PayloadValue]:
        """Set a value, returning the one it replaced, if any."""
        key = _check_key(key)
        value = _check_value(value)
        previous = self._map.get(key)
        self._map[key] = value
        return previous

    def try_insert(self, key: str, value: PayloadValue) -> None:
        """Set a value only if the key is absent; raises VALUE_OCCUPIED otherwise."""
        key = _check_key(key)
        if key in self._map:
            raise RuleSetException(RuleSetError.VALUE_OCCUPIED)
        self._map[key] = _check_value(value)

    def get(self, key: str) -> Optional[PayloadValue]:
        """The value stored under a key, or None."""
        return self._map.get(key)

    def get_pubkey(self, key: str) -> Optional[Pubkey]:
        """The key stored under `key`, or None if absent or of another kind."""
        value = self._map.get(key)
        return value if isinstance(value, Pubkey) else None

    def get_seeds(self, key: str) -> Optional[SeedsVec]:
        """The seeds stored under `key`, or None if absent or of another kind."""
        value = self._map.get(key)
        return value if isinstance(value, SeedsVec) else None

    def get_merkle_proof(self, key: str) -> Optional[ProofInfo]:
        """The merkle proof stored under `key`, or None if absent or of another kind."""
        value = self._map.get(key)
        return value if isinstance(value, ProofInfo) else None

    def get_amount(self, key: str) -> Optional[int]:
        """The number stored under `key`, or None if absent or of another kind."""
        value = self._map.get(key)
        return value if isinstance(value, int) else None

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Payload):
            return NotImplemented
        return self._map == other._map

    def __repr__(self) -> str:
        return f"Payload({self._map!r})"

    def encode(self, writer: BorshWriter) -> None:
        """Write the payload as a Borsh map, entries sorted by key bytes."""
        entries = sorted(self._map.items(), key=lambda item: item[0].encode("utf-8"))
        writer.write_u32(len(entries))
        for key, value in entries:
            writer.write_string(key)
            _encode_value(writer, value)

    @classmethod
    def decode(cls, reader: BorshReader) -> "Payload":
        """Read a payload written by `encode`."""
        payload = cls()
        count = reader.read_u32()
        for _ in range(count):
            key = reader.read_string()
            payload._map[key] = _decode_value(reader)
        return payload

    def to_bytes(self) -> bytes:
        """The Borsh encoding of the payload."""
        writer = BorshWriter()
        self.encode(writer)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Payload":
        """Decode a payload, rejecting trailing bytes."""
        reader = BorshReader(data)
        payload = cls.decode(reader)
        reader.finish()
        return payload