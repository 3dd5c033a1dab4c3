"""Instruction arguments, their wire encoding and builders for each instruction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple, Union

from .accounts import AccountMeta
from .codec import BorshReader, BorshWriter
from .errors import RuleSetError, RuleSetException
from .payload import Payload
from .pubkey import PROGRAM_ID, SYSTEM_PROGRAM_ID, Pubkey

_V1 = 0
_U64_MAX = 2**64 - 1


class _InstructionTag(IntEnum):
    CREATE_OR_UPDATE = 0
    VALIDATE = 1
    WRITE_TO_BUFFER = 2
    PUFF_RULE_SET = 3


@dataclass(frozen=True)
class CreateOrUpdateArgs:
    """Arguments of the `CreateOrUpdate` instruction (version 1)."""

    serialized_rule_set: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "serialized_rule_set", bytes(self.serialized_rule_set))


@dataclass(frozen=True)
class ValidateArgs:
    """Arguments of the `Validate` instruction (version 1).

    With `rule_set_revision` left as None the latest revision is used.
    """

    operation: str
    payload: Payload = field(default_factory=Payload)
    update_rule_state: bool = False
    rule_set_revision: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.operation, str):
            raise TypeError("the operation is a string")
        if not isinstance(self.payload, Payload):
            raise TypeError("the payload must be a Payload")
        revision = self.rule_set_revision
        if revision is not None:
            if isinstance(revision, bool) or not isinstance(revision, int):
                raise TypeError("a rule set revision is an integer")
            if not 0 <= revision <= _U64_MAX:
                raise ValueError(f"rule set revision out of range: {revision}")


@dataclass(frozen=True)
class WriteToBufferArgs:
    """Arguments of the `WriteToBuffer` instruction (version 1)."""

    serialized_rule_set: bytes
    overwrite: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "serialized_rule_set", bytes(self.serialized_rule_set))


@dataclass(frozen=True)
class PuffRuleSetArgs:
    """Arguments of the `PuffRuleSet` instruction (version 1)."""

    rule_set_name: str


InstructionArgs = Union[CreateOrUpdateArgs, ValidateArgs, WriteToBufferArgs, PuffRuleSetArgs]


def _deserialization_error() -> RuleSetException:
    return RuleSetException(RuleSetError.BORSH_DESERIALIZATION_ERROR)


def encode_instruction(args: InstructionArgs) -> bytes:
    """Encode instruction arguments as the instruction data the program reads."""
    writer = BorshWriter()
    if isinstance(args, CreateOrUpdateArgs):
        writer.write_u8(_InstructionTag.CREATE_OR_UPDATE)
        writer.write_u8(_V1)
        writer.write_bytes(args.serialized_rule_set)
    elif isinstance(args, ValidateArgs):
        writer.write_u8(_InstructionTag.VALIDATE)
        writer.write_u8(_V1)
        writer.write_string(args.operation)
        args.payload.encode(writer)
        writer.write_bool(bool(args.update_rule_state))
        if args.rule_set_revision is None:
            writer.write_u8(0)
        else:
            writer.write_u8(1)
            writer.write_u64(args.rule_set_revision)
    elif isinstance(args, WriteToBufferArgs):
        writer.write_u8(_InstructionTag.WRITE_TO_BUFFER)
        writer.write_u8(_V1)
        writer.write_bytes(args.serialized_rule_set)
        writer.write_bool(bool(args.overwrite))
    elif isinstance(args, PuffRuleSetArgs):
        writer.write_u8(_InstructionTag.PUFF_RULE_SET)
        writer.write_u8(_V1)
        writer.write_string(args.rule_set_name)
    else:
        raise TypeError(f"not instruction arguments: {type(args).__name__}")
    return writer.getvalue()


def _read_validate(reader: BorshReader) -> ValidateArgs:
    operation = reader.read_string()
    payload = Payload.decode(reader)
    update_rule_state = reader.read_bool()
    option_tag = reader.read_u8()
    if option_tag == 0:
        revision = None
    elif option_tag == 1:
        revision = reader.read_u64()
    else:
        raise _deserialization_error()
    return ValidateArgs(operation, payload, update_rule_state, revision)


def decode_instruction(data: bytes) -> InstructionArgs:
    """Decode instruction data into its arguments.

    Raises RuleSetException with BORSH_DESERIALIZATION_ERROR on malformed data.
    """
    reader = BorshReader(data)
    try:
        tag = _InstructionTag(reader.read_u8())
    except ValueError:
        raise _deserialization_error() from None
    if reader.read_u8() != _V1:
        raise _deserialization_error()
    args: InstructionArgs
    if tag is _InstructionTag.CREATE_OR_UPDATE:
        args = CreateOrUpdateArgs(reader.read_bytes())
    elif tag is _InstructionTag.VALIDATE:
        args = _read_validate(reader)
    elif tag is _InstructionTag.WRITE_TO_BUFFER:
        rule_set = reader.read_bytes()
        args = WriteToBufferArgs(rule_set, reader.read_bool())
    else:
        args = PuffRuleSetArgs(reader.read_string())
    reader.finish()
    return args


@dataclass(frozen=True)
class Instruction:
    """A program instruction: the program, the accounts it touches and its data."""

    program_id: Pubkey
    accounts: Tuple[AccountMeta, ...]
    data: bytes


def _absent() -> AccountMeta:
    # Unused optional positions are filled with the program id.
    return AccountMeta.readonly(PROGRAM_ID, False)


@dataclass(frozen=True)
class CreateOrUpdate:
    """Builds the instruction storing a pre-serialized rule set in its account."""

    payer: Pubkey
    rule_set_pda: Pubkey
    args: CreateOrUpdateArgs
    buffer_pda: Optional[Pubkey] = None

    def instruction(self) -> Instruction:
        """The instruction with its accounts in the order the program expects."""
        accounts = [
            AccountMeta.writable(self.payer, True),
            AccountMeta.writable(self.rule_set_pda, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
            AccountMeta.readonly(self.buffer_pda, False)
            if self.buffer_pda is not None
            else _absent(),
        ]
        return Instruction(PROGRAM_ID, tuple(accounts), encode_instruction(self.args))


@dataclass(frozen=True)
class Validate:
    """Builds the instruction validating an operation against a stored rule set."""

    rule_set_pda: Pubkey
    mint: Pubkey
    args: ValidateArgs
    payer: Optional[Pubkey] = None
    rule_authority: Optional[Pubkey] = None
    rule_set_state_pda: Optional[Pubkey] = None
    additional_rule_accounts: Tuple[AccountMeta, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "additional_rule_accounts", tuple(self.additional_rule_accounts)
        )

    def instruction(self) -> Instruction:
        """The instruction, followed by any additional rule accounts."""
        accounts = [
            AccountMeta.readonly(self.rule_set_pda, False),
            AccountMeta.readonly(self.mint, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
            AccountMeta.writable(self.payer, True) if self.payer is not None else _absent(),
            AccountMeta.readonly(self.rule_authority, True)
            if self.rule_authority is not None
            else _absent(),
            AccountMeta.writable(self.rule_set_state_pda, False)
            if self.rule_set_state_pda is not None
            else _absent(),
            *self.additional_rule_accounts,
        ]
        return Instruction(PROGRAM_ID, tuple(accounts), encode_instruction(self.args))


@dataclass(frozen=True)
class WriteToBuffer:
    """Builds the instruction writing a rule set chunk into the buffer account."""

    payer: Pubkey
    buffer_pda: Pubkey
    args: WriteToBufferArgs

    def instruction(self) -> Instruction:
        """The instruction with payer, buffer and system program accounts."""
        accounts = (
            AccountMeta.writable(self.payer, True),
            AccountMeta.writable(self.buffer_pda, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
        )
        return Instruction(PROGRAM_ID, accounts, encode_instruction(self.args))


@dataclass(frozen=True)
class PuffRuleSet:
    """Builds the instruction adding space to the end of a rule set account."""

    payer: Pubkey
    rule_set_pda: Pubkey
    args: PuffRuleSetArgs

    def instruction(self) -> Instruction:
        """The instruction with payer, rule set and system program accounts."""
        accounts = (
            AccountMeta.writable(self.payer, True),
            AccountMeta.writable(self.rule_set_pda, False),
            AccountMeta.readonly(SYSTEM_PROGRAM_ID, False),
        )
        return Instruction(PROGRAM_ID, accounts, encode_instruction(self.args))