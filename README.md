# authrules

Client-side building blocks for a token authorization rules program. You can
derive its account addresses, build payloads and encode the instructions it
accepts.

## Modules

- `authrules.pubkey`: the immutable 32-byte `Pubkey` type (`Pubkey.from_string`,
  `str()` for base58 text, `bytes()` for raw bytes), `b58encode` and
  `b58decode`, and the ed25519 point check `is_on_curve`. It also holds
  program-derived address search. `create_program_address` derives the address
  for exact seeds. `find_program_address` tries bump seeds from 255 down and
  returns the address together with its bump. The module also defines
  `PROGRAM_ID`, `SYSTEM_PROGRAM_ID` and `MAX_NAME_LENGTH` (32).
- `authrules.pda`: the seed prefixes `PREFIX` (`"rule_set"`) and `STATE_PDA`
  (`"rule_set_state"`), and the functions `find_rule_set_address`,
  `find_rule_set_state_address` and `find_buffer_address`.
- `authrules.payload`: `Payload` maps field names to values. A value is a
  `Pubkey`, a `SeedsVec`, a `ProofInfo` (32-byte merkle proof nodes) or an
  unsigned 64-bit amount. The class provides:
  - `insert`, which returns the value it replaced;
  - `try_insert`, which refuses keys that are already present;
  - the typed getters `get_pubkey`, `get_seeds`, `get_merkle_proof` and
    `get_amount`, which return `None` when the key is missing or holds a value
    of another kind;
  - a Borsh encoding through `encode`/`decode` and `to_bytes`/`from_bytes`,
    with entries written sorted by key.
- `authrules.codec`: `BorshWriter` and `BorshReader`, the little-endian
  primitives behind the payload and instruction encodings. Malformed or
  truncated input raises `RuleSetException` with `BORSH_DESERIALIZATION_ERROR`.
- `authrules.accounts`:
  - `AccountMeta`, built with `AccountMeta.writable` or `AccountMeta.readonly`;
  - `cmp_pubkeys`;
  - `next_optional_account_info`, which reads an account slot filled with the
    program id as `None` and raises `NotEnoughAccountKeys` when the accounts
    run out.
- `authrules.instruction`:
  - the argument types `CreateOrUpdateArgs`, `ValidateArgs`,
    `WriteToBufferArgs` and `PuffRuleSetArgs`;
  - `encode_instruction` and `decode_instruction`;
  - the builders `CreateOrUpdate`, `Validate`, `WriteToBuffer` and
    `PuffRuleSet`. Their `instruction()` method returns an `Instruction` with
    the program id, the accounts in the order the program expects, and the
    encoded data.
- `authrules.errors`: the `RuleSetError` codes, each with a `message()`. It
  also defines `RuleSetException`, which carries one of them in `.error` and
  its number in `.code`, and `NotEnoughAccountKeys`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from authrules.pubkey import Pubkey
from authrules.pda import find_rule_set_address
from authrules.payload import Payload
from authrules.instruction import Validate, ValidateArgs, decode_instruction

owner = Pubkey(bytes(range(32)))
rule_set_pda, bump = find_rule_set_address(owner, "test rule_set")

payload = Payload([("Amount", 4)])

ix = Validate(
    rule_set_pda=rule_set_pda,
    mint=Pubkey(bytes(32)),
    args=ValidateArgs(operation="Transfer:Holder", payload=payload),
).instruction()

print(ix.program_id, len(ix.accounts), ix.data.hex())
assert decode_instruction(ix.data) == ValidateArgs("Transfer:Holder", payload)
```

The `Validate` builder always emits six fixed accounts. Any optional account
left out (payer, rule authority, rule set state) takes its slot as a read-only
reference to the program id. The additional rule accounts follow those six.

Failures are raised as `RuleSetException`:

```python
from authrules.errors import RuleSetError, RuleSetException

try:
    payload.try_insert("Amount", 5)
except RuleSetException as exc:
    assert exc.error is RuleSetError.VALUE_OCCUPIED
    assert exc.code == 10
```

## What this package does not do

- It does not define rules or rule sets. It has no rule types and no way to
  serialize a rule set. `CreateOrUpdateArgs` and `WriteToBufferArgs` take a
  rule set that the caller has already serialized to bytes.
- It does not evaluate rules, execute instructions, or store or read account
  data.
- It does not sign transactions or send them anywhere.