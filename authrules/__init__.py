"""Public keys, program-derived addresses, payload and instruction encoding for a token authorization rules program."""

__version__ = "0.1.0"

__all__ = ["accounts", "codec", "errors", "instruction", "payload", "pda", "pubkey"]