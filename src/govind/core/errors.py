"""Exception taxonomy shared by the codec, dispatcher and RPC clients."""

from __future__ import annotations


class GovindError(Exception):
    """Base class for every error raised by govind."""


class ValidationError(GovindError, ValueError):
    """Malformed fixed-width input handed to an encoder (wrong length, missing prefix)."""


class DecodingError(GovindError, ValueError):
    """Buffer too short for a declared length, or invalid text in a dynamic string."""


class TaskError(GovindError):
    """A task runner kept failing after every retry attempt."""

    def __init__(self, task: object, attempts: int, cause: BaseException) -> None:
        super().__init__(f"task {task!r} failed after {attempts} attempt(s): {cause}")
        self.task = task
        self.attempts = attempts
        self.cause = cause


class RpcError(GovindError):
    """JSON-RPC error object or exhausted transport retries."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message if code is None else f"RPC error {code}: {message}")
        self.code = code


class UnsupportedChainError(GovindError):
    """A provider or dataset record points at a chain id we do not index."""

    def __init__(self, chain_id: int | str) -> None:
        super().__init__(f"unsupported chain id: {chain_id}")
        self.chain_id = chain_id
