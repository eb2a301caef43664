"""Event data layout primitives.

Defines lightweight dataclasses describing how an event's data section is laid out:
- `DataFieldSpec`: one top-level word (0-based index) and the ABI type it holds
- `EventLayout`: one event (topic0, name, ordered data fields)

A top-level word is either the value itself (static types) or an offset into
the dynamic region (dynamic types); `DataFieldSpec.is_dynamic` tells which.
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_utils import keccak

from govind.core.errors import ValidationError

# Element types we know how to decode.
STATIC_TYPES = frozenset({"address", "bool", "bytes32"} | {f"uint{n}" for n in range(8, 257, 8)})
DYNAMIC_TYPES = frozenset({"string", "bytes"})


def is_array(abi_type: str) -> bool:
    return abi_type.endswith("[]")


def element_type(abi_type: str) -> str:
    """`string[]` -> `string`; scalars are returned unchanged."""
    return abi_type[:-2] if is_array(abi_type) else abi_type


@dataclass(frozen=True)
class DataFieldSpec:
    """Describe one 32-byte ABI word in the data header (0-based word index)."""

    name: str
    word_index: int
    type: str  # e.g. "uint256", "address[]", "string[]"

    def __post_init__(self) -> None:
        elem = element_type(self.type)
        if is_array(elem) or elem not in STATIC_TYPES | DYNAMIC_TYPES:
            raise ValidationError(f"unsupported ABI type for field {self.name!r}: {self.type}")

    @property
    def is_dynamic(self) -> bool:
        """True if the header word is an offset rather than the value."""
        return is_array(self.type) or self.type in DYNAMIC_TYPES


@dataclass(frozen=True)
class EventLayout:
    """One event: topic0 + ordered non-indexed data fields."""

    topic0: str
    name: str
    data_fields: tuple[DataFieldSpec, ...]

    @property
    def header_words(self) -> int:
        return len(self.data_fields)


# ---- Helpers: build a layout from an event signature ----


def _split_params(params_str: str) -> list[str]:
    """Split the parameter list on commas (no tuple support)."""
    return [p.strip() for p in params_str.split(",") if p.strip()]


def _parse_param(p: str, fallback_name: str) -> tuple[str, str, bool]:
    """Parse one parameter fragment into (name, abi_type, indexed)."""
    tokens = p.split()
    indexed = "indexed" in tokens
    tokens = [t for t in tokens if t != "indexed"]
    if len(tokens) == 1:
        return (fallback_name, tokens[0], indexed)
    return (tokens[-1], tokens[0], indexed)


def layout_from_signature(signature: str) -> EventLayout:
    """Build an EventLayout from a Solidity event signature string.

    Example input:
      "ProposalCreated(uint256 proposalId, address proposer, address[] targets, ...)"

    Indexed parameters live in topics, so only the others become data fields.
    """
    sig = signature.strip()
    open_paren = sig.find("(")
    close_paren = sig.rfind(")")
    if open_paren == -1 or close_paren == -1 or close_paren < open_paren:
        raise ValidationError(f"Invalid event signature: {signature}")
    name = sig[:open_paren].strip()

    parsed = [
        _parse_param(part, fallback_name=f"arg{i}")
        for i, part in enumerate(_split_params(sig[open_paren + 1 : close_paren]))
    ]
    canonical_signature = f"{name}({','.join(t for (_, t, _) in parsed)})"
    topic0 = "0x" + keccak(text=canonical_signature).hex()

    data_params = [(n, t) for (n, t, indexed) in parsed if not indexed]
    return EventLayout(
        topic0=topic0,
        name=name,
        data_fields=tuple(DataFieldSpec(n, idx, t) for idx, (n, t) in enumerate(data_params)),
    )
