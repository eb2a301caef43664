"""Persisted proposal dataset: the seeds used to target log queries.

The dataset is maintained outside this package as a JSON array of
`{chainId, l2Block, governor}` records. A copy ships as `proposals.json`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from govind.core.errors import DecodingError
from govind.decoding.encoding import validate_address


class ProposalSeed(BaseModel):
    model_config = ConfigDict(frozen=True)

    chainId: int
    l2Block: int
    governor: str

    @field_validator("chainId", "l2Block", mode="before")
    @classmethod
    def _int_or_hex(cls, v: Any) -> Any:
        if isinstance(v, str):
            return int(v, 16) if v[:2].lower() == "0x" else int(v)
        return v

    @field_validator("governor")
    @classmethod
    def _address(cls, v: str) -> str:
        validate_address(v)
        return v


ProposalJson = Iterable[dict[str, Any]]
ProposalSource = ProposalJson | Path | str


def _load_json(source: ProposalSource) -> ProposalJson:
    if isinstance(source, (str, Path)):
        return json.loads(Path(source).read_text())
    return source


def load_proposal_seeds(source: ProposalSource | None = None) -> list[ProposalSeed]:
    """Load seeds from a path, an already parsed list, or the bundled dataset."""
    if source is None:
        raw = json.loads(resources.files("govind.storage").joinpath("proposals.json").read_text())
    else:
        raw = _load_json(source)
    try:
        return [ProposalSeed.model_validate(entry) for entry in raw]
    except ValueError as e:
        raise DecodingError(f"invalid proposal dataset: {e}") from e
