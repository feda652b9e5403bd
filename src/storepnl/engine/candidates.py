"""Versioned alias table mapping each canonical field to its recognized headers."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, field_validator

from storepnl.models.records import ALL_FIELDS, CanonicalField

CANDIDATES_PATH = Path(__file__).resolve().parent.parent / "config" / "column_candidates.json"


class CandidateTable(BaseModel):
    """Ordered alias lists per field, most specific (bilingual) form first."""

    version: int
    aliases: dict[CanonicalField, list[str]]

    @field_validator("aliases")
    @classmethod
    def _every_field_has_aliases(
        cls, value: dict[CanonicalField, list[str]]
    ) -> dict[CanonicalField, list[str]]:
        missing = [f.value for f in ALL_FIELDS if not value.get(f)]
        if missing:
            raise ValueError(f"no column candidates for: {', '.join(missing)}")
        return value

    def candidates(self, field: CanonicalField | str) -> list[str]:
        return self.aliases[CanonicalField(field)]


@lru_cache(maxsize=1)
def load_candidate_table() -> CandidateTable:
    """Load the packaged alias table (``storepnl/config/column_candidates.json``)."""
    data = json.loads(CANDIDATES_PATH.read_text(encoding="utf-8"))
    return CandidateTable.model_validate(data)
