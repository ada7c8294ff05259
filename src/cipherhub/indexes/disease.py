"""Disease list: OMIM ID to CIPHER internal phenotype code."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from cipherhub.artifacts import ArtifactParseError, clean_field, iter_tsv_lines
from cipherhub.config import DISEASE_LIST_FILENAME


class DiseaseIndex(Mapping[str, str]):
    """Read-only mapping of external disease identifier to internal code."""

    def __init__(self, codes: Mapping[str, str]) -> None:
        self._codes = dict(codes)
        self._external_ids = {code: external_id for external_id, code in self._codes.items()}

    def __getitem__(self, external_id: str) -> str:
        return self._codes[external_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __repr__(self) -> str:
        return f"DiseaseIndex(diseases={len(self)})"

    def code_for(self, external_id: str) -> str | None:
        return self._codes.get(external_id)

    def external_id_for(self, code: str) -> str | None:
        return self._external_ids.get(code)

    @classmethod
    def from_text(cls, text: str, *, artifact: str = DISEASE_LIST_FILENAME) -> "DiseaseIndex":
        """Parse ``internal_code<TAB>external_id[<TAB>...]`` lines.

        Later lines win when an external identifier is listed twice.
        """

        codes: dict[str, str] = {}
        for line_no, fields in iter_tsv_lines(text):
            if not fields:
                continue
            if len(fields) < 2:
                raise ArtifactParseError(artifact, line_no, "expected at least 2 tab-separated fields")

            code = clean_field(fields[0])
            external_id = clean_field(fields[1])
            if code is None or external_id is None:
                raise ArtifactParseError(artifact, line_no, "empty disease code or identifier")
            codes[external_id] = code

        return cls(codes)
