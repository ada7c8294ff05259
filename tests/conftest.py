import sys
from pathlib import Path

import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from cipherhub import CipherConfig, HGNCDirectory  # noqa: E402

BASE_URL = "http://cipher.test/landscape"

DISEASE_LIST = "D001\t100001\tPhenotype one\nD002\t100002\tPhenotype two\nD003\t100003\n"

# Columns: row, internal id, UniProt, RefSeq, display name.
GENE_LIST = (
    "1\tg1\tP11111\tNM_000001\tGENE1\n"
    "2\tg2\tP22222\tNM_000002\tOLDNAME\n"
    "3\tg3\t\t\tGENE3\n"
    "4\tg4\t-\tNM_000004.3\tunknown\n"
    "5\tg5\tQ00000\tNM_999999\tNOPE\n"
)

RANKS = {
    "D001": "3\t0.91\n3\t0.50\n",
    "D002": "5\t0.99\n1\t0.90\n2\t0.80\n1\t0.70\n\n4\t0.60\n",
}


class FakeFetcher:
    """In-memory fetcher that records every requested URL."""

    def __init__(self, responses: dict[str, str]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, str | None]] = []

    def fetch(self, url: str, filename: str | None = None) -> str:
        self.calls.append((url, filename))
        if url not in self.responses:
            raise requests.HTTPError(f"404 Client Error: Not Found for url: {url}")
        return self.responses[url]

    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


def cipher_responses(ranks: dict[str, str] | None = None) -> dict[str, str]:
    responses = {
        f"{BASE_URL}/landscape_phenotype.txt": DISEASE_LIST,
        f"{BASE_URL}/landscape_extended_id.txt": GENE_LIST,
    }
    for code, text in (RANKS if ranks is None else ranks).items():
        responses[f"{BASE_URL}/top1000data/{code}.txt"] = text
    return responses


def make_directory() -> HGNCDirectory:
    return HGNCDirectory(
        symbol2hgncid={"GENE1": "HGNC:1", "GENE2": "HGNC:2", "GENE3": "HGNC:3", "GENE4": "HGNC:4"},
        uniprot2hgncid={"P11111": "HGNC:1", "P22222": "HGNC:2"},
        refseq2hgncid={"NM_000001": "HGNC:1", "NM_000004": "HGNC:4"},
        hgncid2symbol={"HGNC:1": "GENE1", "HGNC:2": "GENE2", "HGNC:3": "GENE3", "HGNC:4": "GENE4"},
    )


@pytest.fixture
def directory() -> HGNCDirectory:
    return make_directory()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(cipher_responses())


@pytest.fixture
def config(tmp_path: Path) -> CipherConfig:
    return CipherConfig(base_url=BASE_URL, cache_dir=tmp_path / "cache")
