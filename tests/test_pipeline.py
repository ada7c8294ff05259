import logging

import pytest
import requests

from conftest import BASE_URL, RANKS, FakeFetcher, cipher_responses

from cipherhub import (
    CipherConfig,
    CipherRankings,
    ConfigurationError,
    GeneRank,
)


def test_example_table_keeps_first_occurrence(config, directory, fetcher) -> None:
    rankings = CipherRankings("100001", config=config, directory=directory, fetcher=fetcher)

    assert rankings.disease_ids() == ["D001"]
    assert rankings.omim_ids() == ["100001"]
    assert dict(rankings["D001"]) == {"GENE3": GeneRank(rank=1, score="0.91")}


def test_unknown_identifier_is_discarded_with_one_warning(config, directory, fetcher, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="cipherhub.pipeline"):
        rankings = CipherRankings(
            "100999 (suspected)", config=config, directory=directory, fetcher=fetcher
        )

    assert len(rankings) == 0
    assert rankings.table("100999") is None
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "100999 (suspected)" in warnings[0].getMessage()
    assert rankings.report.discarded[0].reason == "not in disease list"


def test_identifier_without_digits_is_discarded(config, directory, fetcher) -> None:
    rankings = CipherRankings(
        ["no digits here", "100001"], config=config, directory=directory, fetcher=fetcher
    )

    assert rankings.disease_ids() == ["D001"]
    assert rankings.report.discarded[0].requested == "no digits here"
    assert rankings.report.discarded[0].reason == "no digits"


def test_duplicate_requests_build_each_disease_once(config, directory, fetcher) -> None:
    rankings = CipherRankings(
        ["100002", "100001", "100002", "OMIM 100002", 100001],
        config=config,
        directory=directory,
        fetcher=fetcher,
    )

    assert rankings.disease_ids() == ["D002", "D001"]
    rank_urls = [url for url in fetcher.urls() if "/top1000data/" in url]
    assert rank_urls == [
        f"{BASE_URL}/top1000data/D002.txt",
        f"{BASE_URL}/top1000data/D001.txt",
    ]
    assert rankings.report.requested == 3
    assert rankings.report.built == 2


def test_rank_artifacts_are_cached_under_code_file_names(config, directory, fetcher) -> None:
    CipherRankings("100002", config=config, directory=directory, fetcher=fetcher)

    assert fetcher.calls == [
        (f"{BASE_URL}/landscape_phenotype.txt", "landscape_phenotype.txt"),
        (f"{BASE_URL}/landscape_extended_id.txt", "landscape_extended_id.txt"),
        (f"{BASE_URL}/top1000data/D002.txt", "top1000data/D002.txt"),
    ]


def test_table_accepts_internal_code_or_omim_id(config, directory, fetcher) -> None:
    rankings = CipherRankings(["100001", "100002"], config=config, directory=directory, fetcher=fetcher)

    assert rankings.table("D002") is rankings["D002"]
    assert rankings.table("100002") is rankings["D002"]
    assert rankings.table(100001) is rankings["D001"]
    assert rankings.table("D003") is None
    assert "D001" in rankings
    assert "100001" not in rankings
    with pytest.raises(KeyError):
        rankings["100001"]


def test_unbuilt_internal_code_does_not_fall_back_to_omim_id(config, directory) -> None:
    responses = cipher_responses({"D001": RANKS["D001"]})
    responses[f"{BASE_URL}/landscape_phenotype.txt"] = "100001\t200002\nD001\t100001\n"
    fetcher = FakeFetcher(responses)

    rankings = CipherRankings("100001", config=config, directory=directory, fetcher=fetcher)

    assert rankings.disease_ids() == ["D001"]
    assert rankings.table("100001") is None
    assert rankings.table("OMIM:100001") is rankings["D001"]


def test_omim_ids_report_the_requested_id_per_table(config, directory) -> None:
    responses = cipher_responses({"D001": RANKS["D001"]})
    responses[f"{BASE_URL}/landscape_phenotype.txt"] = "D001\t100001\nD001\t100010\n"
    fetcher = FakeFetcher(responses)

    rankings = CipherRankings("100001", config=config, directory=directory, fetcher=fetcher)

    assert rankings.omim_ids() == ["100001"]
    assert rankings.to_frame()["omim_id"].unique().tolist() == ["100001"]


def test_result_store_exposes_no_mutation(config, directory, fetcher) -> None:
    rankings = CipherRankings("100001", config=config, directory=directory, fetcher=fetcher)

    with pytest.raises(TypeError):
        rankings["D009"] = rankings["D001"]  # type: ignore[index]


def test_to_frame_and_report(config, directory, fetcher) -> None:
    rankings = CipherRankings(["100001", "100002"], config=config, directory=directory, fetcher=fetcher)

    frame = rankings.to_frame()
    assert list(frame.columns) == ["disease_code", "omim_id", "symbol", "rank", "score"]
    assert len(frame) == 4
    d002 = frame[frame["disease_code"] == "D002"]
    assert d002["omim_id"].unique().tolist() == ["100002"]
    assert d002["symbol"].tolist() == ["GENE1", "GENE2", "GENE4"]

    summary = rankings.report.to_dict()
    assert summary["gene_rows"] == 5
    assert summary["resolved_gene_rows"] == 4
    assert summary["unresolved_rows"] == 2
    assert summary["duplicate_rows"] == 2


def test_empty_result_frame_has_columns(config, directory, fetcher) -> None:
    rankings = CipherRankings([], config=config, directory=directory, fetcher=fetcher)

    assert rankings.to_frame().empty
    assert list(rankings.to_frame().columns) == [
        "disease_code",
        "omim_id",
        "symbol",
        "rank",
        "score",
    ]


def test_missing_base_url_is_fatal(tmp_path, directory, fetcher) -> None:
    with pytest.raises(ConfigurationError):
        CipherRankings(
            "100001",
            config=CipherConfig(base_url=None, cache_dir=tmp_path),
            directory=directory,
            fetcher=fetcher,
        )
    assert fetcher.calls == []


def test_missing_directory_is_fatal(config, fetcher) -> None:
    with pytest.raises(ConfigurationError):
        CipherRankings("100001", config=config, directory=None, fetcher=fetcher)


def test_rejects_unsupported_identifier_type(config, directory, fetcher) -> None:
    with pytest.raises(TypeError):
        CipherRankings(1.5, config=config, directory=directory, fetcher=fetcher)  # type: ignore[arg-type]


def test_fetch_failure_for_rank_artifact_is_fatal(config, directory) -> None:
    fetcher = FakeFetcher(cipher_responses(ranks={}))

    with pytest.raises(requests.HTTPError):
        CipherRankings("100003", config=config, directory=directory, fetcher=fetcher)


def test_from_config_loads_hgnc_through_fetcher(config) -> None:
    responses = cipher_responses()
    responses[config.hgnc_url] = (
        "hgnc_id\tsymbol\tstatus\tuniprot_ids\trefseq_accession\n"
        "HGNC:3\tGENE3\tApproved\t\t\n"
    )
    fetcher = FakeFetcher(responses)

    rankings = CipherRankings.from_config(["100001"], config, fetcher=fetcher)

    assert rankings["D001"].symbols() == ["GENE3"]
    assert (config.hgnc_url, "hgnc_complete_set.txt") in fetcher.calls
