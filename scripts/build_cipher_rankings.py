#!/usr/bin/env python3
"""Build CIPHER gene rankings for OMIM IDs and publish or store them."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from cipherhub import CipherConfig, CipherRankings, SourceManifestLoader  # noqa: E402
from cipherhub.fetch import CachedFetcher  # noqa: E402
from cipherhub.publishers import JsonRankingPublisher  # noqa: E402
from cipherhub.storage import DuckDBParquetStorage  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build per-disease CIPHER gene rankings")
    parser.add_argument(
        "--omim-id",
        dest="omim_ids",
        action="append",
        default=[],
        help="OMIM ID to build; repeat for several",
    )
    parser.add_argument("--omim-file", help="Text file with one OMIM ID per line")
    parser.add_argument("--base-url", help="CIPHER website URL (overrides manifest and env)")
    parser.add_argument("--cache-dir", help="Directory for downloaded artifacts")
    parser.add_argument("--hgnc-url", help="HGNC complete set URL")
    parser.add_argument("--sources-dir", help="Directory with source manifest JSON files")
    parser.add_argument("--output-root", help="Write <disease_code>.json rankings here")
    parser.add_argument("--top", type=int, help="Only publish the N best-ranked genes")
    parser.add_argument("--duckdb", help="DuckDB database path for the rankings table")
    parser.add_argument("--parquet", help="Parquet copy of the rankings table (needs --duckdb)")
    parser.add_argument("--force-download", action="store_true", help="Ignore cached artifacts")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def collect_omim_ids(args: argparse.Namespace) -> list[str]:
    omim_ids = list(args.omim_ids)
    if args.omim_file:
        for line in Path(args.omim_file).read_text().splitlines():
            cleaned = line.strip()
            if cleaned and not cleaned.startswith("#"):
                omim_ids.append(cleaned)
    return omim_ids


def build_config(args: argparse.Namespace) -> CipherConfig:
    config = CipherConfig.from_manifest(
        SourceManifestLoader(args.sources_dir),
        cache_dir=args.cache_dir,
    )
    if args.base_url:
        config = replace(config, base_url=args.base_url)
    if args.hgnc_url:
        config = replace(config, hgnc_url=args.hgnc_url)
    return config


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("cipherhub.build")
    started = time.perf_counter()

    omim_ids = collect_omim_ids(args)
    if not omim_ids:
        raise ValueError("No OMIM IDs given. Use --omim-id and/or --omim-file.")
    if args.parquet and not args.duckdb:
        raise ValueError("--parquet requires --duckdb.")

    config = build_config(args)
    logger.info("Building %d OMIM IDs from %s", len(omim_ids), config.require_base_url())

    fetcher = CachedFetcher(config.cache_dir, timeout=config.timeout, force=args.force_download)
    rankings = CipherRankings.from_config(omim_ids, config, fetcher=fetcher)

    if args.output_root:
        JsonRankingPublisher(output_root=args.output_root, top=args.top).publish(rankings)
    if args.duckdb:
        DuckDBParquetStorage(db_path=args.duckdb, parquet_path=args.parquet).persist(rankings)

    payload = {
        **rankings.report.to_dict(),
        "omim_ids": rankings.omim_ids(),
        "disease_codes": rankings.disease_ids(),
        "elapsed_seconds": round(time.perf_counter() - started, 3),
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
