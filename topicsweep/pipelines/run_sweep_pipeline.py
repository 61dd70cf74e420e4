"""
Batch entry point: TF-IDF table + held-out perplexity sweep over K.

Usage:
  topicsweep --tokens data/tokens.csv --output-dir output --k 2 3 4 5 6
  topicsweep --config sweep.yaml --backend gensim --workers 2
  topicsweep --documents data/abstracts.csv   # tag raw text with NLTK first

Outputs (in --output-dir): tfidf.csv, perplexity_curve.csv (k,perplexity),
top_terms.csv, summary.json
"""
from __future__ import annotations
import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import pandas as pd
import yaml
from pydantic import ValidationError

from topicsweep.core.file_handler.codec import CsvCodec
from topicsweep.core.file_handler.compression import GzipCompression
from topicsweep.core.file_handler.storage import LocalStorage
from topicsweep.messages import sweep_messages as msg
from topicsweep.schemas.pipeline import SweepPipelineRequest
from topicsweep.schemas.topic import CurvePointSchema, SweepSummary, TopicSummary
from topicsweep.services.artifact_cache import ArtifactCache
from topicsweep.services.file_service import FileService
from topicsweep.services.topic_sweep_service import SweepResult, TopicSweepService
from topicsweep.utils.exceptions import TopicSweepError
from topicsweep.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

TEXT_DTYPES = {
    "document_id": str,
    "surface_form": str,
    "lemma": str,
    "part_of_speech": str,
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="topicsweep", description=__doc__.split("\n")[1])
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--tokens", help="CSV(.gz) token stream: document_id,surface_form,lemma,part_of_speech")
    src.add_argument("--documents", help="CSV(.gz) raw documents: document_id,text")
    ap.add_argument("--config", help="YAML file with SweepPipelineRequest fields")
    ap.add_argument("--output-dir")
    ap.add_argument("--cache-dir")
    ap.add_argument("--k", nargs="+", type=int, help="Candidate topic counts (ascending)")
    ap.add_argument("--test-fraction", type=float)
    ap.add_argument("--seed", type=int)
    ap.add_argument("--backend", choices=["sklearn", "gensim"])
    ap.add_argument("--workers", type=int)
    ap.add_argument("--fit-timeout", type=float, help="Seconds allowed per K")
    ap.add_argument("--force", action="store_true", help="Ignore cached artifacts")
    ap.add_argument("--log-level")
    return ap


def load_request(args: argparse.Namespace) -> SweepPipelineRequest:
    data = {}
    if args.config:
        with open(args.config, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    overrides = {
        "tokens_path": args.tokens,
        "documents_path": args.documents,
        "output_dir": args.output_dir,
        "cache_dir": args.cache_dir,
        "k_values": args.k,
        "test_fraction": args.test_fraction,
        "seed": args.seed,
        "backend": args.backend,
        "max_workers": args.workers,
        "fit_timeout_seconds": args.fit_timeout,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    if args.force:
        data["force"] = True
    return SweepPipelineRequest(**data)


def load_tokens(io: FileService, request: SweepPipelineRequest) -> pd.DataFrame:
    if request.tokens_path:
        tokens = io.read_df(request.tokens_path)
        source = request.tokens_path
    elif request.documents_path:
        from topicsweep.core.tagging.config import TaggingConfig
        from topicsweep.core.tagging.nltk_tagger import NltkTokenTagger

        documents = io.read_df(request.documents_path)
        tokens = NltkTokenTagger(TaggingConfig(text_column=request.text_column)).tag(documents)
        source = request.documents_path
    else:
        raise ValueError("Either tokens_path or documents_path is required")

    logger.info(
        msg.TOKENS_LOADED.format(
            n_tokens=len(tokens),
            n_documents=tokens["document_id"].nunique() if "document_id" in tokens else 0,
            path=source,
        )
    )
    return tokens


def build_summary(
    result: SweepResult, tfidf_path: str, curve_path: str
) -> SweepSummary:
    return SweepSummary(
        best_k=result.best_k,
        curve=[CurvePointSchema(k=p.k, perplexity=p.perplexity) for p in result.curve.points],
        failures=result.curve.failures,
        topics=[TopicSummary(**t) for t in result.topics],
        n_documents=len(result.split.train) + len(result.split.test),
        n_train=len(result.split.train),
        n_test=len(result.split.test),
        empty_documents=[str(d) for d in result.empty_documents],
        tfidf_path=tfidf_path,
        curve_path=curve_path,
        recomputed=result.recomputed,
    )


def run(request: SweepPipelineRequest) -> SweepSummary:
    codec = CsvCodec(dtype=TEXT_DTYPES)
    io = FileService(storage=LocalStorage("."), codec=codec, compression=GzipCompression())
    cache = ArtifactCache(
        FileService(
            storage=LocalStorage(request.cache_dir),
            codec=codec,
            compression=GzipCompression(),
        )
    )

    tokens = load_tokens(io, request)
    result = TopicSweepService(cache).run(tokens, request)

    out = Path(request.output_dir)
    tfidf_path = io.write_df(result.tfidf, str(out / "tfidf.csv"))
    curve_path = io.write_df(result.curve.to_frame(), str(out / "perplexity_curve.csv"))
    io.write_df(result.top_terms, str(out / "top_terms.csv"))
    logger.info(msg.OUTPUTS_WRITTEN.format(tfidf=tfidf_path, curve=curve_path))

    summary = build_summary(result, tfidf_path, curve_path)
    io.write_raw(summary.model_dump_json(indent=2).encode("utf-8"), str(out / "summary.json"))
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    t0 = time.time()
    try:
        request = load_request(args)
        summary = run(request)
    except (TopicSweepError, ValidationError, ValueError, KeyError, FileNotFoundError) as e:
        logger.error(f"❌ Topic sweep failed: {e}")
        return 1

    print(summary.model_dump_json(indent=2))
    logger.info(f"⏱️ Total time: {time.time() - t0:.1f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
