"""
Command-line entry point: ``provas-extract``.

Subcommands:
    one EXAM [--answer-key KEY] [--output FILE]
    batch EXAM_DIR ANSWER_DIR [--workers N] [--timeout S] [--output FILE] [--records FILE]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from provas_toolkit import __version__
from provas_toolkit.batch import BatchOrchestrator
from provas_toolkit.core.utils.serialization import (
    batch_to_dict,
    result_to_dict,
    save_json,
    save_records_jsonl,
)
from provas_toolkit.extractor import (
    BatchConfig,
    DiagnosticsCollector,
    ExtractionConfig,
    ExtractionError,
    extract_one,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="provas-extract",
        description="Extract exam questions from ENEM/vestibular documents.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--diagnostics", help="Write detection diagnostics JSON to this path")

    subparsers = parser.add_subparsers(dest="command", required=True)

    one = subparsers.add_parser("one", help="Extract a single exam")
    one.add_argument("exam", help="Exam document (.pdf or .txt)")
    one.add_argument("--answer-key", help="Answer-key document")
    one.add_argument("--output", help="Write the result JSON to this path")
    one.add_argument(
        "--keep-page-numbers",
        action="store_true",
        help="Do not drop digit-only lines from exam text",
    )

    batch = subparsers.add_parser("batch", help="Extract every exam in a directory")
    batch.add_argument("exam_dir", help="Directory of exam documents")
    batch.add_argument("answer_dir", help="Directory of answer-key documents")
    batch.add_argument("--workers", type=int, default=4, help="Worker threads")
    batch.add_argument("--timeout", type=float, help="Per-file timeout in seconds")
    batch.add_argument("--output", help="Write the batch report JSON to this path")
    batch.add_argument("--records", help="Write every question record as JSONL to this path")

    return parser


def _run_one(args: argparse.Namespace, collector: Optional[DiagnosticsCollector]) -> int:
    config = ExtractionConfig(strip_page_numbers=not args.keep_page_numbers)
    try:
        result = extract_one(
            Path(args.exam),
            Path(args.answer_key) if args.answer_key else None,
            config=config,
            diagnostics_collector=collector,
        )
    except ExtractionError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    summary = result.validation
    print(
        f"{result.filename}: {summary.total_questions} questions "
        f"({summary.valid_count} valid, {summary.with_answer} with answer, "
        f"{result.exam_type.value}, {result.extraction_method})"
    )
    for warning in result.warnings:
        print(f"  warning: {warning}")

    if args.output:
        save_json(Path(args.output), result_to_dict(result))
        print(f"Result written to {args.output}")
    return 0


def _run_batch(args: argparse.Namespace, collector: Optional[DiagnosticsCollector]) -> int:
    config = BatchConfig(max_workers=args.workers, per_file_timeout=args.timeout)
    orchestrator = BatchOrchestrator(
        Path(args.exam_dir),
        Path(args.answer_dir),
        config=config,
        diagnostics_collector=collector,
    )
    try:
        result = orchestrator.run()
    except KeyboardInterrupt:
        orchestrator.cancel()
        logger.warning("Interrupted")
        return 130
    except ExtractionError as e:
        logger.error(str(e))
        return 1

    stats = result.stats
    print(
        f"{stats.success_count}/{stats.total_files} files extracted "
        f"({stats.success_rate}%), {stats.total_questions} questions, "
        f"{stats.answer_rate}% with answer"
    )
    for error in stats.errors:
        print(f"  error: {error.filename}: {error.error_type}: {error.error}")
    for issue in result.quality.issues:
        print(f"  quality: {issue.filename}: {issue.message}")

    if args.output:
        save_json(Path(args.output), batch_to_dict(result))
        print(f"Report written to {args.output}")
    if args.records:
        count = save_records_jsonl(
            Path(args.records),
            (q for success in result.successes for q in success.questions),
        )
        print(f"{count} records written to {args.records}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    collector = DiagnosticsCollector() if args.diagnostics else None

    if args.command == "one":
        code = _run_one(args, collector)
    else:
        code = _run_batch(args, collector)

    if collector is not None:
        collector.generate_report().save(Path(args.diagnostics))

    return code


if __name__ == "__main__":
    sys.exit(main())
