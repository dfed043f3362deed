"""CLI entry point.

This script extracts a job posting into a normalized record and, when a CV is
given, runs the file through the stored-text round trip and assembles the
analysis submission. A JSON summary is written to disk (file bytes are not).

Examples:
    python run_extract.py --url https://hk.jobsdb.com/job/12345 --out job.json
    python run_extract.py --html-file posting.html --page-url https://example.com/careers/42
    python run_extract.py --url https://hk.jobsdb.com/job/12345 --cv cv.pdf --out submission.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from jobcv_engine.assemble import RecordAssembler
from jobcv_engine.coordinator import ExtractionCoordinator
from jobcv_engine.documents import JobPage, fetch_page
from jobcv_engine.errors import JobCVError
from jobcv_engine.settings import get_settings
from jobcv_engine.storage import StoredCV


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Extract a job posting and prepare a CV analysis submission.")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--url", type=str, help="Job posting URL to fetch.")
    src.add_argument("--html-file", type=str, help="Saved HTML of a job posting.")
    p.add_argument("--page-url", type=str, default="", help="Original URL of --html-file (enables URL heuristics).")
    p.add_argument("--cv", type=str, default=None, help="CV file to attach to the submission.")
    p.add_argument("--mime-type", type=str, default="application/pdf", help="MIME type of the CV file.")
    p.add_argument("--out", type=str, default="job.json", help="Output JSON file path.")
    p.add_argument("--log-level", type=str, default=None, help="Log level (default from JOBCV_LOG_LEVEL).")
    return p.parse_args(argv)


def load_page(args: argparse.Namespace) -> JobPage:
    if args.url:
        return fetch_page(args.url)
    html = Path(args.html_file).expanduser().read_text(encoding="utf-8")
    return JobPage.from_html(html, url=args.page_url)


def build_summary(args: argparse.Namespace, page: JobPage) -> Dict[str, Any]:
    strategy, job = ExtractionCoordinator().extract_with_strategy(page)
    summary: Dict[str, Any] = {"extractor": strategy, "job": job.to_payload()}

    if args.cv:
        cv_path = Path(args.cv).expanduser()
        stored = StoredCV.from_bytes(cv_path.read_bytes(), name=cv_path.name, mime_type=args.mime_type)
        submission = RecordAssembler().assemble(job, stored.content(), stored.name, stored.mime_type)
        summary["file"] = {
            "name": submission.file.name,
            "size": len(submission.file.data),
            "mimeType": submission.file.mime_type,
            "encodedLength": len(stored.content_base64),
        }
        summary["metadata"] = submission.metadata.model_dump(mode="json", by_alias=True)
    return summary


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=(args.log_level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        summary = build_summary(args, load_page(args))
    except JobCVError as exc:
        print(f"Failed ({exc.remedy}): {exc}", file=sys.stderr)
        return 1

    out_path = Path(args.out).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")

    job = summary["job"]
    print(
        f"Wrote {job.get('title') or 'untitled job'} "
        f"({len(job['responsibilities'])} responsibilities, {len(job['requirements'])} requirements) to: {out_path}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
