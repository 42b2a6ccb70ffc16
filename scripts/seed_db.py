"""
Seed script for the reports collection (mock DB or Firestore).

Usage:
  - Dry run (default): python -m scripts.seed_db
  - Apply to configured DB: python -m scripts.seed_db --apply
  - Other seed file: python -m scripts.seed_db --file ./my_reports.json --apply
  - Force mock DB even if FIREBASE configured: python -m scripts.seed_db --apply --force-mock

Behavior:
  - Loads a JSON array of report documents (default `reports_seed.json` in the cwd).
  - Fills `status` ("pending") and `createdAt` (now) when a document has none;
    ISO-8601 `createdAt` strings are parsed into timestamps.
  - Writes each document through the report store, so it gets a fresh id.
"""

import argparse
import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, List

from app.config.firebase import initialize_firestore
from app.core.settings import settings
from app.models.report import ReportStatus
from app.services.report_store import ReportStore


def load_seed(path: str) -> List[Dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        seed = json.load(f)
    if not isinstance(seed, list):
        raise ValueError(f"Seed file must contain a JSON array of reports: {path}")
    return seed


def prepare_document(raw: Dict[str, Any]) -> Dict[str, Any]:
    document = {k: v for k, v in raw.items() if k not in ("id", "_id")}
    document.setdefault("status", ReportStatus.PENDING.value)

    created_at = document.get("createdAt")
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    if created_at is None:
        created_at = datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    document["createdAt"] = created_at
    return document


def write_to_store(store: ReportStore, seed: List[Dict[str, Any]], apply: bool = False) -> int:
    """Insert the seed reports; returns how many were written."""
    written = 0
    for index, raw in enumerate(seed):
        document = prepare_document(raw)
        print(f"Preparing: {store.collection}[{index}] {document.get('name')!r}")
        if not apply:
            continue
        report_id = store.insert(document)
        written += 1
        print(f"Wrote: {store.collection}/{report_id}")
    return written


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the DB instead of dry-run")
    parser.add_argument("--force-mock", action="store_true", help="Force use of mock DB even if FIREBASE configured")
    parser.add_argument("--file", default=os.path.join(os.getcwd(), "reports_seed.json"), help="Seed file path")
    args = parser.parse_args(argv)

    if not os.path.exists(args.file):
        print(f"Seed file not found: {args.file}")
        return 1

    seed = load_seed(args.file)

    if args.force_mock:
        print("Forcing mock DB usage for this run.")
        settings.USE_MOCK_DB = True

    store = ReportStore(
        initialize_firestore(settings),
        collection=settings.REPORTS_COLLECTION,
        timeout=settings.FIRESTORE_TIMEOUT_SECONDS,
    )
    written = write_to_store(store, seed, apply=args.apply)

    if args.apply:
        print(f"Seeding completed: {written} report(s).")
    else:
        print("Dry run complete. Re-run with --apply to write to DB.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
