from __future__ import annotations
from pathlib import Path
from typing import List, Optional
import argparse
import logging
import sys

from osha_log.config.env import configure_logging
from osha_log.dashboard.metrics import compute_dashboard
from osha_log.exports.reports import dashboard_md, validation_report_md
from osha_log.exports.writers import EXPORT_FILENAMES, serialize_incidents, serialize_summaries
from osha_log.records.validation import advisory_warnings
from osha_log.seed import seed_store
from osha_log.store import RecordStore, build_store

log = logging.getLogger(__name__)


def _export(store: RecordStore, kind: str, output: Optional[str]) -> int:
    if kind == "incidents":
        records, body_fn = store.list_incidents(), serialize_incidents
    else:
        records, body_fn = store.list_summaries(), serialize_summaries
    if not records:
        print(f"There are no {kind} to export.", file=sys.stderr)
        return 1
    body = body_fn(records)
    if output == "-":
        sys.stdout.write(body)
        return 0
    path = Path(output or EXPORT_FILENAMES[kind])
    path.write_text(body, encoding="utf-8")
    log.info("wrote %d %s to %s", len(records), kind, path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="osha-log", description="OSHA 300/301/300A logbook")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("seed", help="load sample incidents and a 300A summary")
    s.add_argument("--keep", action="store_true", help="keep existing records")

    e = sub.add_parser("export", help="write an OSHA submission CSV")
    e.add_argument("kind", choices=sorted(EXPORT_FILENAMES))
    e.add_argument("-o", "--output", help="file path, or - for stdout (default: OSHA filename)")

    sub.add_parser("dashboard", help="print dashboard and advisory checks as Markdown")
    return p


def main(argv: Optional[List[str]] = None, store: Optional[RecordStore] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    store = store if store is not None else build_store()

    if args.command == "seed":
        seed_store(store, clear=not args.keep)
        return 0
    if args.command == "export":
        return _export(store, args.kind, args.output)

    incidents = store.list_incidents()
    print(dashboard_md(compute_dashboard(incidents)))
    print(validation_report_md(advisory_warnings(incidents, store.list_summaries())))
    return 0


if __name__ == "__main__":
    sys.exit(main())
