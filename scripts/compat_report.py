"""Compatibility matrix for the fixture schemas and greeter revisions.

Audits every record family (v0 <-> v1) and runs every greeter client/server
pairing, then prints one line per check.

Usage (pythonic):
    from scripts.compat_report import run_matrix
    rows = run_matrix(codec=create_codec("defaulting"))

Run: python scripts/compat_report.py --codec json
"""
from __future__ import annotations

import argparse
from typing import Any, Dict, List

from schemacompat.channel import create_client, create_server, try_exchange
from schemacompat.codec import Codec, create_codec, default_codec
from schemacompat.schemas import RECORD_NAMES, REVISIONS, sample, schema_for
from schemacompat.utils.logger_util import get_logger
from schemacompat.verifier import audit, expected_compatibility

logger = get_logger(__name__)


def run_matrix(codec: Codec | None = None) -> List[Dict[str, Any]]:
    codec = codec or default_codec()
    rows: List[Dict[str, Any]] = []

    for record in RECORD_NAMES:
        old, new = sample(schema_for(record, "v0")), sample(schema_for(record, "v1"))
        report = audit(old, new, codec)
        predicted = expected_compatibility(report.diff, codec.policy)
        rows.append({
            "kind": "record",
            "subject": record,
            "added": list(report.diff.added),
            "removed": list(report.diff.removed),
            "backward": report.backward.compatible,
            "forward": report.forward.compatible,
            "mode": report.mode.value,
            "predicted": predicted,
            "matches_prediction": predicted == (report.backward.compatible, report.forward.compatible),
        })

    for client_rev in REVISIONS:
        for server_rev in REVISIONS:
            outcome = try_exchange(create_client(client_rev, codec=codec), create_server(server_rev, codec=codec))
            rows.append({
                "kind": "exchange",
                "subject": f"client {client_rev} -> server {server_rev}",
                "ok": outcome.ok,
                "failed_hop": outcome.failed_hop,
                "error": str(outcome.error) if outcome.error else None,
                "display": outcome.result.display if outcome.result else None,
            })
    return rows


def format_rows(rows: List[Dict[str, Any]]) -> List[str]:
    lines = []
    for r in rows:
        if r["kind"] == "record":
            change = ", ".join([f"+{f}" for f in r["added"]] + [f"-{f}" for f in r["removed"]]) or "no change"
            flag = "" if r["matches_prediction"] else "  !! differs from prediction"
            lines.append(f"{r['subject']:<16} {change:<36} backward={r['backward']!s:<5} forward={r['forward']!s:<5} {r['mode']}{flag}")
        else:
            status = "ok" if r["ok"] else f"failed on {r['failed_hop']}: {r['error']}"
            lines.append(f"{r['subject']:<26} {status}")
    return lines


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--codec", default=None, help="codec name (json, defaulting); defaults to SCHEMACOMPAT_CODEC")
    args = parser.parse_args(argv)

    codec = create_codec(args.codec) if args.codec else default_codec()
    rows = run_matrix(codec)
    for line in format_rows(rows):
        print(line)
    mismatches = [r["subject"] for r in rows if r["kind"] == "record" and not r["matches_prediction"]]
    logger.info("compat report under %s: %d checks, %d prediction mismatches", codec.name, len(rows), len(mismatches))
    return 1 if mismatches else 0


if __name__ == "__main__":
    raise SystemExit(main())
