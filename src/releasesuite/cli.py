"""releasesuite CLI.

Subcommands:
  parse     -> summary of releases detected in a release-notes file
  export    -> write parsed releases as JSON (the export schema)
  payloads  -> write release/item row payloads as JSON
  save      -> persist parsed releases into the local release store
  delete    -> delete stored releases whose versions appear in the input
  rollback  -> remove every row tagged with an upload batch id
  schema    -> write JSON Schemas for export & payload documents

Input defaults to ``source.file`` from the config; ``-`` reads stdin.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

from releasesuite.config import CONFIG_DEFAULT, ConfigError, SuiteConfig
from releasesuite.decoding import decode_release_notes
from releasesuite.errors import classify_error
from releasesuite.logging import get_logger
from releasesuite.models import ParsedRelease
from releasesuite.parser import CUTOFF_DATE, parse_multiple_release_notes
from releasesuite.payloads import export_releases_json, to_store_payloads
from releasesuite.runtime import execute_command, prepare_config
from releasesuite.schema_registry import get_schema_descriptor
from releasesuite.schemas import get_schemas
from releasesuite.store import (
    JsonReleaseStore,
    delete_existing,
    existing_versions,
    replace_existing,
    rollback_batch,
    save_releases,
)
from releasesuite.ux import (
    print_error,
    print_header,
    print_release_table,
    print_success,
    print_summary_box,
    print_warning,
)

INPUT_HELP = "Release notes file (.txt or .json); '-' reads stdin (default: source.file)"

_MAX_HELP_WIDTH = 100


class _HelpFormatter(argparse.HelpFormatter):
    def __init__(self, prog: str) -> None:
        super().__init__(prog, max_help_position=30, width=_MAX_HELP_WIDTH)


class _FormatterArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("formatter_class", _HelpFormatter)
        super().__init__(*args, **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    p = _FormatterArgumentParser(
        prog="releasesuite", description="Parse and ingest release notes"
    )
    p.add_argument("--config", default=CONFIG_DEFAULT)
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output (env: RELEASESUITE_QUIET=1)",
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(
        dest="cmd",
        required=True,
        parser_class=_FormatterArgumentParser,
        metavar="<command>",
    )

    pp = sub.add_parser("parse", help="Summarize releases detected in the input")
    pp.add_argument("--input", help=INPUT_HELP)
    pp.add_argument("--limit", type=int, default=20)

    pe = sub.add_parser("export", help="Export parsed releases to JSON")
    pe.add_argument("--input", help=INPUT_HELP)
    pe.add_argument("--output")
    pe.add_argument("--pretty", action="store_true")

    pl = sub.add_parser("payloads", help="Write release store payloads to JSON")
    pl.add_argument("--input", help=INPUT_HELP)
    pl.add_argument("--output")

    ps = sub.add_parser("save", help="Persist parsed releases into the release store")
    ps.add_argument("--input", help=INPUT_HELP)
    ps.add_argument(
        "--replace",
        action="store_true",
        help="Delete stored releases with the same versions before saving",
    )
    ps.add_argument("--batch-id", help="Tag rows with this upload batch id (default: random)")
    ps.add_argument("--dry-run", action="store_true")

    pd = sub.add_parser("delete", help="Delete stored releases whose versions appear in the input")
    pd.add_argument("--input", help=INPUT_HELP)

    pr = sub.add_parser("rollback", help="Remove every row tagged with an upload batch id")
    pr.add_argument("--batch-id", required=True)

    sch = sub.add_parser("schema", help="Emit JSON Schema files")
    sch.add_argument("--output-dir", default=".")
    sch.add_argument("--stdout", action="store_true")
    return p


def _quiet(args: argparse.Namespace) -> bool:
    return bool(args.quiet or os.environ.get("RELEASESUITE_QUIET") == "1")


def _read_input(cfg: SuiteConfig, args: argparse.Namespace) -> str:
    source = args.input or str(cfg.source_file)
    if source == "-":
        return decode_release_notes(sys.stdin.buffer.read())
    return decode_release_notes(Path(source).read_bytes())


def _parse_input(cfg: SuiteConfig, args: argparse.Namespace) -> list[ParsedRelease]:
    text = _read_input(cfg, args)
    with get_logger().timed_operation("parse", input=args.input or str(cfg.source_file)):
        releases = parse_multiple_release_notes(text) if text.strip() else []
    get_logger().log_operation("parsed", release_count=len(releases))
    return releases


def _cmd_parse(cfg: SuiteConfig, args: argparse.Namespace) -> int:
    releases = _parse_input(cfg, args)
    if not releases:
        print_warning(f"No releases detected (cutoff: {CUTOFF_DATE})")
        return 1
    if not _quiet(args):
        print_header(f"Detected releases: {len(releases)} (cutoff: {CUTOFF_DATE})")
    print_release_table(releases, limit=args.limit)
    return 0


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _cmd_export(cfg: SuiteConfig, args: argparse.Namespace) -> int:
    releases = _parse_input(cfg, args)
    out_path = Path(args.output) if args.output else cfg.export_json
    _write_text(out_path, export_releases_json(releases, pretty=args.pretty) + ("" if args.pretty else "\n"))
    if not _quiet(args):
        print_success(f"Exported {len(releases)} releases to {out_path}")
    else:
        print(f"[export] {len(releases)} releases -> {out_path}")
    return 0


def _cmd_payloads(cfg: SuiteConfig, args: argparse.Namespace) -> int:
    releases = _parse_input(cfg, args)
    out_path = Path(args.output) if args.output else cfg.payload_json
    _write_text(out_path, json.dumps(to_store_payloads(releases), indent=2) + "\n")
    if not _quiet(args):
        print_success(f"Wrote {len(releases)} release payloads to {out_path}")
    return 0


def _cmd_save(cfg: SuiteConfig, args: argparse.Namespace) -> int:
    releases = _parse_input(cfg, args)
    if not releases:
        print_warning("Nothing to save: no releases detected")
        return 1
    store = JsonReleaseStore(cfg.store_file)
    logger = get_logger()
    if args.dry_run:
        known = existing_versions(store, releases)
        for r in releases:
            action = "reuse" if r.version in known else "create"
            logger.log_release_action(action, r.version, dry_run=True, items=len(r.items))
            print(f"  [{action}] {r.version} ({len(r.items)} items)")
        return 0
    if args.replace:
        result = replace_existing(store, releases, batch_id=args.batch_id)
    else:
        result = save_releases(store, releases, batch_id=args.batch_id)
    for version in result.created:
        logger.log_release_action("create", version, batch_id=result.batch_id)
    for version in result.reused:
        logger.log_release_action("reuse", version, batch_id=result.batch_id)
    if not _quiet(args):
        print_summary_box(
            "Release store",
            [
                ("batch", result.batch_id),
                ("created", len(result.created)),
                ("existing", len(result.reused)),
                ("items", result.items_inserted),
            ],
        )
    else:
        print(f"[save] batch={result.batch_id} items={result.items_inserted}")
    return 0


def _cmd_delete(cfg: SuiteConfig, args: argparse.Namespace) -> int:
    releases = _parse_input(cfg, args)
    removed = delete_existing(JsonReleaseStore(cfg.store_file), releases)
    print_success(f"Deleted {removed} stored releases")
    return 0


def _cmd_rollback(cfg: SuiteConfig, args: argparse.Namespace) -> int:
    removed = rollback_batch(JsonReleaseStore(cfg.store_file), args.batch_id)
    if removed == 0:
        print_warning(f"No rows tagged with batch {args.batch_id}")
        return 1
    print_success(f"Removed {removed} rows from batch {args.batch_id}")
    return 0


def _cmd_schema(cfg: SuiteConfig, args: argparse.Namespace) -> int:
    schemas = get_schemas()
    if args.stdout:
        print(json.dumps(schemas, indent=2))
        return 0
    out_dir = Path(args.output_dir)
    for name, schema in schemas.items():
        path = out_dir / get_schema_descriptor(name).filename
        _write_text(path, json.dumps(schema, indent=2) + "\n")
        if not _quiet(args):
            print_success(f"Wrote {name} schema to {path}")
    return 0


_HANDLERS = {
    "parse": _cmd_parse,
    "export": _cmd_export,
    "payloads": _cmd_payloads,
    "save": _cmd_save,
    "delete": _cmd_delete,
    "rollback": _cmd_rollback,
    "schema": _cmd_schema,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = prepare_config(args)
    except ConfigError as exc:
        info = classify_error(exc)
        print_error(f"[{info.category}] {info.message}")
        return 1
    command = _HANDLERS[args.cmd]
    return execute_command(lambda: command(cfg, args), args.cmd)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
