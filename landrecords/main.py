import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

import uvicorn

from landrecords.api import create_app
from landrecords.config import get_settings
from landrecords.database import build_session_factory
from landrecords.errors import AppError
from landrecords.orchestrator import UploadOrchestrator


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bulk import customers, properties and property tax records")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="check a batch without writing anything")
    validate_parser.add_argument("--entity-type", required=True, help="customer, property, tax, tax_assessment or tax_payment")
    validate_parser.add_argument("--input", required=True, type=Path, help="JSON array or JSONL file of rows")

    commit_parser = subparsers.add_parser("commit", help="validate a batch, then create every valid row")
    commit_parser.add_argument("--entity-type", required=True, help="customer, property, tax, tax_assessment or tax_payment")
    commit_parser.add_argument("--input", required=True, type=Path, help="JSON array or JSONL file of rows")
    commit_parser.add_argument("--user-id", required=True, help="id recorded as the creator of every row")
    commit_parser.add_argument("--report", required=False, type=Path, help="write the validation and commit results here")

    template_parser = subparsers.add_parser("template", help="print spreadsheet headers and an example row")
    template_parser.add_argument("entity_type")
    template_parser.add_argument("--customer-type", required=False, help="customer subtype, PERSON by default")

    subparsers.add_parser("serve", help="run the HTTP API")

    return parser.parse_args()


def load_rows(input_path: Path) -> list[dict[str, Any]]:
    if not input_path.exists():
        raise FileNotFoundError(f"input file not found: {input_path}")

    text = input_path.read_text(encoding="utf-8")
    if text.lstrip().startswith("["):
        return json.loads(text)

    rows: list[dict[str, Any]] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        rows.append(json.loads(line))
    return rows


def write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as outfile:
        json.dump(payload, outfile, indent=2, sort_keys=True, default=str)
        outfile.write("\n")


def main() -> None:
    args = parse_args()
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command == "serve":
        uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
        return

    session_factory = build_session_factory(settings.database_url)
    orchestrator = UploadOrchestrator.from_settings(settings, session_factory)

    try:
        if args.command == "template":
            template = orchestrator.template(args.entity_type, args.customer_type)
            print(json.dumps(template.to_dict(), indent=2))
            return

        rows = load_rows(args.input)
        validation = orchestrator.validate(args.entity_type, rows)
        print(
            "total={total} valid={valid} invalid={invalid} can_commit={can_commit}".format(
                total=validation.total_records,
                valid=validation.valid_records,
                invalid=validation.invalid_records,
                can_commit=validation.can_commit,
            )
        )
        for invalid in validation.errors:
            print(f"row={invalid.row} errors={'; '.join(invalid.errors)}")

        if args.command == "validate":
            if validation.invalid_records or not validation.can_commit:
                raise SystemExit(1)
            return

        if not validation.can_commit:
            raise SystemExit(1)

        result = orchestrator.commit(args.entity_type, validation.valid_data, args.user_id)
        print(f"successful={result.successful} failed={result.failed}")
        for failure in result.errors:
            print(f"row={failure.row} error={failure.error}")
        if args.report:
            write_json(args.report, {"validation": validation.to_dict(), "commit": result.to_dict()})

        if validation.invalid_records or result.failed:
            raise SystemExit(1)
    except (AppError, FileNotFoundError, json.JSONDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
