"""Utility script to load calculation templates from a JSON file."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from template_catalog.application.use_cases.parameters import (
    ensure_valid_parameters,
    parse_template_record,
)
from template_catalog.domain.errors import InvalidSchemaError, RepositoryUnavailableError
from template_catalog.infrastructure.database import SessionLocal, initialize_database
from template_catalog.infrastructure.repositories import CalculationTemplateRepository

DEFAULT_SOURCE = Path(__file__).resolve().parent.parent / "data" / "templates.json"


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the catalog seed."""

    parser = argparse.ArgumentParser(
        description="Carga plantillas de cálculo en el catálogo desde un archivo JSON.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        type=Path,
        default=DEFAULT_SOURCE,
        help=f"Archivo JSON con las plantillas (por defecto: {DEFAULT_SOURCE.name})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Valida las plantillas sin guardarlas en la base de datos.",
    )
    return parser.parse_args()


def read_records(path: Path) -> list[dict[str, Any]]:
    """Return the template records stored in ``path``.

    The file may hold a JSON array or an object with a ``templates`` array.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SystemExit(f"No se encontró el archivo {path}") from exc
    except json.JSONDecodeError as exc:
        raise SystemExit(f"El archivo {path} no contiene JSON válido: {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get("templates")
    if not isinstance(payload, list):
        raise SystemExit("El archivo debe contener una lista de plantillas.")
    return [record for record in payload if isinstance(record, dict)]


def split_records(
    records: list[dict[str, Any]],
) -> tuple[list[dict[str, Any]], list[tuple[str, str]]]:
    """Separate records that pass schema validation from rejected ones."""

    valid: list[dict[str, Any]] = []
    rejected: list[tuple[str, str]] = []
    for record in records:
        try:
            template = parse_template_record(record)
            ensure_valid_parameters(template.parameters, template_id=template.id)
        except InvalidSchemaError as exc:
            rejected.append((exc.template_id or "<sin id>", str(exc)))
            continue
        valid.append(record)
    return valid, rejected


def main() -> None:
    """Validate and store the templates found in the given file."""

    args = parse_args()
    valid, rejected = split_records(read_records(args.source))

    for template_id, reason in rejected:
        print(f"Plantilla rechazada {template_id}: {reason}")

    if args.dry_run:
        print(f"{len(valid)} plantillas válidas, {len(rejected)} rechazadas.")
        return

    initialize_database()

    session = SessionLocal()
    try:
        repository = CalculationTemplateRepository(session)
        for record in valid:
            repository.save_record(record)
    except RepositoryUnavailableError as exc:
        raise SystemExit(f"Error al guardar las plantillas en la base de datos: {exc}") from exc
    finally:
        session.close()

    print(f"{len(valid)} plantillas guardadas, {len(rejected)} rechazadas.")


if __name__ == "__main__":
    main()
