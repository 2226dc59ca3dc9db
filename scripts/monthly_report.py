#!/usr/bin/env python3
"""Print a person's monthly mileage report from a persisted state file.

Usage
-----
::

    export MILEAGE_STORAGE_DIR="$HOME/.local/share/mileage"
    python scripts/monthly_report.py --person 1 --month 3 --year 2024

Options::

    --person ID        Person id (default: list people and exit)
    --month N          Calendar month, 1-12 (default: current month)
    --year YYYY        Year (default: current year)
    --storage-dir DIR  Directory holding the state file (overrides env)
    --json             Output as machine-readable JSON
    --verbose          Enable debug logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pymileage import MileageConfig, StateStore, format_date, load_state  # noqa: E402
from pymileage.columns import headers, render_rows, trip_columns  # noqa: E402
from pymileage.formatting import month_name  # noqa: E402
from pymileage.persistence import slot_from_config  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    today = date.today()
    parser = argparse.ArgumentParser(description="Print a monthly mileage reimbursement report.")
    parser.add_argument("--person", help="Person id")
    parser.add_argument("--month", type=int, default=today.month, help="Calendar month 1-12")
    parser.add_argument("--year", type=int, default=today.year)
    parser.add_argument("--storage-dir", type=Path, help="Directory holding the state file")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _print_people(store: StateStore) -> None:
    for person in store.snapshot.people:
        print(f"{person.id}\t{person.full_name}\t{person.role.value}")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.storage_dir is not None:
        overrides["storage_dir"] = args.storage_dir
    config = MileageConfig.from_env(**overrides)
    store = StateStore(load_state(slot_from_config(config)))

    if args.person is None:
        _print_people(store)
        return 0

    if not 1 <= args.month <= 12:
        print(f"month must be between 1 and 12, got {args.month}", file=sys.stderr)
        return 2

    person = store.get_person(args.person)
    report = store.generate_monthly_report(args.person, args.month - 1, args.year)
    if person is None or report is None:
        print("No trips to report.", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(report.to_document(), indent=2, ensure_ascii=False))
        return 0

    columns = trip_columns(store.snapshot)
    print(f"Persona: {person.full_name}")
    print(f"Ruolo: {person.role.value}")
    print(f"Periodo: {month_name(report.month)} {report.year}")
    print(f"Totale Kilometri: {report.total_distance:.1f} km")
    print(f"Importo Totale: {report.total_reimbursement:.2f} €")
    print()
    print("\t".join(headers(columns)))
    for row in render_rows(report.trips, columns):
        print("\t".join(row))
    print(f"\nGenerato il {format_date(date.today())}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
