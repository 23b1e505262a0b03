"""Seed areas, projects and problem types used by the ticket creation form."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

from helpdesk.core.logging import setup_logging  # noqa: E402
from helpdesk.db.session import SessionLocal  # noqa: E402
from helpdesk.models.enums import parse_role  # noqa: E402
from helpdesk.models.reference import Area, ProblemType, Project  # noqa: E402
from helpdesk.models.user_role import UserRoleRecord  # noqa: E402

logger = logging.getLogger("seed_reference_data")

AREAS = ["Marketing", "Académico", "Campaña", "Soporte", "Comercial", "Administrativo"]
PROJECTS = ["CCD", "EGP", "Digital College", "Vicidial", "Pasar Base", "IAC", "Masivos", "Gestor", "CRM"]
PROBLEM_TYPES = ["Error en el sistema", "No cargan archivos", "Bug", "Otro"]


def _upsert_names(db, model, names: list[str]) -> int:  # noqa: ANN001
    inserted = 0
    for index, name in enumerate(names, start=1):
        row = db.get(model, index)
        if row is None:
            db.add(model(id=index, name=name))
            inserted += 1
        elif row.name != name:
            row.name = name
    return inserted


def _parse_assignment(raw: str) -> tuple[str, str, int | None]:
    # user_id:role[:area_id]
    parts = raw.split(":")
    if len(parts) not in {2, 3} or not parts[0].strip():
        raise argparse.ArgumentTypeError(f"invalid role assignment: {raw!r}")
    area_id = int(parts[2]) if len(parts) == 3 and parts[2].strip() else None
    return parts[0].strip(), parse_role(parts[1]).value, area_id


def seed(assignments: list[tuple[str, str, int | None]]) -> None:
    db = SessionLocal()
    try:
        counts = {
            "areas": _upsert_names(db, Area, AREAS),
            "proyectos": _upsert_names(db, Project, PROJECTS),
            "tipos_problema": _upsert_names(db, ProblemType, PROBLEM_TYPES),
        }
        db.flush()
        for user_id, role, area_id in assignments:
            record = db.get(UserRoleRecord, user_id)
            if record is None:
                record = UserRoleRecord(user_id=user_id)
                db.add(record)
            record.role = role
            record.area_id = area_id
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    for table, inserted in counts.items():
        logger.info("Seeded %s: %d new rows", table, inserted)
    if assignments:
        logger.info("Applied %d role assignments", len(assignments))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--role",
        action="append",
        default=[],
        type=_parse_assignment,
        metavar="USER_ID:ROLE[:AREA_ID]",
        help="Assign a role (admin, worker, user) to a user id; repeatable.",
    )
    args = parser.parse_args()
    setup_logging()
    seed(args.role)


if __name__ == "__main__":
    main()
