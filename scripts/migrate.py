"""Script to run document table migrations."""

import sys

from alembic import command
from alembic.config import Config


def run_migrations(revision: str = "head") -> None:
    """Upgrade the database to ``revision``."""
    alembic_cfg = Config("alembic.ini")

    try:
        print(f"Upgrading documents schema to {revision}...")
        command.upgrade(alembic_cfg, revision)
        print("✓ Migrations completed successfully!")
    except Exception as e:
        print(f"✗ Migration failed: {e}", file=sys.stderr)
        sys.exit(1)


def rollback(revision: str = "-1") -> None:
    """Downgrade the database to ``revision``."""
    alembic_cfg = Config("alembic.ini")

    try:
        print(f"Downgrading documents schema to {revision}...")
        command.downgrade(alembic_cfg, revision)
        print("✓ Rollback completed successfully!")
    except Exception as e:
        print(f"✗ Rollback failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) == 1:
        run_migrations()
    elif sys.argv[1] == "upgrade":
        run_migrations(*sys.argv[2:3])
    elif sys.argv[1] == "downgrade":
        rollback(*sys.argv[2:3])
    else:
        print("Usage: python scripts/migrate.py [upgrade [rev] | downgrade [rev]]")
