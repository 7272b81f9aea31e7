#!/usr/bin/env python
import sys
from pathlib import Path

from alembic.config import Config
from alembic.script import ScriptDirectory


def check_migrations(backend_dir: Path | None = None) -> int:
    """Check if migrations are in a valid state."""
    backend_dir = backend_dir or Path(__file__).parent.parent
    alembic_ini = backend_dir / "alembic.ini"
    if not alembic_ini.exists():
        print("Error: alembic.ini not found")
        return 1

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(backend_dir / "alembic"))
    script = ScriptDirectory.from_config(config)
    revisions = list(script.walk_revisions())

    revision_ids = [rev.revision for rev in revisions]
    if len(revision_ids) != len(set(revision_ids)):
        print("Error: Duplicate revision IDs found")
        return 1

    for rev in revisions:
        if rev.down_revision and rev.down_revision not in revision_ids:
            print(f"Error: Missing dependency for revision {rev.revision}")
            return 1

    if len(script.get_heads()) != 1:
        print("Error: Multiple migration heads found")
        return 1

    print("Migration check passed!")
    return 0


if __name__ == "__main__":
    sys.exit(check_migrations())
