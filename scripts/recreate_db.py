# -*- coding: utf-8 -*-
"""
Full reset of a SQLite database plus an admin login and the default plans.

Usage from the project root:
  python scripts/recreate_db.py [--username admin] [--password admin]
"""

from __future__ import annotations

import argparse
import sys
import traceback
from pathlib import Path
from typing import Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backoffice import create_app  # noqa: E402
from backoffice.extensions import db  # noqa: E402
from backoffice.models import User  # noqa: E402
from backoffice.repository import SqlStore  # noqa: E402

from seed_commission_plans import seed  # noqa: E402


def _db_path_from_uri(uri: str) -> Optional[Path]:
    if uri.startswith("sqlite:///"):
        return Path(uri.replace("sqlite:///", "")).resolve()
    return None


def main(argv=None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", default="admin")
    args = parser.parse_args(argv)

    app = create_app()
    with app.app_context():
        uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
        print(f"[recreate] SQLALCHEMY_DATABASE_URI = {uri}")

        db_path = _db_path_from_uri(uri)
        if db_path is None:
            print("[recreate] not a SQLite file, refusing to drop it")
            return 1
        db_path.parent.mkdir(parents=True, exist_ok=True)
        if db_path.exists():
            print(f"[recreate] removing {db_path}")
            db.engine.dispose()
            db_path.unlink()

        print("[recreate] creating tables...")
        db.create_all()

        admin = User(username=args.username, full_name="Administrator", role="admin")
        admin.set_password(args.password)
        db.session.add(admin)
        db.session.commit()
        print(f"[recreate] user {admin.username} (id={admin.id}, role=admin)")

        seed(SqlStore())
        print("[recreate] done.")
        return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception:
        print("\n[recreate] FAILED:")
        traceback.print_exc()
        sys.exit(1)
