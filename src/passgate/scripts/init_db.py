from __future__ import annotations

from passgate.db.init_db import create_all


def main() -> int:
    create_all()
    print("✅ tokens table created")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
