import logging
import sys

from config.settings import settings
from database.db import SessionLocal
from services.audits import AUDIT_QUERIES, run_all_audits


def main() -> int:
    db = SessionLocal()
    try:
        report = run_all_audits(db)
    finally:
        db.close()

    for name, rows in report.results.items():
        audit = AUDIT_QUERIES[name]
        mark = "✅" if not rows else ("ℹ️" if audit.category == "gap" else "❌")
        print(f"{mark} [{audit.category}] {name}: {len(rows)}건 - {audit.description}")
        for row in rows:
            print(f"    {row}")

    if report.is_consistent:
        print("✅ 무결성 위반 없음")
        return 0
    print(f"❌ 무결성 위반 {len(report.violations)}종 발견")
    return 1


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    sys.exit(main())
