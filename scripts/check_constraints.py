import logging
import sys

from config.settings import settings
from database.db import SessionLocal
import database.schema  # noqa: F401  모델 매핑 등록
from services.integrity import run_negative_checks


def main() -> int:
    db = SessionLocal()
    try:
        results = run_negative_checks(db)
    finally:
        db.close()

    for name, rejected in results.items():
        print(f"{'✅' if rejected else '❌'} {name}: {'거부됨' if rejected else '통과됨(오류)'}")

    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    sys.exit(main())
