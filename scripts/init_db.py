import argparse
import logging

from config.settings import settings
from database.db import SessionLocal, engine
from database.schema import init_db, grant_instructor_role
from database.seed import seed_sample_data

logger = logging.getLogger(__name__)


def main(drop_existing: bool = False, seed: bool = True):
    # ✅ 1) 테이블/인덱스/뷰 생성
    init_db(engine, drop_existing=drop_existing)

    # ✅ 2) 역할 기반 접근 제어 (MySQL만)
    grant_instructor_role(engine, db_name=settings.DB_NAME)

    # ✅ 3) 샘플 데이터
    if seed:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()

    print(f"✅ DB 초기화 완료 ({engine.dialect.name})")


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    parser = argparse.ArgumentParser(description="스키마 생성 + 샘플 데이터 입력")
    parser.add_argument("--drop", action="store_true", help="기존 뷰/테이블을 지우고 다시 생성")
    parser.add_argument("--no-seed", action="store_true", help="샘플 데이터 입력 생략")
    args = parser.parse_args()
    main(drop_existing=args.drop, seed=not args.no_seed)
