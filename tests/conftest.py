"""Pytest configuration and shared fixtures."""

import os

# 모듈 수준 엔진이 로컬 파일을 만들지 않도록 메모리 DB 사용
os.environ.setdefault("SQLITE_PATH", ":memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import get_db, make_engine
from database.schema import init_db
from database.seed import seed_sample_data
from main import app


@pytest.fixture
def engine():
    """FK 강제가 켜진 빈 메모리 DB (테이블 + 뷰 생성 완료)."""
    eng = make_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine) -> Session:
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def seeded_db(db) -> Session:
    """샘플 데이터(John Doe / Alice Smith / Database Systems / A) 입력 완료."""
    seed_sample_data(db)
    return db


# 제약조건 없이 같은 이름/컬럼만 가진 테이블: 감사 쿼리가 위반을 찾아내는지 확인용
LOOSE_DDL = [
    "CREATE TABLE Student (student_id INTEGER, first_name VARCHAR(50), last_name VARCHAR(50), "
    "email VARCHAR(100), enrollment_date DATE)",
    "CREATE TABLE Instructor (instructor_id INTEGER, first_name VARCHAR(50), last_name VARCHAR(50), "
    "department VARCHAR(50))",
    "CREATE TABLE Course (course_id INTEGER, course_name VARCHAR(100), credits INTEGER, instructor_id INTEGER)",
    "CREATE TABLE Enrollment (enrollment_id INTEGER, student_id INTEGER, course_id INTEGER, "
    "enrollment_date DATE, grade CHAR(2))",
]

LOOSE_ROWS = [
    "INSERT INTO Student VALUES (1, 'John', 'Doe', 'john@uni.edu', '2023-09-01')",
    "INSERT INTO Student VALUES (2, 'Jane', NULL, 'jane@uni.edu', '2023-09-01')",
    "INSERT INTO Student VALUES (3, 'Bob', 'Lee', 'bob@uni.edu', '2023-09-01')",
    "INSERT INTO Student VALUES (3, 'Bob', 'Lee', 'bob2@uni.edu', '2023-09-01')",
    "INSERT INTO Instructor VALUES (1, 'Alice', 'Smith', 'Computer Science')",
    "INSERT INTO Course VALUES (1, 'Database Systems', 3, 1)",
    "INSERT INTO Course VALUES (2, 'Invalid Course', 10, 99)",
    "INSERT INTO Enrollment VALUES (1, 1, 1, '2024-01-10', 'A')",
    "INSERT INTO Enrollment VALUES (2, 1, 1, '2024-02-01', 'Z')",
    "INSERT INTO Enrollment VALUES (3, 42, 1, '2024-02-01', NULL)",
    "INSERT INTO Enrollment VALUES (4, 1, 77, '2024-02-01', 'B')",
    "INSERT INTO Enrollment VALUES (4, 2, 1, '2024-02-01', 'C')",
]


@pytest.fixture
def loose_db() -> Session:
    """제약조건이 없는 테이블에 고아/도메인/중복 위반 데이터를 넣어 둔 DB."""
    eng = create_engine(
        "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    with eng.begin() as conn:
        for statement in LOOSE_DDL + LOOSE_ROWS:
            conn.exec_driver_sql(statement)
    session = Session(eng)
    yield session
    session.close()
    eng.dispose()


@pytest.fixture
def client(engine):
    """테스트 엔진에 연결된 API 클라이언트."""
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
