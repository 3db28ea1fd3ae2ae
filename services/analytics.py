"""
services/analytics.py

- v_course_analytics 뷰 기반 리포트
  1) 인기 강의 TOP N (수강생 수 내림차순, 동률 시 course_id 오름차순)
  2) 강의별 평점(GPA) 리포트 (A=4.0 ... F=0.0, 미채점은 평균에서 제외, 소수 둘째 자리 반올림)
"""

from typing import Any, Optional

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from config.settings import settings
from database.schema import v_course_analytics

# 성적 → 평점
GRADE_POINTS = {
    "A": 4.0,
    "B": 3.0,
    "C": 2.0,
    "D": 1.0,
    "F": 0.0,
}


def top_popular_courses(db: Session, limit: Optional[int] = None) -> list[dict[str, Any]]:
    """수강생 수 기준 상위 강의"""
    limit = settings.TOP_COURSES_LIMIT if limit is None else limit
    v = v_course_analytics

    total_students = func.count(func.distinct(v.c.student_id)).label("total_students")
    stmt = (
        select(v.c.course_id, v.c.course_name, total_students)
        .group_by(v.c.course_id, v.c.course_name)
        .order_by(total_students.desc(), v.c.course_id.asc())
        .limit(limit)
    )
    return [
        {
            "course_id": row.course_id,
            "course_name": row.course_name,
            "total_students": int(row.total_students),
        }
        for row in db.execute(stmt)
    ]


def course_gpa_report(db: Session) -> list[dict[str, Any]]:
    """강의별 평균 평점. 전원 미채점인 강의는 course_gpa=None, 맨 뒤에 정렬"""
    v = v_course_analytics

    points = case(GRADE_POINTS, value=v.c.grade)
    course_gpa = func.round(func.avg(points), 2).label("course_gpa")
    stmt = (
        select(v.c.course_id, v.c.course_name, course_gpa)
        .group_by(v.c.course_id, v.c.course_name)
        .order_by(course_gpa.is_(None), course_gpa.desc(), v.c.course_id.asc())
    )
    return [
        {
            "course_id": row.course_id,
            "course_name": row.course_name,
            # MySQL은 Decimal을 돌려주므로 float로 통일
            "course_gpa": float(row.course_gpa) if row.course_gpa is not None else None,
        }
        for row in db.execute(stmt)
    ]
