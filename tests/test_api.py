"""HTTP API: CRUD, constraint errors, audits and reports."""

import pytest


@pytest.fixture
def sample(client):
    """샘플 데이터를 API로 입력."""
    instructor = client.post("/v1/instructors/", json={
        "first_name": "Alice", "last_name": "Smith", "department": "Computer Science",
    }).json()["data"]
    course = client.post("/v1/courses/", json={
        "course_name": "Database Systems", "credits": 3, "instructor_id": instructor["instructor_id"],
    }).json()["data"]
    student = client.post("/v1/students/", json={
        "first_name": "John", "last_name": "Doe", "email": "john@uni.edu", "enrollment_date": "2023-09-01",
    }).json()["data"]
    enrollment = client.post("/v1/enrollments/", json={
        "student_id": student["student_id"], "course_id": course["course_id"],
        "enrollment_date": "2024-01-10", "grade": "A",
    }).json()["data"]
    return {"instructor": instructor, "course": course, "student": student, "enrollment": enrollment}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Latency-Ms" in response.headers


def test_create_sample_rows(sample):
    assert sample["student"] == {
        "student_id": 1, "first_name": "John", "last_name": "Doe",
        "email": "john@uni.edu", "enrollment_date": "2023-09-01",
    }
    assert sample["course"]["course_id"] == 1
    assert sample["enrollment"] == {
        "enrollment_id": 1, "student_id": 1, "course_id": 1,
        "enrollment_date": "2024-01-10", "grade": "A",
    }


@pytest.mark.parametrize(
    "path, body, constraint",
    [
        ("/v1/enrollments/", {"student_id": 1, "course_id": 1, "enrollment_date": "2024-02-01", "grade": "A"},
         "uq_student_course"),
        ("/v1/courses/", {"course_name": "Invalid Course", "credits": 10, "instructor_id": 1}, "chk_credits"),
        ("/v1/students/", {"first_name": "J", "last_name": "D", "email": "john@uni.edu",
                           "enrollment_date": "2024-09-01"}, "uq_student_email"),
    ],
)
def test_constraint_violation_is_409(client, sample, path, body, constraint):
    response = client.post(path, json=body)
    assert response.status_code == 409
    payload = response.json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "CONSTRAINT_VIOLATION"
    assert payload["error"]["constraint"] == constraint


def test_invalid_grade_update_rejected(client, sample):
    response = client.patch("/v1/enrollments/1/grade", json={"grade": "Z"})
    assert response.status_code == 409
    assert response.json()["error"]["constraint"] == "chk_grade"
    assert client.get("/v1/enrollments/1").json()["data"]["grade"] == "A"


def test_grade_can_be_cleared(client, sample):
    response = client.patch("/v1/enrollments/1/grade", json={"grade": None})
    assert response.status_code == 200
    assert response.json()["data"]["grade"] is None


def test_delete_referenced_instructor_conflict(client, sample):
    response = client.delete("/v1/instructors/1")
    assert response.status_code == 409
    assert client.get("/v1/instructors/1").status_code == 200


def test_delete_student_cascades(client, sample):
    assert client.delete("/v1/students/1").status_code == 200
    listing = client.get("/v1/enrollments/").json()
    assert listing["data"] == []
    assert listing["meta"]["total"] == 0


def test_delete_course_cascades(client, sample):
    assert client.delete("/v1/courses/1").status_code == 200
    assert client.get("/v1/students/1/enrollments").json()["data"] == []


def test_not_found(client):
    response = client.get("/v1/students/42")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_update_student(client, sample):
    response = client.put("/v1/students/1", json={
        "first_name": "Johnny", "last_name": "Doe", "email": "johnny@uni.edu", "enrollment_date": "2023-09-01",
    })
    assert response.status_code == 200
    assert response.json()["data"]["email"] == "johnny@uni.edu"


def test_list_pagination(client, sample):
    for n in range(2, 6):
        client.post("/v1/students/", json={
            "first_name": f"S{n}", "last_name": "Test", "email": f"s{n}@uni.edu", "enrollment_date": "2024-09-01",
        })
    page = client.get("/v1/students/", params={"page": 2, "size": 2}).json()
    assert [s["student_id"] for s in page["data"]] == [3, 4]
    assert page["meta"] == {"total": 5, "page": 2, "size": 2, "pages": 3}


def test_course_summary(client, sample):
    client.post("/v1/courses/", json={"course_name": "Networks", "credits": 4, "instructor_id": 1})
    data = client.get("/v1/courses/summary").json()["data"]
    assert data == [
        {"course_id": 1, "course_name": "Database Systems", "enrolled": 1},
        {"course_id": 2, "course_name": "Networks", "enrolled": 0},
    ]


def test_analytics_endpoints(client, sample):
    top = client.get("/v1/analytics/top-courses").json()["data"]
    assert top == [{"course_id": 1, "course_name": "Database Systems", "total_students": 1}]

    gpa = client.get("/v1/analytics/course-gpa").json()["data"]
    assert gpa == [{"course_id": 1, "course_name": "Database Systems", "course_gpa": 4.0}]


def test_audits_endpoints(client, sample):
    report = client.get("/v1/audits/").json()["data"]
    assert report["is_consistent"] is True
    assert report["violations"] == {}

    catalog = client.get("/v1/audits/catalog").json()["data"]
    assert len(catalog) == 13

    one = client.get("/v1/audits/duplicate_enrollments").json()["data"]
    assert one == {"name": "duplicate_enrollments", "category": "duplicate", "rows": []}

    assert client.get("/v1/audits/nope").status_code == 404
