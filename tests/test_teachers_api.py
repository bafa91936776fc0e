"""Teacher creation workflow and joined reads over HTTP."""
from __future__ import annotations

import uuid

import pytest
from sqlalchemy import func, select

from teacher_records.db.models import Teacher, User
from teacher_records.services import SoftDeleteRepository

pytestmark = pytest.mark.anyio("asyncio")


def _user_body(n: int, role: str = "TEACHER") -> dict:
    return {
        "name": f"Teacher {n}",
        "email": f"teacher{n}@school.edu",
        "phoneNumber": f"0913{n:06d}",
        "address": f"{n} Nguyen Trai",
        "identity": f"0791{n:08d}",
        "dob": "1987-11-02",
        "role": role,
    }


async def _create_user(c, n: int, role: str = "TEACHER") -> dict:
    r = await c.post("/api/users", json=_user_body(n, role))
    assert r.status_code == 201
    return r.json()["data"]


async def _create_position(c, name: str) -> dict:
    r = await c.post("/api/teacher-positions", json={"name": name, "des": f"{name} duties"})
    assert r.status_code == 201
    return r.json()["data"]


async def test_user_becomes_teacher(client_factory):
    async with client_factory() as c:
        user = await _create_user(c, 1)
        lecturer = await _create_position(c, "Lecturer")

        r = await c.post(
            "/api/teachers",
            json={
                "userId": user["id"],
                "startDate": "2024-09-01",
                "teacherPositionsId": [lecturer["id"]],
                "degrees": [
                    {
                        "type": "Bachelor",
                        "school": "University of Education",
                        "major": "Mathematics",
                        "year": 2010,
                        "isGraduated": True,
                    }
                ],
            },
        )

        assert r.status_code == 201
        body = r.json()
        assert body["message"] == "Teacher created"
        teacher = body["data"]
        assert len(teacher["code"]) == 10 and teacher["code"].isdigit()
        assert teacher["user"]["name"] == "Teacher 1"
        assert teacher["user"]["phoneNumber"] == "0913000001"
        assert teacher["teacherPositions"] == [
            {"id": lecturer["id"], "name": "Lecturer", "code": "POS001"}
        ]
        assert teacher["degrees"][0]["isGraduated"] is True
        assert teacher["startDate"] == "2024-09-01"
        assert teacher["endDate"] is None

        fetched = await c.get(f"/api/teachers/{teacher['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["data"]["code"] == teacher["code"]


async def test_missing_fields_are_reported(client_factory):
    async with client_factory() as c:
        r = await c.post("/api/teachers", json={})
        assert r.status_code == 400
        assert r.json()["message"] == "Missing required fields (userId, startDate)"


async def test_student_cannot_become_teacher(client_factory, session_factory):
    async with client_factory() as c:
        student = await _create_user(c, 1, role="STUDENT")

        r = await c.post("/api/teachers", json={"userId": student["id"], "startDate": "2024-09-01"})
        assert r.status_code == 400
        assert r.json()["success"] is False

        listed = await c.get("/api/teachers")
        assert listed.json()["pagination"]["totalItems"] == 0

    with session_factory() as session:
        assert session.scalar(select(func.count()).select_from(Teacher)) == 0


async def test_second_teacher_for_user_is_rejected(client_factory):
    async with client_factory() as c:
        user = await _create_user(c, 1)
        payload = {"userId": user["id"], "startDate": "2024-09-01"}

        assert (await c.post("/api/teachers", json=payload)).status_code == 201
        r = await c.post("/api/teachers", json=payload)
        assert r.status_code == 400
        assert r.json()["message"] == "User is already a teacher"


async def test_unknown_position_is_rejected(client_factory):
    async with client_factory() as c:
        user = await _create_user(c, 1)
        missing = str(uuid.uuid4())

        r = await c.post(
            "/api/teachers",
            json={"userId": user["id"], "startDate": "2024-09-01", "teacherPositionsId": [missing]},
        )
        assert r.status_code == 400
        assert r.json()["errors"] == [f"position {missing} does not exist"]


async def test_end_date_before_start_date_is_invalid(client_factory):
    async with client_factory() as c:
        user = await _create_user(c, 1)

        r = await c.post(
            "/api/teachers",
            json={"userId": user["id"], "startDate": "2024-09-01", "endDate": "2024-01-01"},
        )
        assert r.status_code == 400
        assert r.json()["message"] == "Invalid data"


async def test_teacher_list_pagination(client_factory):
    async with client_factory() as c:
        for n in range(25):
            user = await _create_user(c, n)
            r = await c.post("/api/teachers", json={"userId": user["id"], "startDate": "2024-09-01"})
            assert r.status_code == 201

        first = (await c.get("/api/teachers", params={"page": 1, "limit": 10})).json()
        assert first["pagination"] == {
            "currentPage": 1,
            "totalPages": 3,
            "totalItems": 25,
            "itemsPerPage": 10,
        }
        assert len(first["data"]) == 10

        last = (await c.get("/api/teachers", params={"page": 3, "limit": 10})).json()
        assert len(last["data"]) == 5

        clamped = (await c.get("/api/teachers", params={"page": 0, "limit": 1000})).json()
        assert clamped["pagination"]["currentPage"] == 1
        assert clamped["pagination"]["itemsPerPage"] == 100
        assert len(clamped["data"]) == 25

        codes = {t["code"] for t in clamped["data"]}
        assert len(codes) == 25


async def test_walking_every_page_returns_each_teacher_once(client_factory):
    async with client_factory() as c:
        for n in range(23):
            user = await _create_user(c, n)
            await c.post("/api/teachers", json={"userId": user["id"], "startDate": "2024-09-01"})

        first = (await c.get("/api/teachers", params={"page": 1, "limit": 10})).json()
        ids = []
        for page in range(1, first["pagination"]["totalPages"] + 1):
            r = await c.get("/api/teachers", params={"page": page, "limit": 10})
            ids.extend(t["id"] for t in r.json()["data"])

        assert first["pagination"]["totalPages"] == 3
        assert len(ids) == 23 == len(set(ids))


async def test_huge_page_number_returns_empty_page(client_factory):
    async with client_factory() as c:
        user = await _create_user(c, 1)
        await c.post("/api/teachers", json={"userId": user["id"], "startDate": "2024-09-01"})

        r = await c.get("/api/teachers", params={"page": "99999999999999999999", "limit": 10})
        assert r.status_code == 200
        body = r.json()
        assert body["data"] == []
        assert body["pagination"]["totalItems"] == 1
        assert body["pagination"]["totalPages"] == 1


async def test_deleted_teacher_is_hidden_but_stored(client_factory, session_factory):
    async with client_factory() as c:
        user = await _create_user(c, 1)
        teacher = (
            await c.post("/api/teachers", json={"userId": user["id"], "startDate": "2024-09-01"})
        ).json()["data"]

        r = await c.delete(f"/api/teachers/{teacher['id']}")
        assert r.status_code == 200
        assert r.json()["message"] == "Teacher deleted"

        assert (await c.get(f"/api/teachers/{teacher['id']}")).status_code == 404
        assert (await c.get("/api/teachers")).json()["pagination"]["totalItems"] == 0

    with session_factory() as session:
        stored = SoftDeleteRepository(session, Teacher).get_stored(teacher["id"])
        assert stored is not None
        assert stored.is_deleted is True


async def test_teacher_reads_survive_deleted_references(client_factory):
    async with client_factory() as c:
        user = await _create_user(c, 1)
        lecturer = await _create_position(c, "Lecturer")
        homeroom = await _create_position(c, "Homeroom Teacher")
        teacher = (
            await c.post(
                "/api/teachers",
                json={
                    "userId": user["id"],
                    "startDate": "2024-09-01",
                    "teacherPositionsId": [lecturer["id"], homeroom["id"]],
                },
            )
        ).json()["data"]

        await c.delete(f"/api/teacher-positions/{lecturer['id']}")
        await c.delete(f"/api/users/{user['id']}")

        data = (await c.get(f"/api/teachers/{teacher['id']}")).json()["data"]
        assert data["user"] is None
        assert data["teacherPositionsId"] == [lecturer["id"], homeroom["id"]]
        assert data["teacherPositions"][0] is None
        assert data["teacherPositions"][1]["name"] == "Homeroom Teacher"


async def test_update_teacher(client_factory):
    async with client_factory() as c:
        user = await _create_user(c, 1)
        head = await _create_position(c, "Head of Department")
        teacher = (
            await c.post("/api/teachers", json={"userId": user["id"], "startDate": "2024-09-01"})
        ).json()["data"]

        r = await c.put(
            f"/api/teachers/{teacher['id']}",
            json={"teacherPositionsId": [head["id"]], "isActive": False},
        )
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["isActive"] is False
        assert [p["name"] for p in data["teacherPositions"]] == ["Head of Department"]
        assert data["code"] == teacher["code"]

        bad = await c.put(f"/api/teachers/{teacher['id']}", json={"endDate": "2020-01-01"})
        assert bad.status_code == 400


async def test_invalid_and_missing_teacher_ids(client_factory):
    async with client_factory() as c:
        invalid = await c.get("/api/teachers/not-a-uuid")
        assert invalid.status_code == 400
        assert invalid.json()["message"] == "Invalid id"

        missing = await c.get(f"/api/teachers/{uuid.uuid4()}")
        assert missing.status_code == 404
        assert missing.json() == {"success": False, "message": "Teacher not found"}


async def test_create_with_user_commits_both_records(client_factory):
    async with client_factory() as c:
        lecturer = await _create_position(c, "Lecturer")

        r = await c.post(
            "/api/teachers/with-user",
            json={
                "user": _user_body(7),
                "teacher": {"startDate": "2024-09-01", "teacherPositionsId": [lecturer["id"]]},
            },
        )
        assert r.status_code == 201
        teacher = r.json()["data"]
        assert teacher["user"]["email"] == "teacher7@school.edu"

        users = (await c.get("/api/users")).json()
        assert users["pagination"]["totalItems"] == 1


async def test_create_with_user_leaves_no_orphan_user(client_factory, session_factory):
    async with client_factory() as c:
        r = await c.post(
            "/api/teachers/with-user",
            json={
                "user": _user_body(8),
                "teacher": {"startDate": "2024-09-01", "teacherPositionsId": [str(uuid.uuid4())]},
            },
        )
        assert r.status_code == 400

    with session_factory() as session:
        assert session.scalar(select(func.count()).select_from(User)) == 0
        assert session.scalar(select(func.count()).select_from(Teacher)) == 0
