"""Integration tests for the HTTP routes against an in-memory store."""

from __future__ import annotations

from fastapi import status
from fastapi.testclient import TestClient

from tests.utils import submission_payload


class TestLoginEndpoint:
    """Tests for POST /auth/login."""

    def test_student_login(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/auth/login", json={"username": "student1", "password": "anything"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "username": "student1",
            "name": "Alice Smith",
            "role": "STUDENT",
        }

    def test_teacher_login(self, test_client: TestClient) -> None:
        response = test_client.post("/auth/login", json={"username": "admin", "password": "x"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["role"] == "TEACHER"
        assert response.json()["name"] == "Mr. Teacher"

    def test_unknown_user(self, test_client: TestClient) -> None:
        response = test_client.post("/auth/login", json={"username": "ghost", "password": "x"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_empty_password_rejected(self, test_client: TestClient) -> None:
        response = test_client.post("/auth/login", json={"username": "student1", "password": ""})

        assert response.status_code == 422


class TestSubmissionEndpoints:
    """Tests for /submissions."""

    def test_create_awards_points(self, test_client: TestClient) -> None:
        response = test_client.post("/submissions", json=submission_payload())

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["student_username"] == "student1"
        assert data["semester"] == "1.1"
        assert data["printed"] is False
        assert data["status"] == "ontime"

        student = test_client.get("/students/student1").json()
        assert student["points"] == 17

    def test_duplicate_week_conflicts(self, test_client: TestClient) -> None:
        test_client.post("/submissions", json=submission_payload())

        response = test_client.post(
            "/submissions", json=submission_payload(study_description="Another go")
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "already submitted" in response.json()["detail"]
        assert test_client.get("/students/student1").json()["points"] == 17

    def test_unknown_student(self, test_client: TestClient) -> None:
        response = test_client.post("/submissions", json=submission_payload(student="ghost"))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_week_out_of_range(self, test_client: TestClient) -> None:
        response = test_client.post("/submissions", json=submission_payload(week=11))

        assert response.status_code == 422

    def test_filters(self, test_client: TestClient) -> None:
        test_client.post("/submissions", json=submission_payload("student1", "1.1", 1))
        test_client.post("/submissions", json=submission_payload("student2", "1.1", 1))
        test_client.post("/submissions", json=submission_payload("student2", "1.2", 4))

        everything = test_client.get("/submissions").json()["submissions"]
        week_one = test_client.get("/submissions", params={"week": 1}).json()["submissions"]
        bobs = test_client.get("/submissions", params={"q": "BOB"}).json()["submissions"]
        mine = test_client.get("/submissions", params={"student": "student1"}).json()

        assert len(everything) == 3
        assert [s["student_username"] for s in week_one] == ["student1", "student2"]
        assert [s["week"] for s in bobs] == [1, 4]
        assert len(mine["submissions"]) == 1

    def test_mark_printed(self, test_client: TestClient) -> None:
        created = test_client.post("/submissions", json=submission_payload()).json()

        response = test_client.patch(
            f"/submissions/{created['id']}/printed", json={"printed": True}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["printed"] is True

    def test_mark_printed_unknown(self, test_client: TestClient) -> None:
        response = test_client.patch("/submissions/missing/printed", json={"printed": True})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestStudentEndpoints:
    """Tests for /students."""

    def test_leaderboard(self, test_client: TestClient) -> None:
        entries = test_client.get("/students/leaderboard").json()["entries"]

        assert [(e["rank"], e["username"], e["level"]) for e in entries] == [
            (1, "student3", "Stalker"),
            (2, "student2", "Climber"),
            (3, "student1", "Hatchling"),
        ]

    def test_points_by_award_and_delta(self, test_client: TestClient) -> None:
        award = test_client.post("/students/student1/points", json={"award": "quiz"})
        penalty = test_client.post("/students/student1/points", json={"delta": -50})

        assert award.json() == {"username": "student1", "points": 14}
        assert penalty.json() == {"username": "student1", "points": 0}

    def test_points_require_exactly_one_field(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/students/student1/points", json={"delta": 1, "award": "QUIZ"}
        )

        assert response.status_code == 422

    def test_schedule_check_in(self, test_client: TestClient) -> None:
        response = test_client.put("/students/student1/check-in", json={"date": "2099-05-01"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["check_in_date"] == "2099-05-01"

        check_ins = test_client.get("/students/check-ins").json()
        assert [c["username"] for c in check_ins] == ["student1", "student2"]

    def test_overview(self, test_client: TestClient) -> None:
        test_client.put("/students/student1/check-in", json={"date": "2024-02-01"})

        response = test_client.get(
            "/students/student1/overview", params={"today": "2024-02-01"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["level"] == "Hatchling"
        assert data["grade"] == "E"
        assert data["rank"] == 3
        assert data["check_in"] == "scheduled_today"
        assert data["progress"]["next"] == "Climber"
        assert [b["earned"] for b in data["badges"]] == [False, False, False, False]

    def test_unknown_student(self, test_client: TestClient) -> None:
        response = test_client.get("/students/ghost")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestResourceEndpoints:
    """Tests for /resources and /reference."""

    def test_publish_and_list(self, test_client: TestClient) -> None:
        created = test_client.post(
            "/resources",
            json={
                "title": "Loops",
                "type": "worksheet",
                "semester": "2.1",
                "week": 3,
                "filename": "loops.pdf",
            },
        )

        assert created.status_code == status.HTTP_201_CREATED
        assert created.json()["uploaded_by"] == "Mr. Teacher"

        listed = test_client.get("/resources", params={"semester": "2.1"}).json()
        assert [r["title"] for r in listed["resources"]] == ["Loops"]
        assert test_client.get("/resources", params={"semester": "1.1"}).json() == {
            "resources": []
        }

    def test_unknown_type_rejected(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/resources",
            json={
                "title": "Clip",
                "type": "video",
                "semester": "2.1",
                "week": 3,
                "filename": "clip.mp4",
            },
        )

        assert response.status_code == 422

    def test_reference_data(self, test_client: TestClient) -> None:
        data = test_client.get("/reference").json()

        assert [s["id"] for s in data["semesters"]] == ["1.1", "1.2", "2.1", "2.2"]
        assert data["weeks"] == list(range(1, 11))
        assert data["point_awards"]["HOMEWORK"] == 5
        assert [b["id"] for b in data["badges"]] == [
            "on_fire",
            "speed_gecko",
            "tech_brain",
            "gecko_legend",
        ]
