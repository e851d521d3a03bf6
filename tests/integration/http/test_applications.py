from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest
from sqlalchemy import select

from src.application.errors import ConflictError
from src.domain.value_objects.application_status import ApplicationStatus
from src.domain.value_objects.role import Role
from src.infrastructure.db.orm.membership import ProjectMemberORM
from src.infrastructure.db.orm.application import ApplicationORM
from src.infrastructure.db.orm.user_role import UserRoleORM
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.repos.memberships_sqlalchemy import ProjectMembersSQLAlchemyRepository


async def _submit_project_application(client, user_id: UUID, project_id: UUID) -> dict:
    response = await client.post(
        "/api/v1/applications/",
        json={
            "user_id": str(user_id),
            "application_type": "project",
            "full_name": "Sparty Green",
            "class_year": "2027",
            "project_id": str(project_id),
            "why_join": "I want to build things",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_health(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_submit_and_list_applications(client, seeded_users, seeded_project):
    user_id = seeded_users["prospect"]
    created = await _submit_project_application(client, user_id, seeded_project)
    assert created["status"] == "pending"
    assert created["project_id"] == str(seeded_project)
    assert created["reviewed_by"] is None

    duplicate = await client.post(
        "/api/v1/applications/",
        json={
            "user_id": str(user_id),
            "application_type": "project",
            "full_name": "Sparty Green",
            "class_year": "2027",
            "project_id": str(seeded_project),
        },
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "conflict"

    listed = await client.get("/api/v1/applications/", params={"user_id": str(user_id)})
    assert listed.status_code == 200
    assert [item["id"] for item in listed.json()] == [created["id"]]

    accepted = await client.get("/api/v1/applications/", params={"status": "accepted"})
    assert accepted.json() == []

    fetched = await client.get(f"/api/v1/applications/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["why_join"] == "I want to build things"


async def test_submit_requires_target(client, seeded_users):
    response = await client.post(
        "/api/v1/applications/",
        json={
            "user_id": str(seeded_users["prospect"]),
            "application_type": "class",
            "full_name": "Sparty Green",
            "class_year": "2027",
        },
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


async def test_accepting_project_application_upgrades_prospect(
    app, client, seeded_users, seeded_project, email_service, chat_inviter
):
    user_id = seeded_users["prospect"]
    created = await _submit_project_application(client, user_id, seeded_project)

    response = await client.post(
        "/api/v1/applications/process-update",
        json={
            "application_id": created["id"],
            "status": "accepted",
            "reviewer_id": str(seeded_users["board"]),
        },
    )
    assert response.status_code == 200, response.text
    assert response.json() == {
        "success": True,
        "message": "Application decision processed successfully",
        "upgraded_role": True,
    }

    fetched = (await client.get(f"/api/v1/applications/{created['id']}")).json()
    assert fetched["status"] == "accepted"
    assert fetched["reviewed_by"] == str(seeded_users["board"])
    assert fetched["reviewed_at"] is not None

    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        role = await session.scalar(select(UserRoleORM.role).where(UserRoleORM.user_id == user_id))
        members = (
            await session.execute(
                select(ProjectMemberORM).where(ProjectMemberORM.project_id == seeded_project)
            )
        ).scalars().all()
    assert role == Role.MEMBER
    assert [(m.user_id, m.role.value) for m in members] == [(user_id, "member")]

    assert chat_inviter.invited == [("sparty@msu.edu", "Sparty Green")]
    assert len(email_service.sent) == 1
    message = email_service.sent[0]
    assert message.to == ["sparty@msu.edu"]
    assert message.subject == "Project Application Accepted | Claude Builder Club"


async def test_rejecting_application_keeps_role(
    app, client, seeded_users, seeded_project, chat_inviter
):
    user_id = seeded_users["prospect"]
    created = await _submit_project_application(client, user_id, seeded_project)

    response = await client.post(
        "/api/v1/applications/process-update",
        json={
            "application_id": created["id"],
            "status": "rejected",
            "reviewer_id": str(seeded_users["board"]),
        },
    )
    assert response.status_code == 200
    assert response.json()["upgraded_role"] is False
    assert chat_inviter.invited == []

    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        role = await session.scalar(select(UserRoleORM.role).where(UserRoleORM.user_id == user_id))
    assert role == Role.PROSPECT

    flipped = await client.post(
        "/api/v1/applications/process-update",
        json={
            "application_id": created["id"],
            "status": "accepted",
            "reviewer_id": str(seeded_users["board"]),
        },
    )
    assert flipped.status_code == 409
    assert flipped.json()["code"] == "conflict"


async def test_decision_errors_use_error_payload(client, seeded_users):
    missing = await client.post(
        "/api/v1/applications/process-update",
        json={
            "application_id": str(uuid4()),
            "status": "accepted",
            "reviewer_id": str(seeded_users["board"]),
        },
    )
    assert missing.status_code == 404
    body = missing.json()
    assert body["code"] == "not_found"
    assert body["error"].startswith("Application not found")

    invalid = await client.post(
        "/api/v1/applications/process-update",
        json={
            "application_id": str(uuid4()),
            "status": "maybe",
            "reviewer_id": str(seeded_users["board"]),
        },
    )
    assert invalid.status_code == 422
    assert invalid.json()["code"] == "validation_error"

    unknown = await client.get(f"/api/v1/applications/{uuid4()}")
    assert unknown.status_code == 404
    assert unknown.json() == {"error": "Application not found", "code": "not_found"}


async def test_failed_membership_insert_restores_application_and_role(
    app, client, seeded_users, seeded_project, email_service, chat_inviter, monkeypatch
):
    user_id = seeded_users["prospect"]
    created = await _submit_project_application(client, user_id, seeded_project)
    insert_member = ProjectMembersSQLAlchemyRepository.add

    async def add_then_fail(self, member):
        await insert_member(self, member)
        raise RuntimeError("connection dropped")

    monkeypatch.setattr(ProjectMembersSQLAlchemyRepository, "add", add_then_fail)

    response = await client.post(
        "/api/v1/applications/process-update",
        json={
            "application_id": created["id"],
            "status": "accepted",
            "reviewer_id": str(seeded_users["board"]),
        },
    )
    assert response.status_code == 500
    assert response.json()["code"] == "decision_failed"

    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        row = await session.scalar(
            select(ApplicationORM).where(ApplicationORM.id == UUID(created["id"]))
        )
        role = await session.scalar(select(UserRoleORM.role).where(UserRoleORM.user_id == user_id))
        members = (
            await session.execute(
                select(ProjectMemberORM).where(ProjectMemberORM.project_id == seeded_project)
            )
        ).scalars().all()
    assert row.status.value == "pending"
    assert row.reviewed_by is None
    assert row.reviewed_at is None
    assert role == Role.PROSPECT
    assert members == []
    assert email_service.sent == []
    assert chat_inviter.invited == []


async def test_review_update_only_applies_to_expected_status(
    app, client, seeded_users, seeded_project
):
    created = await _submit_project_application(
        client, seeded_users["prospect"], seeded_project
    )
    application_id = UUID(created["id"])
    reviewed_at = datetime(2026, 10, 1, tzinfo=timezone.utc)

    uow = SQLAlchemyUnitOfWork(app.state.session_factory)
    async with uow:
        await uow.applications.update_review(
            application_id,
            status=ApplicationStatus.ACCEPTED,
            reviewed_by=seeded_users["board"],
            reviewed_at=reviewed_at,
            expected_status=ApplicationStatus.PENDING,
        )
        await uow.commit()

        with pytest.raises(ConflictError):
            await uow.applications.update_review(
                application_id,
                status=ApplicationStatus.REJECTED,
                reviewed_by=seeded_users["board"],
                reviewed_at=reviewed_at,
                expected_status=ApplicationStatus.PENDING,
            )
        await uow.rollback()

    fetched = (await client.get(f"/api/v1/applications/{created['id']}")).json()
    assert fetched["status"] == "accepted"
