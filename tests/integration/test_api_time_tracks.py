"""HTTP tests for the time track endpoints."""

import pytest
from httpx import AsyncClient

from src.sitt.models import Project, User
from tests.factories import generate_uuid
from tests.helpers import FakeClock, auth_headers

pytestmark = pytest.mark.integration


async def test_start_and_stop(
    client: AsyncClient, project: Project, owner: User, clock: FakeClock
):
    response = await client.post(
        f"/api/v1/timetrack/{project.id}/start",
        json={"comment": "kickoff"},
        headers=auth_headers(owner),
    )
    assert response.status_code == 201
    started = response.json()
    assert started["status"] == "IN_PROGRESS"
    assert started["project_name"] == "Website"
    assert started["comment"] == "kickoff"
    assert started["stopped_at"] is None

    clock.advance(125)

    response = await client.post(f"/api/v1/timetrack/{project.id}/stop", headers=auth_headers(owner))
    assert response.status_code == 200
    stopped = response.json()
    assert stopped["time_track_id"] == started["time_track_id"]
    assert stopped["status"] == "FINISHED"
    assert stopped["total_duration"] == 125
    assert stopped["total_duration_text"] == "2m 5s"

    response = await client.get(f"/api/v1/projects/{project.id}", headers=auth_headers(owner))
    assert response.json()["total_duration"] == 125
    assert response.json()["status"] == "INACTIVE"


async def test_start_without_body(client: AsyncClient, project: Project, owner: User):
    response = await client.post(f"/api/v1/timetrack/{project.id}/start", headers=auth_headers(owner))

    assert response.status_code == 201
    assert response.json()["comment"] is None


async def test_start_twice(client: AsyncClient, project: Project, owner: User):
    await client.post(f"/api/v1/timetrack/{project.id}/start", headers=auth_headers(owner))

    response = await client.post(f"/api/v1/timetrack/{project.id}/start", headers=auth_headers(owner))

    assert response.status_code == 400
    assert response.json()["detail"] == (
        "Time tracking is already in progress on project 'Website'"
    )


async def test_stop_without_start(client: AsyncClient, project: Project, owner: User):
    response = await client.post(f"/api/v1/timetrack/{project.id}/stop", headers=auth_headers(owner))

    assert response.status_code == 400
    assert "No time tracking is in progress" in response.json()["detail"]


async def test_start_on_unknown_project(client: AsyncClient, owner: User):
    response = await client.post(
        f"/api/v1/timetrack/{generate_uuid()}/start", headers=auth_headers(owner)
    )

    assert response.status_code == 404


async def test_live_duration_while_running(
    client: AsyncClient, project: Project, owner: User, clock: FakeClock
):
    await client.post(f"/api/v1/timetrack/{project.id}/start", headers=auth_headers(owner))
    clock.advance(3725)

    project_response = await client.get(f"/api/v1/projects/{project.id}", headers=auth_headers(owner))
    entries_response = await client.get(f"/api/v1/timetrack/{project.id}", headers=auth_headers(owner))

    assert project_response.json()["status"] == "ACTIVE"
    assert project_response.json()["total_duration"] == 3725
    assert project_response.json()["total_duration_text"] == "1h 2m 5s"
    assert entries_response.json()[0]["total_duration"] == 3725


async def test_manual_entry_edit_and_delete(client: AsyncClient, project: Project, owner: User):
    response = await client.post(
        "/api/v1/timetrack",
        json={
            "project_id": str(project.id),
            "started_at": "2024-02-01T08:00:00Z",
            "stopped_at": "2024-02-01T08:01:40Z",
        },
        headers=auth_headers(owner),
    )
    assert response.status_code == 201
    entry = response.json()
    assert entry["total_duration"] == 100

    response = await client.put(
        f"/api/v1/timetrack/{entry['time_track_id']}",
        json={
            "project_id": str(project.id),
            "started_at": "2024-02-01T09:00:00+01:00",
            "stopped_at": "2024-02-01T08:00:40Z",
        },
        headers=auth_headers(owner),
    )
    assert response.status_code == 200
    assert response.json()["total_duration"] == 40

    response = await client.get(f"/api/v1/projects/{project.id}", headers=auth_headers(owner))
    assert response.json()["total_duration"] == 40

    response = await client.delete(
        f"/api/v1/timetrack/{project.id}/{entry['time_track_id']}", headers=auth_headers(owner)
    )
    assert response.status_code == 204

    response = await client.get(f"/api/v1/projects/{project.id}", headers=auth_headers(owner))
    assert response.json()["total_duration"] == 0
    response = await client.get(f"/api/v1/timetrack/{project.id}", headers=auth_headers(owner))
    assert response.json() == []


async def test_manual_entry_with_reversed_interval(
    client: AsyncClient, project: Project, owner: User
):
    response = await client.post(
        "/api/v1/timetrack",
        json={
            "project_id": str(project.id),
            "started_at": "2024-02-01T08:00:00Z",
            "stopped_at": "2024-02-01T07:00:00Z",
        },
        headers=auth_headers(owner),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "stopped_at must not be earlier than started_at"


async def test_edit_running_entry(client: AsyncClient, project: Project, owner: User):
    started = await client.post(
        f"/api/v1/timetrack/{project.id}/start", headers=auth_headers(owner)
    )

    response = await client.put(
        f"/api/v1/timetrack/{started.json()['time_track_id']}",
        json={
            "project_id": str(project.id),
            "started_at": "2024-02-01T08:00:00Z",
            "stopped_at": "2024-02-01T09:00:00Z",
        },
        headers=auth_headers(owner),
    )

    assert response.status_code == 400


async def test_delete_unknown_entry(client: AsyncClient, project: Project, owner: User):
    response = await client.delete(
        f"/api/v1/timetrack/{project.id}/{generate_uuid()}", headers=auth_headers(owner)
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Time tracking not found"


async def test_entries_of_another_owner(
    client: AsyncClient, project: Project, other_owner: User
):
    response = await client.get(f"/api/v1/timetrack/{project.id}", headers=auth_headers(other_owner))

    assert response.status_code == 404


async def test_edit_with_comment_is_rejected(client: AsyncClient, project: Project, owner: User):
    created = await client.post(
        "/api/v1/timetrack",
        json={
            "project_id": str(project.id),
            "started_at": "2024-02-01T08:00:00Z",
            "stopped_at": "2024-02-01T08:01:40Z",
            "comment": "original",
        },
        headers=auth_headers(owner),
    )

    response = await client.put(
        f"/api/v1/timetrack/{created.json()['time_track_id']}",
        json={
            "project_id": str(project.id),
            "started_at": "2024-02-01T08:00:00Z",
            "stopped_at": "2024-02-01T08:00:40Z",
            "comment": "changed",
        },
        headers=auth_headers(owner),
    )

    assert response.status_code == 422
    entries = await client.get(f"/api/v1/timetrack/{project.id}", headers=auth_headers(owner))
    assert entries.json()[0]["comment"] == "original"
    assert entries.json()[0]["total_duration"] == 100
