from __future__ import annotations

import pytest

from conftest import OTHER_USER_ID, USER_ID


@pytest.fixture
def projects(fake_supabase):
    mine = fake_supabase.seed(
        "projects", user_id=USER_ID, client_name="Layla Hassan", project_type="Wedding", stage="post-production"
    )
    theirs = fake_supabase.seed(
        "projects", user_id=OTHER_USER_ID, client_name="Other Studio", project_type="Event", stage="shooting"
    )
    return mine, theirs


def test_create_file_applies_defaults(api_client, projects) -> None:
    mine, _ = projects

    response = api_client.post(
        "/api/post-production/file-organization",
        json={
            "projectId": mine["id"],
            "fileName": "ceremony_A001.mov",
            "fileType": "video",
            "fileSize": "4.2 GB",
            "shootDate": "2026-03-14",
            "cameraUsed": "FX6",
        },
    )

    assert response.status_code == 201
    record = response.json()["data"]
    assert record["project_id"] == mine["id"]
    assert record["folder_path"] == "/"
    assert record["storage_location"] == "local"
    assert record["priority"] == "normal"
    assert record["tags"] == []
    assert record["notes"] == ""
    assert record["shoot_date"] == "2026-03-14"
    assert record["upload_date"]


def test_create_file_for_unowned_project_is_not_found(api_client, projects, fake_supabase) -> None:
    _, theirs = projects

    response = api_client.post(
        "/api/post-production/file-organization",
        json={"projectId": theirs["id"], "fileName": "x.jpg", "fileType": "image"},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Project not found"}
    assert "file_organization" not in fake_supabase.tables


def test_list_files_scopes_to_owned_projects(api_client, projects, fake_supabase) -> None:
    mine, theirs = projects
    fake_supabase.seed(
        "file_organization", project_id=mine["id"], file_name="old.jpg", upload_date="2026-03-01T00:00:00+00:00"
    )
    fake_supabase.seed(
        "file_organization", project_id=mine["id"], file_name="new.jpg", upload_date="2026-03-10T00:00:00+00:00"
    )
    fake_supabase.seed(
        "file_organization", project_id=theirs["id"], file_name="theirs.jpg", upload_date="2026-03-12T00:00:00+00:00"
    )

    files = api_client.get("/api/post-production/file-organization").json()["data"]

    assert [f["file_name"] for f in files] == ["new.jpg", "old.jpg"]
    assert files[0]["project"] == {"id": mine["id"], "client_name": "Layla Hassan"}

    filtered = api_client.get(
        "/api/post-production/file-organization", params={"projectId": theirs["id"]}
    ).json()["data"]
    assert filtered == []


def test_list_files_without_projects_skips_query(api_client, fake_supabase) -> None:
    assert api_client.get("/api/post-production/file-organization").json() == {"data": []}
    assert ("file_organization", "select") not in fake_supabase.executed


def test_create_render_task_applies_defaults(api_client, projects) -> None:
    mine, _ = projects

    response = api_client.post(
        "/api/post-production/render-tasks",
        json={"projectId": mine["id"], "taskName": "Highlight film"},
    )

    assert response.status_code == 201
    task = response.json()["data"]
    assert task["format"] == "MP4"
    assert task["resolution"] == "1920x1080"
    assert task["codec"] == "H.264"
    assert task["priority"] == 5
    assert task["status"] == "queued"
    assert task["progress"] == 0


def test_create_render_task_for_unowned_project_is_not_found(api_client, projects) -> None:
    _, theirs = projects

    response = api_client.post(
        "/api/post-production/render-tasks",
        json={"projectId": theirs["id"], "taskName": "Not mine"},
    )

    assert response.status_code == 404


def test_render_queue_orders_by_priority(api_client, projects, fake_supabase) -> None:
    mine, theirs = projects
    fake_supabase.seed("render_tasks", project_id=mine["id"], task_name="Teaser", priority=5, status="queued")
    fake_supabase.seed("render_tasks", project_id=mine["id"], task_name="Film", priority=9, status="rendering")
    fake_supabase.seed("render_tasks", project_id=mine["id"], task_name="Reel", priority=5, status="queued")
    fake_supabase.seed("render_tasks", project_id=theirs["id"], task_name="Theirs", priority=10, status="queued")

    tasks = api_client.get("/api/post-production/render-tasks").json()["data"]

    assert [t["task_name"] for t in tasks] == ["Film", "Teaser", "Reel"]
    assert tasks[0]["project"] == {
        "id": mine["id"],
        "client_name": "Layla Hassan",
        "project_type": "Wedding",
    }

    queued = api_client.get("/api/post-production/render-tasks", params={"status": "queued"}).json()["data"]
    assert [t["task_name"] for t in queued] == ["Teaser", "Reel"]


def test_completing_render_task_pins_progress(api_client, projects, fake_supabase) -> None:
    mine, _ = projects
    task = fake_supabase.seed(
        "render_tasks", project_id=mine["id"], task_name="Film", status="rendering", progress=40
    )

    response = api_client.patch(
        f"/api/post-production/render-tasks/{task['id']}", json={"status": "complete", "progress": 80}
    )

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["status"] == "complete"
    assert updated["progress"] == 100
    assert updated["completed_at"]


def test_render_progress_out_of_range_is_rejected(api_client, projects, fake_supabase) -> None:
    mine, _ = projects
    task = fake_supabase.seed("render_tasks", project_id=mine["id"], task_name="Film", progress=0)

    response = api_client.patch(f"/api/post-production/render-tasks/{task['id']}", json={"progress": 140})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"


def test_failed_render_records_error_message(api_client, projects, fake_supabase) -> None:
    mine, _ = projects
    task = fake_supabase.seed("render_tasks", project_id=mine["id"], task_name="Film", progress=10)

    updated = api_client.patch(
        f"/api/post-production/render-tasks/{task['id']}", json={"status": "failed"}
    ).json()["data"]

    assert updated["error_message"] == "Render failed"


def test_render_task_of_other_user_is_not_found(api_client, projects, fake_supabase) -> None:
    _, theirs = projects
    task = fake_supabase.seed("render_tasks", project_id=theirs["id"], task_name="Theirs", progress=0)

    response = api_client.patch(f"/api/post-production/render-tasks/{task['id']}", json={"progress": 50})

    assert response.status_code == 404
    assert fake_supabase.tables["render_tasks"][0]["progress"] == 0


def test_create_render_task_null_fields_fall_back_to_defaults(api_client, projects) -> None:
    mine, _ = projects

    response = api_client.post(
        "/api/post-production/render-tasks",
        json={"projectId": mine["id"], "taskName": "Teaser", "priority": None, "format": None},
    )

    assert response.status_code == 201
    task = response.json()["data"]
    assert task["priority"] == 5
    assert task["format"] == "MP4"


def test_create_file_null_fields_fall_back_to_defaults(api_client, projects) -> None:
    mine, _ = projects

    response = api_client.post(
        "/api/post-production/file-organization",
        json={"projectId": mine["id"], "fileName": "a.jpg", "fileType": "image", "folderPath": None, "tags": None},
    )

    assert response.status_code == 201
    record = response.json()["data"]
    assert record["folder_path"] == "/"
    assert record["tags"] == []
