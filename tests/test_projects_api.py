from datetime import datetime


def _stamp(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _create(client, **payload):
    response = client.post("/api/projects/", json=payload)
    assert response.status_code == 201
    return response.json()


def test_create_uses_defaults(client):
    project = _create(client)

    assert project["name"] == "ML Pipeline"
    assert project["user_id"] == "local"
    assert project["nodes"] == []


def test_crud_round_trip(client):
    project = _create(client, name="Churn", user_id="alice")
    project_id = project["id"]

    loaded = client.get(f"/api/projects/{project_id}").json()
    assert loaded["name"] == "Churn"

    updated = client.put(f"/api/projects/{project_id}", json={"description": "v2"}).json()
    assert updated["description"] == "v2"
    assert updated["name"] == "Churn"
    assert _stamp(updated["updated_at"]) >= _stamp(project["updated_at"])

    listing = client.get("/api/projects/", params={"user_id": "alice"}).json()
    assert [p["id"] for p in listing] == [project_id]
    assert client.get("/api/projects/", params={"user_id": "bob"}).json() == []

    assert client.delete(f"/api/projects/{project_id}").status_code == 204
    assert client.get(f"/api/projects/{project_id}").status_code == 404


def test_missing_project_is_404(client):
    response = client.delete("/api/projects/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"] == "ProjectNotFoundError"


def test_add_node_uses_defaults_and_fresh_ids(client):
    project_id = _create(client)["id"]

    first = client.post(f"/api/projects/{project_id}/nodes", json={"type": "training"})
    second = client.post(f"/api/projects/{project_id}/nodes", json={"type": "trainingNode"})

    assert first.status_code == 201
    node = first.json()
    assert node["type"] == "trainingNode"
    assert node["category"] == "model"
    assert node["id"].startswith("trainingNode-")
    assert node["configuration"]["cvFolds"] == 5
    assert second.json()["id"] != node["id"]


def test_add_node_rejects_unknown_types_and_bad_config(client):
    project_id = _create(client)["id"]

    unknown = client.post(f"/api/projects/{project_id}/nodes", json={"type": "customNode"})
    invalid = client.post(
        f"/api/projects/{project_id}/nodes",
        json={"type": "ingestNode", "configuration": {"sourceType": "FTP"}},
    )

    assert unknown.status_code == 404
    assert invalid.status_code == 422


def test_remove_node_cascades_edges(client):
    project = _create(
        client,
        nodes=[
            {"id": "ingest", "type": "ingestNode"},
            {"id": "prep", "type": "preprocessNode"},
            {"id": "split", "type": "dataSplitNode"},
        ],
        edges=[
            {"source": "ingest", "target": "prep"},
            {"source": "prep", "target": "split"},
            {"source": "ingest", "target": "split"},
        ],
    )

    response = client.delete(f"/api/projects/{project['id']}/nodes/prep")

    assert response.status_code == 200
    updated = response.json()
    assert [n["id"] for n in updated["nodes"]] == ["ingest", "split"]
    assert [(e["source"], e["target"]) for e in updated["edges"]] == [("ingest", "split")]


def test_validate_and_generate_stored_project(client):
    project = _create(
        client,
        nodes=[
            {"id": "ingest", "type": "ingestNode", "configuration": {"sourceType": "CSV"}},
            {"id": "split", "type": "dataSplitNode", "configuration": {"trainSize": 0.8, "testSize": 0.2}},
        ],
        edges=[{"source": "ingest", "target": "split"}],
    )

    report = client.get(f"/api/projects/{project['id']}/validate").json()
    code = client.get(f"/api/projects/{project['id']}/generate").json()

    assert report["overall_valid"] is True
    assert list(code["per_node_source"]) == ["ingest", "split"]


def test_projects_live_in_the_injected_store(client, project_store):
    project_id = _create(client, name="Stored")["id"]

    assert project_store.load(project_id).name == "Stored"
