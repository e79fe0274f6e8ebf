tip = {"__rerum.history.next": {"$exists": True, "$size": 0}}


def test_status(store_server_client):
    response = store_server_client.get("/status")
    assert response.status == "200 OK"
    assert response.get_json() == {"web": "ok", "documents": 0}


def test_create_and_fetch(store_server_client):
    response = store_server_client.post("/create", json={"type": "Annotation"})
    assert response.status == "201 CREATED"
    doc = response.get_json()

    response = store_server_client.get(f"/id/{doc['@id']}")
    assert response.status == "200 OK"
    assert response.get_json() == doc


def test_create_requires_json_object(store_server_client):
    response = store_server_client.post("/create", json=["not", "an", "object"])
    assert response.status == "400 BAD REQUEST"


def test_patch_and_query_history_tip(store_server_client):
    page = store_server_client.post(
        "/create", json={"type": "AnnotationPage", "target": "C1", "items": []}
    ).get_json()

    response = store_server_client.patch(
        "/patch", json=dict(page, items=[{"@id": "A1"}])
    )
    assert response.status == "200 OK"
    new_page = response.get_json()
    assert new_page["@id"] != page["@id"]

    response = store_server_client.post(
        "/query", json=dict(tip, target="C1", type="AnnotationPage")
    )
    assert response.status == "200 OK"
    assert [doc["@id"] for doc in response.get_json()] == [new_page["@id"]]


def test_patch_superseded_version_conflicts(store_server_client):
    doc = store_server_client.post("/create", json={"type": "Annotation"}).get_json()
    store_server_client.patch("/patch", json=dict(doc, v=2))

    response = store_server_client.patch("/patch", json=dict(doc, v=3))
    assert response.status == "409 CONFLICT"


def test_put_unknown_document(store_server_client):
    response = store_server_client.put("/update", json={"@id": "missing"})
    assert response.status == "404 NOT FOUND"


def test_delete(store_server_client):
    doc = store_server_client.post("/create", json={"type": "Annotation"}).get_json()

    response = store_server_client.delete(f"/delete/{doc['@id']}")
    assert response.status == "204 NO CONTENT"

    response = store_server_client.delete(f"/delete/{doc['@id']}")
    assert response.status == "404 NOT FOUND"


def test_query_with_unsupported_operator(store_server_client):
    response = store_server_client.post("/query", json={"type": {"$regex": "Anno"}})
    assert response.status == "400 BAD REQUEST"
