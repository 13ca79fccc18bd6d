from conftest import auth


def _board(client, token):
    return client.post("/api/boards", headers=auth(token), json={"title": "Board"}).json()["data"]["board"]


def test_activities_newest_first(client, user_factory):
    _, token = user_factory(name="Alice")
    board = _board(client, token)
    list_id = board["lists"][0]["id"]
    task = client.post(f"/api/lists/{list_id}/tasks", headers=auth(token), json={"title": "Write"}).json()["data"]["task"]
    client.put(f"/api/tasks/{task['id']}/move", headers=auth(token), json={"listId": board["lists"][2]["id"], "position": 0})

    response = client.get(f"/api/boards/{board['id']}/activities", headers=auth(token))
    assert response.status_code == 200
    data = response.json()["data"]
    details = [a["details"] for a in data["activities"]]
    assert details == [
        'moved task "Write" from "To Do" to "Done"',
        'created task "Write"',
        'created board "Board"',
    ]
    assert data["activities"][0]["user"]["name"] == "Alice"
    assert data["activities"][0]["task"] == {"id": task["id"], "title": "Write"}
    assert data["activities"][2]["entityType"] == "board"
    assert data["pagination"]["total"] == 3


def test_activities_pagination(client, user_factory):
    _, token = user_factory()
    board = _board(client, token)
    for title in ("a", "b", "c"):
        client.post(f"/api/boards/{board['id']}/lists", headers=auth(token), json={"title": title})

    response = client.get(f"/api/boards/{board['id']}/activities?page=2&limit=3", headers=auth(token))
    data = response.json()["data"]
    assert data["pagination"] == {"page": 2, "limit": 3, "total": 4, "totalPages": 2}
    assert [a["details"] for a in data["activities"]] == ['created board "Board"']


def test_activities_require_membership(client, user_factory):
    _, token = user_factory()
    _, stranger = user_factory()
    board = _board(client, token)
    response = client.get(f"/api/boards/{board['id']}/activities", headers=auth(stranger))
    assert response.status_code == 403
    assert response.json()["message"] == "You are not a member of this board"
