def test_create_and_list_rooms(client):
    first = client.post("/api/rooms", json={"roomName": "Physics crammers"})
    second = client.post("/api/rooms", json={"roomName": "Back row"})

    assert first.status_code == 200
    assert first.json()["name"] == "Physics crammers"
    assert first.json()["userCount"] == 1

    rooms = client.get("/api/rooms").json()
    assert [r["id"] for r in rooms] == [second.json()["id"], first.json()["id"]]


def test_room_name_validation(client):
    assert client.post("/api/rooms", json={"roomName": ""}).status_code == 400
    assert client.post("/api/rooms", json={"roomName": "r" * 51}).status_code == 400
    assert client.post("/api/rooms", json={"roomName": "r" * 50}).status_code == 200


def test_messages_are_ordered_by_creation_time(client):
    room_id = client.post("/api/rooms", json={"roomName": "Study"}).json()["id"]

    client.post(f"/api/rooms/{room_id}/messages", json={"username": "ana", "message": "first"})
    client.post(f"/api/rooms/{room_id}/messages", json={"username": "ben", "message": "second"})

    messages = client.get(f"/api/rooms/{room_id}/messages").json()
    assert [m["message"] for m in messages] == ["second", "first"]
    assert messages[0]["username"] == "ben"
    assert messages[0]["roomId"] == room_id


def test_read_is_capped_at_latest_fifty(client):
    room_id = client.post("/api/rooms", json={"roomName": "Spam"}).json()["id"]
    for i in range(55):
        client.post(f"/api/rooms/{room_id}/messages", json={"username": "bot", "message": f"msg {i}"})

    messages = client.get(f"/api/rooms/{room_id}/messages").json()

    assert len(messages) == 50
    assert messages[0]["message"] == "msg 54"
    assert messages[-1]["message"] == "msg 5"


def test_messages_are_scoped_to_their_room(client):
    a = client.post("/api/rooms", json={"roomName": "A"}).json()["id"]
    b = client.post("/api/rooms", json={"roomName": "B"}).json()["id"]
    client.post(f"/api/rooms/{a}/messages", json={"username": "ana", "message": "hi A"})

    assert client.get(f"/api/rooms/{b}/messages").json() == []


def test_posting_to_unknown_room_stores_orphan_message(client):
    res = client.post("/api/rooms/999/messages", json={"username": "ghost", "message": "anyone?"})

    assert res.status_code == 200
    assert client.get("/api/rooms/999/messages").json()[0]["message"] == "anyone?"
    assert client.get("/api/rooms").json() == []


def test_room_message_validation(client):
    res = client.post("/api/rooms/1/messages", json={"username": "u" * 21, "message": "hi"})
    assert res.status_code == 400

    res = client.post("/api/rooms/1/messages", json={"username": "ana", "message": "m" * 501})
    assert res.status_code == 400

    res = client.get("/api/rooms/not-a-number/messages")
    assert res.status_code == 400
