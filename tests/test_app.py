def test_health_check(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_index_serves_client(client):
    res = client.get("/")

    assert res.status_code == 200
    assert "Backbencher" in res.text
    assert client.get("/static/app.js").status_code == 200


def test_unknown_route_uses_message_body(client):
    res = client.get("/api/nope")

    assert res.status_code == 404
    assert res.json() == {"message": "Not Found"}


def test_profile_name_is_stored_apart_from_chat_name(client):
    js = client.get("/static/app.js").text

    assert 'localStorage.getItem("userProfile")' in js
    assert "settings.profileName = user.username" in js
    assert "settings.username = user.username" not in js


def test_chat_name_input_matches_room_message_limit(client):
    html = client.get("/").text

    assert '<input id="chat-username" maxlength="20"' in html
    assert '<input id="profile-username" maxlength="50"' in html
