# ============================================================================
# FILE: tests/test_api_playlists.py
# ============================================================================
from app.db.models.user import Role


def _create_playlist(client, headers, **payload):
    payload.setdefault("name", "Road trip")
    response = client.post("/api/playlists", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_playlist_with_songs(client, make_user, make_song, headers_for):
    owner = make_user("owner")
    first = make_song(owner, title="First")
    second = make_song(owner, title="Second")

    playlist = _create_playlist(client, headers_for(owner), song_ids=[second.id, first.id])

    assert playlist["owner_nickname"] == "owner"
    assert [s["song"]["title"] for s in playlist["songs"]] == ["Second", "First"]
    assert [s["position"] for s in playlist["songs"]] == [0, 1]


def test_private_playlist_hidden_from_others(client, make_user, headers_for):
    owner = make_user("owner")
    other = make_user("other")
    admin = make_user("admin", role=Role.ADMIN)
    playlist = _create_playlist(client, headers_for(owner), is_public=False)
    url = f"/api/playlists/{playlist['id']}"

    assert client.get(url).status_code == 404
    assert client.get(url, headers=headers_for(other)).status_code == 404
    assert client.get(url, headers=headers_for(owner)).status_code == 200
    assert client.get(url, headers=headers_for(admin)).status_code == 200


def test_public_listings(client, make_user, headers_for):
    owner = make_user("owner")
    public = _create_playlist(client, headers_for(owner), name="Open", is_public=True)
    private = _create_playlist(client, headers_for(owner), name="Closed")

    assert [p["id"] for p in client.get("/api/playlists/public").json()] == [public["id"]]
    assert [p["id"] for p in client.get(f"/api/playlists/user/{owner.id}").json()] == [public["id"]]

    mine = client.get("/api/playlists/user", headers=headers_for(owner)).json()
    assert [p["id"] for p in mine] == [public["id"], private["id"]]


def test_add_and_remove_songs(client, make_user, make_song, headers_for):
    owner = make_user("owner")
    other = make_user("other")
    song = make_song(owner, title="Only")
    playlist = _create_playlist(client, headers_for(owner))
    url = f"/api/playlists/{playlist['id']}/songs/{song.id}"

    assert client.post(url, headers=headers_for(other)).status_code == 403

    response = client.post(url, headers=headers_for(owner))
    assert response.status_code == 200
    assert [s["song"]["id"] for s in response.json()["songs"]] == [song.id]

    assert client.post(url, headers=headers_for(owner)).status_code == 409

    response = client.delete(url, headers=headers_for(owner))
    assert response.json()["songs"] == []
    assert client.delete(url, headers=headers_for(owner)).status_code == 400


def test_update_replaces_songs(client, make_user, make_song, headers_for):
    owner = make_user("owner")
    a = make_song(owner, title="A")
    b = make_song(owner, title="B")
    playlist = _create_playlist(client, headers_for(owner), song_ids=[a.id])

    response = client.put(
        f"/api/playlists/{playlist['id']}",
        json={"is_public": True, "song_ids": [b.id, a.id]},
        headers=headers_for(owner),
    )

    body = response.json()
    assert body["is_public"] is True
    assert [s["song"]["title"] for s in body["songs"]] == ["B", "A"]


def test_delete_playlist(client, make_user, headers_for):
    owner = make_user("owner")
    other = make_user("other")
    playlist = _create_playlist(client, headers_for(owner), is_public=True)
    url = f"/api/playlists/{playlist['id']}"

    assert client.delete(url, headers=headers_for(other)).status_code == 403
    assert client.delete(url, headers=headers_for(owner)).status_code == 204
    assert client.get(url).status_code == 404
