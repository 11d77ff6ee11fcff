# ============================================================================
# FILE: tests/test_api_communities.py
# ============================================================================
def _create_community(client, headers, name="Synthwave"):
    response = client.post("/api/communities", json={"name": name, "description": "Retro"}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_community(client, make_user, headers_for):
    leader = make_user("leader")

    community = _create_community(client, headers_for(leader))

    assert community["leader"]["id"] == leader.id
    assert community["member_count"] == 1
    assert community["is_member"] is True
    assert community["user_role"] == "LEADER"


def test_duplicate_community_name(client, make_user, headers_for):
    leader = make_user("leader")
    _create_community(client, headers_for(leader))

    response = client.post("/api/communities", json={"name": "Synthwave"}, headers=headers_for(leader))
    assert response.status_code == 409


def test_membership_lifecycle(client, make_user, headers_for):
    leader = make_user("leader")
    fan = make_user("fan")
    community = _create_community(client, headers_for(leader))
    cid = community["id"]

    assert client.post(f"/api/communities/{cid}/join", headers=headers_for(fan)).status_code == 200
    assert client.post(f"/api/communities/{cid}/join", headers=headers_for(fan)).status_code == 409

    view = client.get(f"/api/communities/{cid}", headers=headers_for(fan)).json()
    assert view["member_count"] == 2
    assert view["user_role"] == "MEMBER"

    members = client.get(f"/api/communities/{cid}/members").json()
    assert [m["role"] for m in members] == ["LEADER", "MEMBER"]

    mine = client.get("/api/communities/user", headers=headers_for(fan)).json()
    assert [c["id"] for c in mine] == [cid]

    assert client.post(f"/api/communities/{cid}/leave", headers=headers_for(fan)).status_code == 200
    anon_view = client.get(f"/api/communities/{cid}").json()
    assert anon_view["member_count"] == 1
    assert anon_view["is_member"] is False


def test_leader_cannot_leave(client, make_user, headers_for):
    leader = make_user("leader")
    community = _create_community(client, headers_for(leader))

    response = client.post(f"/api/communities/{community['id']}/leave", headers=headers_for(leader))
    assert response.status_code == 400
    assert response.json()["detail"] == "The leader cannot leave the community"


def test_only_leader_updates(client, make_user, headers_for):
    leader = make_user("leader")
    fan = make_user("fan")
    community = _create_community(client, headers_for(leader))

    response = client.put(f"/api/communities/{community['id']}", json={"description": "x"}, headers=headers_for(fan))
    assert response.status_code == 403

    response = client.put(
        f"/api/communities/{community['id']}", json={"description": "Neon"}, headers=headers_for(leader)
    )
    assert response.json()["description"] == "Neon"


def test_posting_requires_membership(client, make_user, headers_for):
    leader = make_user("leader")
    fan = make_user("fan")
    community = _create_community(client, headers_for(leader))
    payload = {"content": "hi all", "community_id": community["id"]}

    response = client.post("/api/posts", json=payload, headers=headers_for(fan))
    assert response.status_code == 400

    client.post(f"/api/communities/{community['id']}/join", headers=headers_for(fan))
    response = client.post("/api/posts", json=payload, headers=headers_for(fan))
    assert response.status_code == 201
    assert response.json()["community_name"] == "Synthwave"

    page = client.get(f"/api/communities/{community['id']}/posts").json()
    assert page["total"] == 1


def test_radio_playlist(client, make_user, make_song, headers_for):
    leader = make_user("leader")
    fan = make_user("fan")
    song = make_song(leader)
    community = _create_community(client, headers_for(leader))
    playlist = client.post(
        "/api/playlists", json={"name": "Radio", "is_public": True, "song_ids": [song.id]}, headers=headers_for(leader)
    ).json()

    url = f"/api/communities/{community['id']}/radio"
    assert client.post(url, params={"playlist_id": playlist["id"]}, headers=headers_for(fan)).status_code == 403

    response = client.post(url, params={"playlist_id": playlist["id"]}, headers=headers_for(leader))
    assert response.status_code == 200
    assert response.json()["radio_playlist_id"] == playlist["id"]


def test_search_communities(client, make_user, headers_for):
    leader = make_user("leader")
    _create_community(client, headers_for(leader), "Lo-Fi Beats")
    _create_community(client, headers_for(leader), "Opera")

    results = client.get("/api/communities/search", params={"query": "lo-fi"}).json()
    assert [c["name"] for c in results] == ["Lo-Fi Beats"]


def test_delete_community(client, make_user, headers_for):
    leader = make_user("leader")
    community = _create_community(client, headers_for(leader))

    assert client.delete(f"/api/communities/{community['id']}", headers=headers_for(leader)).status_code == 204
    assert client.get(f"/api/communities/{community['id']}").status_code == 404
