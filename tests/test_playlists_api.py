from listenqueue.services.playlist_service import playlist_service

API = "/api/v1/playlists"


def _create(client, headers, name="Chill", shared=False):
    r = client.post(API, json={"name": name, "description": "", "shared": shared}, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()


def _add(client, headers, playlist_id, source_ids, after=None):
    items = [{"source_type": "youtube", "source_id": source_id} for source_id in source_ids]
    r = client.post(f"{API}/{playlist_id}/media", json={"items": items, "after": after}, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()


def _media_ids(client, headers, playlist_id):
    r = client.get(f"{API}/{playlist_id}", headers=headers)
    assert r.status_code == 200, r.text
    return [media["id"] for media in r.json()["media"]]


def test_requires_authentication(client):
    assert client.get(API).status_code == 401


def test_create_and_list_playlists(client, make_user):
    _, headers = make_user("alice")
    created = _create(client, headers, "Morning")
    assert created["name"] == "Morning"
    assert created["shared"] is False
    assert created["size"] == 0
    assert created["media"] == []

    _create(client, headers, "Evening")
    r = client.get(API, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert body["page"] == 0
    assert body["limit"] == 50
    assert [p["name"] for p in body["data"]] == ["Morning", "Evening"]


def test_list_only_returns_own_playlists_and_clamps_limit(client, make_user):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    for i in range(3):
        _create(client, alice, f"A{i}")
    _create(client, bob, "B")

    r = client.get(API, params={"page": 1, "limit": 2}, headers=alice)
    body = r.json()
    assert body["total"] == 3
    assert [p["name"] for p in body["data"]] == ["A2"]

    r = client.get(API, params={"limit": 500}, headers=alice)
    assert r.json()["limit"] == 50


def test_create_playlist_rejects_wrong_types(client, make_user):
    _, headers = make_user("alice")
    r = client.post(API, json={"name": "x", "description": "", "shared": "yes"}, headers=headers)
    assert r.status_code == 422
    r = client.post(API, json={"name": 5, "description": "", "shared": False}, headers=headers)
    assert r.status_code == 422


def test_get_unknown_playlist_is_404(client, make_user):
    _, headers = make_user("alice")
    r = client.get(f"{API}/999", headers=headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "playlist with ID 999 not found"


def test_private_playlist_is_hidden_from_others(client, make_user):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    private = _create(client, alice, "Secret")
    public = _create(client, alice, "Open", shared=True)

    r = client.get(f"{API}/{private['id']}", headers=bob)
    assert r.status_code == 403
    assert r.json()["detail"] == "this playlist is private"
    assert client.get(f"{API}/{public['id']}", headers=bob).status_code == 200


def test_rename_and_share_require_ownership(client, make_user):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    playlist = _create(client, alice)

    r = client.put(f"{API}/{playlist['id']}/rename", json={"name": "Mine"}, headers=bob)
    assert r.status_code == 403
    r = client.put(f"{API}/{playlist['id']}/share", json={"share": True}, headers=bob)
    assert r.status_code == 403

    r = client.put(f"{API}/{playlist['id']}/rename", json={"name": "Renamed"}, headers=alice)
    assert r.status_code == 200
    assert r.json()["name"] == "Renamed"
    r = client.put(f"{API}/{playlist['id']}/share", json={"share": True}, headers=alice)
    assert r.json()["shared"] is True


def test_rename_and_share_validate_input(client, make_user):
    _, alice = make_user("alice")
    playlist = _create(client, alice)
    assert client.put(f"{API}/{playlist['id']}/rename", json={}, headers=alice).status_code == 422
    assert client.put(f"{API}/{playlist['id']}/rename", json={"name": 1}, headers=alice).status_code == 422
    assert client.put(f"{API}/{playlist['id']}/share", json={}, headers=alice).status_code == 422
    assert client.put(f"{API}/{playlist['id']}/share", json={"share": "true"}, headers=alice).status_code == 422


def test_delete_playlist(client, make_user):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    playlist = _create(client, alice)

    assert client.delete(f"{API}/{playlist['id']}", headers=bob).status_code == 403
    r = client.delete(f"{API}/{playlist['id']}", headers=alice)
    assert r.status_code == 200
    assert r.json()["id"] == playlist["id"]
    assert client.get(f"{API}/{playlist['id']}", headers=alice).status_code == 404


def test_active_playlist_cannot_be_deleted(client, make_user, redis_double):
    alice_id, alice = make_user("alice")
    playlist = _create(client, alice)

    r = client.put(f"{API}/{playlist['id']}/activate", headers=alice)
    assert r.status_code == 200
    assert r.json() == {"playlist_id": playlist["id"]}
    assert redis_double.store[f"playlist:{alice_id}"] == str(playlist["id"])
    assert playlist_service.get_active_playlist_id(alice_id) == playlist["id"]

    r = client.delete(f"{API}/{playlist['id']}", headers=alice)
    assert r.status_code == 403
    assert r.json()["detail"] == "you can't delete an active playlist"


def test_activate_private_playlist_of_another_user(client, make_user):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    playlist = _create(client, alice, "Secret")
    r = client.put(f"{API}/{playlist['id']}/activate", headers=bob)
    assert r.status_code == 403
    assert r.json()["detail"] == "alice has made Secret private"


def test_add_media_fetches_unknown_tracks_once(client, make_user, fake_sources):
    _, alice = make_user("alice")
    first = _create(client, alice, "One")
    second = _create(client, alice, "Two")

    added = _add(client, alice, first["id"], ["abc"])
    assert added[0]["artist"] == "Artist abc"
    assert added[0]["end"] == 200
    assert added[0]["global_media"]["source_id"] == "abc"

    _add(client, alice, second["id"], ["abc"])
    assert fake_sources == [("youtube", "abc")]


def test_add_media_inserts_after_item(client, make_user, fake_sources):
    _, alice = make_user("alice")
    playlist = _create(client, alice)
    a, b = [m["id"] for m in _add(client, alice, playlist["id"], ["a", "b"])]
    c = _add(client, alice, playlist["id"], ["c"], after=a)[0]["id"]
    d = _add(client, alice, playlist["id"], ["d"], after=-1)[0]["id"]

    assert _media_ids(client, alice, playlist["id"]) == [d, a, c, b]


def test_add_media_to_foreign_playlist_is_forbidden(client, make_user, fake_sources):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    playlist = _create(client, alice, shared=True)
    r = client.post(
        f"{API}/{playlist['id']}/media",
        json={"items": [{"source_type": "youtube", "source_id": "x"}]},
        headers=bob,
    )
    assert r.status_code == 403
    assert fake_sources == []


def test_add_media_from_unknown_provider_saves_nothing(client, make_user, fake_sources):
    _, alice = make_user("alice")
    playlist = _create(client, alice)
    r = client.post(
        f"{API}/{playlist['id']}/media",
        json={"items": [
            {"source_type": "youtube", "source_id": "ok"},
            {"source_type": "vimeo", "source_id": "nope"},
        ]},
        headers=alice,
    )
    assert r.status_code == 404
    assert r.json()["detail"] == "unknown provider"
    assert _media_ids(client, alice, playlist["id"]) == []


def test_add_media_checks_time_range(client, make_user, fake_sources):
    _, alice = make_user("alice")
    playlist = _create(client, alice)
    url = f"{API}/{playlist['id']}/media"

    r = client.post(url, json={"items": [{"source_type": "youtube", "source_id": "a", "start": 50, "end": 10}]}, headers=alice)
    assert r.status_code == 422

    # end defaults to the 200 second track duration
    r = client.post(url, json={"items": [{"source_type": "youtube", "source_id": "a", "start": 500}]}, headers=alice)
    assert r.status_code == 400
    assert r.json()["detail"] == "end has to be after start"
    assert _media_ids(client, alice, playlist["id"]) == []

    r = client.post(url, json={"items": [{"source_type": "youtube", "source_id": "a", "start": 12.5}]}, headers=alice)
    assert r.status_code == 200
    assert r.json()[0]["start"] == 12.5
    assert r.json()[0]["end"] == 200


def test_add_media_requires_items_array(client, make_user):
    _, alice = make_user("alice")
    playlist = _create(client, alice)
    r = client.post(f"{API}/{playlist['id']}/media", json={"items": "abc"}, headers=alice)
    assert r.status_code == 422


def test_get_playlist_items_paginates(client, make_user, fake_sources):
    _, alice = make_user("alice")
    playlist = _create(client, alice)
    _add(client, alice, playlist["id"], ["a", "b", "c"])

    r = client.get(f"{API}/{playlist['id']}/media", params={"page": 1, "limit": 2}, headers=alice)
    body = r.json()
    assert body["total"] == 3
    assert [m["global_media"]["source_id"] for m in body["data"]] == ["c"]


def test_move_items(client, make_user, fake_sources):
    _, alice = make_user("alice")
    playlist = _create(client, alice)
    a, b, c, d = [m["id"] for m in _add(client, alice, playlist["id"], ["a", "b", "c", "d"])]

    r = client.put(f"{API}/{playlist['id']}/move", json={"items": [d, a], "after": b}, headers=alice)
    assert r.status_code == 200
    assert [m["id"] for m in r.json()["media"]] == [b, d, a, c]

    r = client.put(f"{API}/{playlist['id']}/move", json={"items": [c], "after": None}, headers=alice)
    assert [m["id"] for m in r.json()["media"]] == [c, b, d, a]


def test_move_items_after_a_moved_item(client, make_user, fake_sources):
    _, alice = make_user("alice")
    playlist = _create(client, alice)
    a, b, c = [m["id"] for m in _add(client, alice, playlist["id"], ["a", "b", "c"])]

    r = client.put(f"{API}/{playlist['id']}/move", json={"items": [b, c], "after": b}, headers=alice)
    assert [m["id"] for m in r.json()["media"]] == [a, b, c]


def test_move_items_requires_ownership(client, make_user, fake_sources):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    playlist = _create(client, alice, shared=True)
    a = _add(client, alice, playlist["id"], ["a"])[0]["id"]
    r = client.put(f"{API}/{playlist['id']}/move", json={"items": [a], "after": None}, headers=bob)
    assert r.status_code == 403


def test_get_and_update_item(client, make_user, fake_sources):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    playlist = _create(client, alice)
    media_id = _add(client, alice, playlist["id"], ["a"])[0]["id"]

    r = client.get(f"{API}/{playlist['id']}/media/{media_id}", headers=alice)
    assert r.status_code == 200
    assert r.json()["title"] == "Title a"
    assert client.get(f"{API}/{playlist['id']}/media/12345", headers=alice).status_code == 404

    metadata = {"artist": "New Artist", "title": "New Title", "start": 5.5, "end": 120}
    assert client.put(f"{API}/{playlist['id']}/media/{media_id}", json=metadata, headers=bob).status_code == 403
    r = client.put(f"{API}/{playlist['id']}/media/{media_id}", json=metadata, headers=alice)
    assert r.status_code == 200
    assert r.json()["artist"] == "New Artist"
    assert r.json()["start"] == 5.5
    assert r.json()["end"] == 120

    r = client.put(f"{API}/{playlist['id']}/media/12345", json=metadata, headers=alice)
    assert r.status_code == 404
    assert r.json()["detail"] == "media not found"


def test_update_item_validates_metadata(client, make_user, fake_sources):
    _, alice = make_user("alice")
    playlist = _create(client, alice)
    media_id = _add(client, alice, playlist["id"], ["a"])[0]["id"]
    url = f"{API}/{playlist['id']}/media/{media_id}"

    assert client.put(url, json={"artist": "x", "title": "y", "start": 10, "end": 5}, headers=alice).status_code == 422
    assert client.put(url, json={"artist": 1, "title": "y", "start": 0, "end": 5}, headers=alice).status_code == 422
    assert client.put(url, json={"artist": "x", "title": "y"}, headers=alice).status_code == 422


def test_delete_items(client, make_user, fake_sources):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    playlist = _create(client, alice)
    a, b, c = [m["id"] for m in _add(client, alice, playlist["id"], ["a", "b", "c"])]

    r = client.request("DELETE", f"{API}/{playlist['id']}/media", json={"items": [a, 9999]}, headers=bob)
    assert r.status_code == 403

    r = client.request("DELETE", f"{API}/{playlist['id']}/media", json={"items": [a, 9999]}, headers=alice)
    assert r.status_code == 200
    assert [m["id"] for m in r.json()["media"]] == [b, c]

    r = client.delete(f"{API}/{playlist['id']}/media/{c}", headers=alice)
    assert [m["id"] for m in r.json()["media"]] == [b]
    assert r.json()["size"] == 1


def test_copy_item(client, make_user, fake_sources):
    _, alice = make_user("alice")
    _, bob = make_user("bobby")
    source = _create(client, alice, "Source", shared=True)
    media_id = _add(client, alice, source["id"], ["a"])[0]["id"]
    target = _create(client, bob, "Target")

    r = client.post(
        f"{API}/{source['id']}/media/{media_id}/copy",
        json={"to_playlist_id": target["id"]},
        headers=bob,
    )
    assert r.status_code == 200
    copied = r.json()["media"]
    assert len(copied) == 1
    assert copied[0]["id"] != media_id
    assert copied[0]["global_media"]["source_id"] == "a"

    r = client.post(
        f"{API}/{source['id']}/media/{media_id}/copy",
        json={"to_playlist_id": target["id"]},
        headers=alice,
    )
    assert r.status_code == 403
    r = client.post(
        f"{API}/{source['id']}/media/{media_id}/copy",
        json={"to_playlist_id": 4242},
        headers=alice,
    )
    assert r.status_code == 404
