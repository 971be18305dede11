import pytest

from listenqueue.core.errors import GenericError
from listenqueue.core.soundcloud_client import convert_soundcloud_media
from listenqueue.core.youtube_client import (
    YouTubeClient,
    convert_youtube_media,
    parse_iso_duration,
    split_artist_title,
)
from listenqueue.services import search_service as search_module
from listenqueue.services.search_service import search_service


def youtube_item(**overrides):
    item = {
        "id": "dQw4w9WgXcQ",
        "snippet": {
            "title": "Rick Astley - Never Gonna Give You Up (Official Video)",
            "channelTitle": "RickAstleyVEVO",
            "thumbnails": {
                "default": {"url": "https://i.ytimg.com/default.jpg"},
                "high": {"url": "https://i.ytimg.com/hqdefault.jpg"},
            },
        },
        "contentDetails": {"duration": "PT3M33S"},
    }
    item.update(overrides)
    return item


@pytest.mark.parametrize("duration, seconds", [
    ("PT3M33S", 213),
    ("PT1H2M3S", 3723),
    ("PT45S", 45),
    ("P1DT1S", 86401),
    ("PT0S", 0),
    ("", 0),
    (None, 0),
    ("garbage", 0),
])
def test_parse_iso_duration(duration, seconds):
    assert parse_iso_duration(duration) == seconds


def test_split_artist_title():
    assert split_artist_title("Daft Punk - One More Time") == ("Daft Punk", "One More Time")
    assert split_artist_title("Daft Punk – Aerodynamic [HD]") == ("Daft Punk", "Aerodynamic")
    assert split_artist_title("Band -- Song - Live") == ("Band -- Song", "Live")
    assert split_artist_title("Just a vlog") is None
    assert split_artist_title(" - Untitled") is None


def test_convert_youtube_media():
    media = convert_youtube_media(youtube_item())
    assert media == {
        "source_type": "youtube",
        "source_id": "dQw4w9WgXcQ",
        "artist": "Rick Astley",
        "title": "Never Gonna Give You Up",
        "duration": 213,
        "thumbnail": "https://i.ytimg.com/hqdefault.jpg",
        "nsfw": False,
        "restricted": [],
    }


def test_convert_youtube_media_with_empty_rating_is_nsfw():
    item = youtube_item(contentDetails={"duration": "PT3M33S", "contentRating": {}})
    assert convert_youtube_media(item)["nsfw"] is True


def test_convert_youtube_media_without_separator():
    item = youtube_item(
        snippet={"title": "Live at the park", "channelTitle": "Some Channel", "thumbnails": {
            "default": {"url": "https://i.ytimg.com/default.jpg"},
        }},
        contentDetails={
            "duration": "PT10M",
            "contentRating": {"ytRating": "ytAgeRestricted"},
            "regionRestriction": {"blocked": ["DE", "US"]},
        },
    )
    media = convert_youtube_media(item)
    assert media["artist"] == "Some Channel"
    assert media["title"] == "Live at the park"
    assert media["duration"] == 600
    assert media["thumbnail"] == "https://i.ytimg.com/default.jpg"
    assert media["nsfw"] is True
    assert media["restricted"] == ["DE", "US"]


def test_convert_soundcloud_media():
    media = convert_soundcloud_media({
        "id": 123456,
        "title": "Night Drive",
        "duration": 241600,
        "user": {"username": "synthwaver"},
        "artwork_url": None,
        "waveform_url": "https://w1.sndcdn.com/wave.png",
    })
    assert media == {
        "source_type": "soundcloud",
        "source_id": "123456",
        "artist": "synthwaver",
        "title": "Night Drive",
        "duration": 241,
        "thumbnail": "https://w1.sndcdn.com/wave.png",
        "nsfw": False,
        "restricted": [],
    }


def test_unconfigured_youtube_client():
    client = YouTubeClient(api_key="")
    with pytest.raises(GenericError) as exc:
        client.get_video("abc")
    assert exc.value.status_code == 500
    assert client.get_videos([]) == []


def test_fetch_media_unknown_provider():
    with pytest.raises(GenericError) as exc:
        search_service.fetch_media("vimeo", "1")
    assert exc.value.status_code == 404
    assert exc.value.message == "unknown provider"


def test_search_source_is_cached(monkeypatch, redis_double):
    queries = []

    def fake_search(query):
        queries.append(query)
        return [convert_youtube_media(youtube_item())]

    monkeypatch.setattr(search_module.youtube_client, "search", fake_search)

    first = search_service.search_source("YouTube", "rick astley")
    second = search_service.search_source("youtube", "rick astley")
    assert first == second
    assert queries == ["rick astley"]
    assert "search:youtube:rick astley" in redis_double.store


def test_search_endpoint(client, make_user, monkeypatch):
    _, headers = make_user("alice")
    monkeypatch.setattr(search_module.youtube_client, "search", lambda query: [convert_youtube_media(youtube_item())])
    monkeypatch.setattr(search_module.soundcloud_client, "search", lambda query: [])

    r = client.get("/api/v1/search", params={"query": "rick"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["youtube"][0]["source_id"] == "dQw4w9WgXcQ"
    assert r.json()["soundcloud"] == []

    r = client.get("/api/v1/search/vimeo", params={"query": "rick"}, headers=headers)
    assert r.status_code == 404
    assert client.get("/api/v1/search", params={"query": "rick"}).status_code == 401
