"""
Shared fixtures: Jikan-shaped payloads and a client wired to a fake transport.
"""

import json

import httpx
import pytest

from animate.api import JikanClient

BASE_URL = "https://api.jikan.moe/v4"


def anime_payload(mal_id=20, title="Naruto", **overrides):
    payload = {
        "mal_id": mal_id,
        "url": f"https://myanimelist.net/anime/{mal_id}",
        "images": {
            fmt: {
                "image_url": f"https://cdn.myanimelist.net/images/anime/{mal_id}.{fmt}",
                "small_image_url": f"https://cdn.myanimelist.net/images/anime/{mal_id}t.{fmt}",
                "large_image_url": f"https://cdn.myanimelist.net/images/anime/{mal_id}l.{fmt}",
            }
            for fmt in ("jpg", "webp")
        },
        "title": title,
        "title_english": title,
        "title_japanese": "ナルト",
        "type": "TV",
        "episodes": 220,
        "status": "Finished Airing",
        "score": 8.0,
        "synopsis": "Moments prior to Naruto Uzumaki's birth...",
        "aired": {
            "from": "2002-10-03T00:00:00+00:00",
            "to": "2007-02-08T00:00:00+00:00",
            "string": "Oct 3, 2002 to Feb 8, 2007",
        },
        "popularity": 8,
    }
    payload.update(overrides)
    return payload


def episode_payload(mal_id=1, title="Enter: Naruto Uzumaki!", **overrides):
    payload = {
        "mal_id": mal_id,
        "url": f"https://myanimelist.net/anime/20/Naruto/episode/{mal_id}",
        "title": title,
        "title_japanese": "参上!うずまきナルト",
        "title_romanji": "Sanjou! Uzumaki Naruto",
        "aired": "2002-10-03T00:00:00+09:00",
        "score": 4.4,
        "filler": False,
        "recap": False,
        "forum_url": None,
    }
    payload.update(overrides)
    return payload


def episode_detail_payload(mal_id=1, **overrides):
    payload = episode_payload(mal_id)
    payload.pop("score")
    payload["duration"] = 1380
    payload["synopsis"] = "A boy with a nine-tailed fox sealed inside him..."
    payload.update(overrides)
    return payload


def video_payload(mal_id=1, **overrides):
    payload = {
        "mal_id": mal_id,
        "title": f"Episode title {mal_id}",
        "episode": f"Episode {mal_id}",
        "url": f"https://myanimelist.net/anime/20/Naruto/episode/{mal_id}",
        "images": {"jpg": {"image_url": f"https://img1.ak.crunchyroll.com/ep{mal_id}.jpg"}},
    }
    payload.update(overrides)
    return payload


class FakeJikan:
    """
    Routes requests by path to canned responses and records every request.

    A route value may be a JSON-able object (served with status 200), an
    httpx.Response, or an exception instance to raise.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v4")
        route = self.routes.get(path)

        if route is None:
            return httpx.Response(404, json={"status": 404, "message": "Resource does not exist"})
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, content=json.dumps(route).encode("utf-8"))

    def client(self) -> JikanClient:
        return JikanClient(
            base_url=BASE_URL,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(self)),
        )


@pytest.fixture
def fake_jikan():
    return FakeJikan()
