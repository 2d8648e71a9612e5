"""
Tests for decoding Jikan payloads into models.
"""

import json

import pytest
from pydantic import ValidationError

from animate.decoding import (
    decode_episode_detail,
    decode_episode_list,
    decode_episode_videos,
    decode_search_results,
)
from animate.display import display_title
from animate.errors import DecodeError, MissingFieldError
from conftest import anime_payload, episode_detail_payload, episode_payload, video_payload


def test_search_results_keep_response_order():
    payload = {"data": [anime_payload(20, "Naruto"), anime_payload(1735, "Naruto: Shippuuden"), anime_payload(1, "Cowboy Bebop")]}

    results = decode_search_results(payload)

    assert [anime.mal_id for anime in results] == [20, 1735, 1]


def test_search_results_from_raw_bytes():
    body = json.dumps({"data": [anime_payload()]}).encode("utf-8")

    results = decode_search_results(body)

    assert len(results) == 1
    anime = results[0]
    assert anime.mal_id == 20
    assert anime.images.jpg.large_image_url.endswith("20l.jpg")
    assert anime.images.webp.small_image_url.endswith("20t.webp")
    assert anime.aired.from_ == "2002-10-03T00:00:00+00:00"
    assert anime.aired.to == "2007-02-08T00:00:00+00:00"


def test_empty_search_results():
    assert decode_search_results('{"data": []}') == []


def test_missing_english_title_decodes_as_absent():
    raw = anime_payload()
    del raw["title_english"]

    anime = decode_search_results({"data": [raw]})[0]

    assert anime.title_english is None
    assert display_title(anime) == "Naruto"


def test_null_optionals_decode_as_absent():
    raw = anime_payload(title_english=None, episodes=None, score=None, synopsis=None, aired=None)

    anime = decode_search_results({"data": [raw]})[0]

    assert anime.title_english is None
    assert anime.episodes is None
    assert anime.score is None
    assert anime.synopsis is None
    assert anime.aired is None


def test_malformed_optionals_do_not_fail_the_response():
    raw = anime_payload(score="not a number", episodes=12.5, aired={"from": 2002, "to": None})

    anime = decode_search_results({"data": [raw]})[0]

    assert anime.mal_id == 20
    assert anime.score is None
    assert anime.episodes is None
    assert anime.aired.from_ is None
    assert anime.aired.to is None


def test_missing_mal_id_fails_whole_decode():
    broken = anime_payload(1)
    del broken["mal_id"]
    payload = {"data": [anime_payload(20), broken]}

    with pytest.raises(MissingFieldError) as exc_info:
        decode_search_results(payload)

    assert exc_info.value.field == "mal_id"


def test_missing_nested_required_field():
    raw = anime_payload()
    del raw["images"]["webp"]["image_url"]

    with pytest.raises(MissingFieldError) as exc_info:
        decode_search_results({"data": [raw]})

    assert exc_info.value.field == "image_url"


def test_missing_envelope():
    with pytest.raises(MissingFieldError) as exc_info:
        decode_episode_list({"pagination": {}})

    assert exc_info.value.field == "data"


def test_wrong_type_for_required_field_is_a_decode_error():
    with pytest.raises(DecodeError) as exc_info:
        decode_search_results({"data": [anime_payload(mal_id="twenty")]})

    assert not isinstance(exc_info.value, MissingFieldError)
    assert "mal_id" in exc_info.value.detail


def test_invalid_json_is_a_decode_error():
    with pytest.raises(DecodeError):
        decode_search_results(b"<html>Service Unavailable</html>")


def test_models_are_frozen():
    anime = decode_search_results({"data": [anime_payload()]})[0]

    with pytest.raises(ValidationError):
        anime.title = "Boruto"


def test_episode_list():
    payload = {"data": [episode_payload(1), episode_payload(2, "My Name is Konohamaru!", aired=None, score=None, filler=True)]}

    episodes = decode_episode_list(payload)

    assert [episode.mal_id for episode in episodes] == [1, 2]
    assert episodes[0].aired == "2002-10-03T00:00:00+09:00"
    assert episodes[0].score == 4.4
    assert episodes[1].aired is None
    assert episodes[1].score is None
    assert episodes[1].filler is True
    assert episodes[1].recap is False


def test_episode_missing_filler_flag():
    raw = episode_payload()
    del raw["filler"]

    with pytest.raises(MissingFieldError) as exc_info:
        decode_episode_list({"data": [raw]})

    assert exc_info.value.field == "filler"


def test_episode_detail():
    detail = decode_episode_detail({"data": episode_detail_payload()})

    assert detail.mal_id == 1
    assert detail.title == "Enter: Naruto Uzumaki!"
    assert detail.title_romanji == "Sanjou! Uzumaki Naruto"
    assert detail.title_japanese == "参上!うずまきナルト"
    assert detail.duration == 1380
    assert detail.filler is False
    assert detail.recap is False
    assert detail.synopsis.startswith("A boy")


def test_episode_detail_with_only_required_fields():
    payload = {"data": {"mal_id": 1, "url": "https://myanimelist.net/anime/20/Naruto/episode/1",
                        "title": "Enter: Naruto Uzumaki!", "filler": False, "recap": False}}

    detail = decode_episode_detail(payload)

    assert detail.title_japanese is None
    assert detail.title_romanji is None
    assert detail.duration is None
    assert detail.aired is None
    assert detail.synopsis is None


def test_episode_videos():
    videos = decode_episode_videos({"data": [video_payload(3), video_payload(2)]})

    assert [video.mal_id for video in videos] == [3, 2]
    assert videos[0].episode == "Episode 3"
    assert videos[0].images.jpg.image_url == "https://img1.ak.crunchyroll.com/ep3.jpg"
