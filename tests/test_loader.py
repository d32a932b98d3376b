from __future__ import annotations

import json
from pathlib import Path

import pytest

from more_from_widget.loader import PostLoadError, load_posts_path, posts_from_records
from more_from_widget.models.content import PostStatus

SAMPLE_POSTS = Path(__file__).resolve().parent.parent / "scripts" / "data" / "sample_posts.json"


def test_posts_from_records_builds_permalinks(repository, settings):
    posts = posts_from_records(
        [
            {
                "id": 1,
                "title": "Hello",
                "slug": "hello",
                "published_at": "2024-01-01T00:00:00+00:00",
                "categories": [5, 6],
            },
            {"id": 2, "title": "Bare", "published_at": "2024-01-02T00:00:00Z"},
        ],
        repository,
    )

    assert posts[0].permalink == f"{settings.site_url}/hello/"
    assert posts[0].category_ids == (5, 6)
    assert posts[1].permalink == f"{settings.site_url}/?p=2"
    assert posts[1].category_ids == ()


def test_posts_from_records_reports_bad_record(repository):
    with pytest.raises(PostLoadError, match="#1"):
        posts_from_records(
            [{"id": 1, "published_at": "2024-01-01T00:00:00Z"}, {"id": "x"}],
            repository,
        )


def test_load_posts_path_requires_array(tmp_path, repository):
    path = tmp_path / "posts.json"
    path.write_text(json.dumps({"id": 1}), encoding="utf-8")

    with pytest.raises(PostLoadError):
        load_posts_path(path, repository)


def test_sample_posts_load_and_round_trip(repository):
    posts = load_posts_path(SAMPLE_POSTS, repository)
    repository.upsert_posts(posts)

    assert len(posts) == 5
    assert repository.require_post(104).status is PostStatus.DRAFT
    assert repository.require_post(102).title == "Soil & compost basics"
