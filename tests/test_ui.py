"""
Tests for the server-rendered movie pages and the health probe.
"""

import pytest


def test_healthz(client, client_without_movies):
    assert client.get("/healthz").json() == {"ok": True}
    assert client_without_movies.get("/healthz").json() == {"ok": True}


def test_index_renders_normalized_titles(client, movies_collection):
    movies_collection.seed(
        {"movie_id": 1, "movie_title": "Canonical", "Released": "2001"},
        {"Title": "Legacy", "year": 1984},
        {},
    )
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    html = response.text
    assert "Canonical" in html
    assert "Legacy" in html
    assert "1984" in html
    assert "(no title)" in html
    assert "First raw document" not in html


def test_index_debug_shows_raw_sample(client, movies_collection):
    movies_collection.seed({"title": "Sampled", "extra_field": "kept"})
    html = client.get("/", params={"debug": "1"}).text
    assert "First raw document" in html
    assert "extra_field" in html


def test_index_caps_at_fifty(client, movies_collection):
    movies_collection.seed(*({"movie_title": f"Film {i:03d}"} for i in range(60)))
    html = client.get("/").text
    assert "Film 049" in html
    assert "Film 050" not in html


def test_index_unconfigured_is_503(client_without_movies):
    response = client_without_movies.get("/")
    assert response.status_code == 503
    assert response.json()["status"] == 503


@pytest.mark.parametrize("path", ["/ui/movie/new", "/ui/movie/update", "/ui/movie/delete"])
def test_form_pages_render_without_store(client_without_movies, path):
    response = client_without_movies.get(path)
    assert response.status_code == 200
    assert "<form" in response.text


def test_show_by_movie_id(client, movies_collection):
    movies_collection.seed({"movie_id": "12", "name": "Shown Movie"})
    html = client.get("/ui/movie/show", params={"movie_id": "12"}).text
    assert "Shown Movie" in html


def test_show_missing_renders_notice(client):
    response = client.get("/ui/movie/show", params={"movie_id": "nope"})
    assert response.status_code == 200
    assert "Movie not found" in response.text


def test_show_debug_includes_raw_json(client, movies_collection):
    (oid,) = movies_collection.seed({"movie_title": "Dbg", "secret_sauce": 1})
    html = client.get("/ui/movie/show", params={"id": str(oid), "debug": "1"}).text
    assert "secret_sauce" in html


def test_create_from_form_redirects_home(client, movies_collection):
    response = client.post(
        "/ui/movie/new",
        data={"movie_id": "31", "movie_title": "Form Film", "Released": "2011"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/"
    stored = movies_collection.docs[0]
    assert stored["movie_id"] == "31"
    assert stored["movie_title"] == "Form Film"


def test_create_from_form_without_title_is_400(client, movies_collection):
    response = client.post("/ui/movie/new", data={"movie_id": "31"}, follow_redirects=False)
    assert response.status_code == 400
    assert movies_collection.docs == []


def test_update_from_form_renders_updated_movie(client, movies_collection):
    movies_collection.seed({"movie_id": 5, "movie_title": "Before", "Released": "1999"})
    response = client.post("/ui/movie/update", data={"movie_id": "5", "movie_title": "After", "Released": ""})
    assert response.status_code == 200
    assert "After" in response.text
    assert movies_collection.docs[0]["Released"] == "1999"


def test_update_from_form_requires_key(client):
    response = client.post("/ui/movie/update", data={"movie_title": "Orphan"})
    assert response.status_code == 400


def test_delete_from_form(client, movies_collection):
    movies_collection.seed({"movie_id": 6})
    response = client.post("/ui/movie/delete", data={"movie_id": "6"}, follow_redirects=False)
    assert response.status_code == 303
    assert movies_collection.docs == []


def test_delete_from_form_missing_is_404(client):
    response = client.post("/ui/movie/delete", data={"movie_id": "6"}, follow_redirects=False)
    assert response.status_code == 404
