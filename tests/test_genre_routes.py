# /tests/test_genre_routes.py

from app.core.config import CATALOG_PREFIX


def _genre_id(location: str) -> str:
    return location.rsplit("/", 1)[-1]


def test_create_then_view_a_new_genre(client):
    response = client.post(f"{CATALOG_PREFIX}/genre/create", data={"name": "  Sci-Fi  "})

    assert response.status_code == 302
    location = response.headers["location"]
    assert location.startswith(f"{CATALOG_PREFIX}/genre/genre_")

    detail = client.get(location)
    assert detail.status_code == 200
    assert detail.context["genre"].name == "Sci-Fi"
    assert detail.context["genre_books"] == []


def test_duplicate_name_in_other_case_redirects_to_existing(client, seed, db_service, run):
    fantasy = seed.genre("Fantasy")

    response = client.post(f"{CATALOG_PREFIX}/genre/create", data={"name": "fantasy"})

    assert response.status_code == 302
    assert response.headers["location"] == f"{CATALOG_PREFIX}/genre/{fantasy.id}"
    assert run(db_service.count_genres()) == 1


def test_short_name_is_rejected(client, db_service, run):
    response = client.post(f"{CATALOG_PREFIX}/genre/create", data={"name": "ab"})

    assert response.status_code == 200
    assert response.template.name == "genre_form.html"
    assert [e.message for e in response.context["errors"]] == ["Genre name must contain at least 3 characters"]
    assert response.context["genre"]["name"] == "ab"
    assert run(db_service.count_genres()) == 0


def test_list_is_sorted_by_name(client, seed):
    seed.genre("Poetry")
    seed.genre("Fantasy")
    response = client.get(f"{CATALOG_PREFIX}/genres")
    assert [g.name for g in response.context["list_genres"]] == ["Fantasy", "Poetry"]


def test_detail_lists_books_in_the_genre(client, seed):
    fantasy = seed.genre("Fantasy")
    author = seed.author()
    seed.book(author, title="The Wise Man's Fear", genres=[fantasy])
    seed.book(author, title="Unrelated")

    response = client.get(f"{CATALOG_PREFIX}/genre/{fantasy.id}")

    assert [b.title for b in response.context["genre_books"]] == ["The Wise Man's Fear"]


def test_delete_is_refused_while_books_use_the_genre(client, seed, db_service, run):
    fantasy = seed.genre("Fantasy")
    seed.book(seed.author(), genres=[fantasy])

    response = client.post(f"{CATALOG_PREFIX}/genre/{fantasy.id}/delete", data={"id": fantasy.id})

    assert response.status_code == 200
    assert response.template.name == "genre_delete.html"
    assert len(response.context["genre_books"]) == 1
    assert run(db_service.get_genre_by_id(fantasy.id)) is not None


def test_delete_removes_an_unused_genre(client, seed, db_service, run):
    poetry = seed.genre("Poetry")

    response = client.post(f"{CATALOG_PREFIX}/genre/{poetry.id}/delete", data={"id": poetry.id})

    assert response.status_code == 302
    assert response.headers["location"] == f"{CATALOG_PREFIX}/genres"
    assert run(db_service.get_genre_by_id(poetry.id)) is None


def test_rename_onto_existing_name_is_refused(client, seed, db_service, run):
    seed.genre("Fantasy")
    poetry = seed.genre("Poetry")

    response = client.post(f"{CATALOG_PREFIX}/genre/{poetry.id}/update", data={"name": "FANTASY"})

    assert response.status_code == 200
    assert [e.message for e in response.context["errors"]] == ["Genre name already exists"]
    assert response.context["genre"]["id"] == poetry.id
    assert run(db_service.get_genre_by_id(poetry.id)).name == "Poetry"


def test_rename_keeps_the_id(client, seed, db_service, run):
    poetry = seed.genre("Poetry")

    response = client.post(f"{CATALOG_PREFIX}/genre/{poetry.id}/update", data={"name": "Verse"})

    assert response.headers["location"] == f"{CATALOG_PREFIX}/genre/{poetry.id}"
    assert run(db_service.get_genre_by_id(poetry.id)).name == "Verse"


def test_update_of_unknown_genre_is_404(client):
    response = client.post(f"{CATALOG_PREFIX}/genre/genre_missing/update", data={"name": "Horror"})
    assert response.status_code == 404


def test_overlong_name_is_rejected(client, db_service, run):
    response = client.post(f"{CATALOG_PREFIX}/genre/create", data={"name": "x" * 150})

    assert response.status_code == 200
    assert [e.message for e in response.context["errors"]] == ["Genre name must contain at most 100 characters"]
    assert run(db_service.count_genres()) == 0


def test_editing_a_name_with_special_characters_is_stable(client, seed, db_service, run):
    created = client.post(f"{CATALOG_PREFIX}/genre/create", data={"name": "Sci & Fi"})
    genre_id = created.headers["location"].rsplit("/", 1)[-1]
    assert run(db_service.get_genre_by_id(genre_id)).name == "Sci &amp; Fi"

    form = client.get(f"{CATALOG_PREFIX}/genre/{genre_id}/update")
    assert 'value="Sci &amp; Fi"' in form.text
    assert "&amp;amp;" not in form.text

    client.post(f"{CATALOG_PREFIX}/genre/{genre_id}/update", data={"name": "Sci & Fi"})
    assert run(db_service.get_genre_by_id(genre_id)).name == "Sci &amp; Fi"
