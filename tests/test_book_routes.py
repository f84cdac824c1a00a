# /tests/test_book_routes.py

from app.core.config import CATALOG_PREFIX


def _book_form(author, genres=(), **overrides):
    data = {
        "title": "The Name of the Wind",
        "author": author.id,
        "summary": "A young man grows up to be a legendary wizard.",
        "isbn": "9780756404741",
        "genre": [genre.id for genre in genres],
    }
    data.update(overrides)
    return data


def test_book_list_is_empty_without_books(client):
    response = client.get(f"{CATALOG_PREFIX}/books")
    assert response.status_code == 200
    assert response.template.name == "book_list.html"
    assert response.context["book_list"] == []


def test_book_list_is_sorted_by_title(client, seed):
    author = seed.author()
    seed.book(author, title="Zorba")
    seed.book(author, title="Anna Karenina")
    response = client.get(f"{CATALOG_PREFIX}/books")
    assert [b.title for b in response.context["book_list"]] == ["Anna Karenina", "Zorba"]
    assert "Rothfuss, Patrick" in response.text


def test_create_form_offers_authors_and_genres(client, seed):
    seed.author(family_name="Zweig")
    seed.author(family_name="Austen")
    seed.genre("Poetry")
    seed.genre("Fantasy")
    response = client.get(f"{CATALOG_PREFIX}/book/create")
    assert response.status_code == 200
    assert [a.family_name for a in response.context["authors"]] == ["Austen", "Zweig"]
    assert [g["name"] for g in response.context["genres"]] == ["Fantasy", "Poetry"]
    assert not any(g["checked"] for g in response.context["genres"])


def test_create_with_empty_title_rerenders_form_and_persists_nothing(client, seed, db_service, run):
    author = seed.author()
    fantasy = seed.genre("Fantasy")

    response = client.post(f"{CATALOG_PREFIX}/book/create", data=_book_form(author, [fantasy], title="   "))

    assert response.status_code == 200
    assert response.template.name == "book_form.html"
    assert [e.field for e in response.context["errors"]] == ["title"]
    assert response.context["genres"][0]["checked"] is True
    assert "Title must not be empty." in response.text
    assert run(db_service.count_books()) == 0


def test_create_redirects_to_the_new_book(client, seed, db_service, run):
    author = seed.author()
    fantasy, poetry = seed.genre("Fantasy"), seed.genre("Poetry")

    response = client.post(f"{CATALOG_PREFIX}/book/create", data=_book_form(author, [fantasy, poetry]))

    assert response.status_code == 302
    book_id = response.headers["location"].rsplit("/", 1)[-1]
    assert response.headers["location"] == f"{CATALOG_PREFIX}/book/{book_id}"
    stored = run(db_service.get_book_by_id(book_id))
    assert stored.author_id == author.id
    assert sorted(stored.genre_ids) == sorted([fantasy.id, poetry.id])


def test_create_accepts_a_single_genre_value(client, seed, db_service, run):
    author = seed.author()
    fantasy = seed.genre("Fantasy")
    data = _book_form(author)
    data["genre"] = fantasy.id

    response = client.post(f"{CATALOG_PREFIX}/book/create", data=data)

    book_id = response.headers["location"].rsplit("/", 1)[-1]
    assert run(db_service.get_book_by_id(book_id)).genre_ids == [fantasy.id]


def test_detail_shows_book_and_its_copies(client, seed):
    book = seed.book(seed.author(), genres=[seed.genre("Fantasy")])
    seed.instance(book, imprint="Gollancz")

    response = client.get(f"{CATALOG_PREFIX}/book/{book.id}")

    assert response.status_code == 200
    assert response.context["title"] == book.title
    assert response.context["book"].author.family_name == "Rothfuss"
    assert [g.name for g in response.context["book"].genres] == ["Fantasy"]
    assert [i.imprint for i in response.context["book_instances"]] == ["Gollancz"]


def test_detail_of_unknown_book_is_404(client):
    response = client.get(f"{CATALOG_PREFIX}/book/book_missing")
    assert response.status_code == 404
    assert response.template.name == "error.html"
    assert "Book not found" in response.text


def test_delete_get_of_unknown_book_redirects_to_list(client):
    response = client.get(f"{CATALOG_PREFIX}/book/book_missing/delete")
    assert response.status_code == 302
    assert response.headers["location"] == f"{CATALOG_PREFIX}/books"


def test_delete_is_refused_while_copies_exist(client, seed, db_service, run):
    book = seed.book(seed.author())
    instance = seed.instance(book)

    response = client.post(f"{CATALOG_PREFIX}/book/{book.id}/delete", data={"id": book.id})

    assert response.status_code == 200
    assert response.template.name == "book_delete.html"
    assert [i.id for i in response.context["book_instances"]] == [instance.id]
    assert run(db_service.get_book_by_id(book.id)) is not None
    assert run(db_service.get_book_instance_by_id(instance.id)) is not None


def test_delete_removes_a_book_without_copies(client, seed, db_service, run):
    book = seed.book(seed.author(), genres=[seed.genre("Fantasy")])

    response = client.post(f"{CATALOG_PREFIX}/book/{book.id}/delete", data={"id": book.id})

    assert response.status_code == 302
    assert response.headers["location"] == f"{CATALOG_PREFIX}/books"
    assert run(db_service.get_book_by_id(book.id)) is None


def test_update_get_prechecks_current_genres(client, seed):
    fantasy, poetry = seed.genre("Fantasy"), seed.genre("Poetry")
    author = seed.author()
    book = seed.book(author, genres=[poetry])

    response = client.get(f"{CATALOG_PREFIX}/book/{book.id}/update")

    assert response.status_code == 200
    assert response.context["selected_author"] == author.id
    checked = {g["name"]: g["checked"] for g in response.context["genres"]}
    assert checked == {"Fantasy": False, "Poetry": True}


def test_update_get_of_unknown_book_is_404(client):
    assert client.get(f"{CATALOG_PREFIX}/book/book_missing/update").status_code == 404


def test_update_preserves_id_and_replaces_fields(client, seed, db_service, run):
    author = seed.author()
    other_author = seed.author(first_name="Ursula", family_name="LeGuin")
    book = seed.book(author, genres=[seed.genre("Fantasy")])

    response = client.post(
        f"{CATALOG_PREFIX}/book/{book.id}/update",
        data=_book_form(other_author, title="A Wizard of Earthsea", isbn="9780547773742"),
    )

    assert response.status_code == 302
    assert response.headers["location"] == f"{CATALOG_PREFIX}/book/{book.id}"
    stored = run(db_service.get_book_by_id(book.id))
    assert stored.id == book.id
    assert stored.title == "A Wizard of Earthsea"
    assert stored.author_id == other_author.id
    assert stored.genre_ids == []


def test_invalid_update_keeps_the_same_id(client, seed, db_service, run):
    book = seed.book(seed.author())

    response = client.post(f"{CATALOG_PREFIX}/book/{book.id}/update", data={"title": "Renamed"})

    assert response.status_code == 200
    assert response.context["book"]["id"] == book.id
    assert [e.field for e in response.context["errors"]] == ["author", "summary", "isbn"]
    assert run(db_service.get_book_by_id(book.id)).title == book.title


def test_create_naming_a_missing_author_rerenders_form(client, seed, db_service, run):
    data = _book_form(seed.author())
    data["author"] = "auth_doesnotexist"

    response = client.post(f"{CATALOG_PREFIX}/book/create", data=data)

    assert response.status_code == 200
    assert response.template.name == "book_form.html"
    assert [(e.field, e.message) for e in response.context["errors"]] == [("author", "Selected author does not exist")]
    assert run(db_service.count_books()) == 0


def test_update_naming_a_deleted_author_keeps_the_book(client, seed, db_service, run):
    author = seed.author()
    book = seed.book(author)
    departed = seed.author(first_name="Gone", family_name="Away")
    seed.call(lambda repo: repo.delete_author(departed.id))

    response = client.post(f"{CATALOG_PREFIX}/book/{book.id}/update", data=_book_form(departed))

    assert response.status_code == 200
    assert [e.field for e in response.context["errors"]] == ["author"]
    assert run(db_service.get_book_by_id(book.id)).author_id == author.id
