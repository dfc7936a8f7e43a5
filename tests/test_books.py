"""
Tests for Books API Endpoints

Tests for /books endpoints, including the foreign key rules between
books and authors.
"""

import pytest
from fastapi import status

from library_catalog.models import Book

INVALID_IDS = ["abc", "0", "-1", "2x"]
TOO_LARGE_ID = 99999999999999999999


class TestListBooks:
    """Tests for GET /books endpoint."""

    def test_list_books_empty(self, client):
        response = client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_books_includes_author(self, client, sample_book, sample_author):
        response = client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [
            {
                "id": sample_book.id,
                "title": "1984",
                "authorId": sample_author.id,
                "author": {"id": sample_author.id, "name": "George Orwell"},
            }
        ]


class TestGetBook:
    """Tests for GET /books/{book_id} endpoint."""

    def test_get_book_success(self, client, sample_book):
        response = client.get(f"/books/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "1984"
        assert data["author"]["name"] == "George Orwell"

    def test_get_book_not_found(self, client):
        response = client.get("/books/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Book not found"}

    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_id_too_large_is_not_found(self, client, method):
        response = getattr(client, method)(f"/books/{TOO_LARGE_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Book not found"}

    @pytest.mark.parametrize("book_id", INVALID_IDS)
    def test_get_book_invalid_id(self, client, book_id):
        response = client.get(f"/books/{book_id}")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid book ID"}


class TestCreateBook:
    """Tests for POST /books endpoint."""

    def test_create_book_scenario(self, client):
        """Author then book, then the book is listed with its author."""
        client.post("/authors", json={"name": "Test Author"})

        response = client.post("/books", json={"title": "Test Book", "authorId": 1})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"id": 1, "title": "Test Book", "authorId": 1}

        listing = client.get("/books").json()
        assert {
            "id": 1,
            "title": "Test Book",
            "authorId": 1,
            "author": {"id": 1, "name": "Test Author"},
        } in listing

    def test_create_book_trims_title(self, client, sample_author):
        response = client.post(
            "/books",
            json={"title": "  Homage to Catalonia ", "authorId": sample_author.id},
        )

        assert response.json()["title"] == "Homage to Catalonia"

    def test_create_book_accepts_numeric_string_author_id(self, client, sample_author):
        response = client.post(
            "/books",
            json={"title": "Burmese Days", "authorId": str(sample_author.id)},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["authorId"] == sample_author.id

    def test_create_book_unknown_author(self, client, db_session):
        """Unknown authors are rejected by the foreign key; nothing is stored."""
        response = client.post("/books", json={"title": "Orphan", "authorId": 999})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid author ID"}
        assert db_session.query(Book).count() == 0

    @pytest.mark.parametrize("author_id", [TOO_LARGE_ID, str(TOO_LARGE_ID)])
    def test_create_book_author_id_too_large(self, client, db_session, author_id):
        response = client.post("/books", json={"title": "Orphan", "authorId": author_id})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid author ID"}
        assert db_session.query(Book).count() == 0

    @pytest.mark.parametrize(
        "body",
        [{"authorId": 1}, {"title": "  ", "authorId": 1}, {"title": None, "authorId": 1}],
    )
    def test_create_book_missing_title(self, client, sample_author, body):
        response = client.post("/books", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Book title is required"}

    @pytest.mark.parametrize(
        "author_id",
        [None, 0, -3, "abc", True, 1.5],
    )
    def test_create_book_invalid_author_id(self, client, sample_author, author_id):
        response = client.post("/books", json={"title": "Keep the Aspidistra Flying", "authorId": author_id})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Valid author ID is required"}

    def test_title_checked_before_author_id(self, client):
        response = client.post("/books", json={"title": "", "authorId": "abc"})

        assert response.json() == {"message": "Book title is required"}


class TestUpdateBook:
    """Tests for PUT /books/{book_id} endpoint."""

    def test_update_book(self, client, sample_book, second_author):
        response = client.put(
            f"/books/{sample_book.id}",
            json={"title": "Brave New World", "authorId": second_author.id},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "id": sample_book.id,
            "title": "Brave New World",
            "authorId": second_author.id,
        }

        fetched = client.get(f"/books/{sample_book.id}").json()
        assert fetched["author"] == {"id": second_author.id, "name": "Aldous Huxley"}

    def test_update_book_is_full_replace(self, client, sample_book):
        """PUT without authorId is rejected, not treated as a partial update."""
        response = client.put(f"/books/{sample_book.id}", json={"title": "Nineteen Eighty-Four"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Valid author ID is required"}

    def test_update_book_unknown_author(self, client, sample_book, sample_author):
        response = client.put(
            f"/books/{sample_book.id}",
            json={"title": "1984", "authorId": 12345},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid author ID"}

        fetched = client.get(f"/books/{sample_book.id}").json()
        assert fetched["authorId"] == sample_author.id

    def test_update_book_author_id_too_large(self, client, sample_book, sample_author):
        response = client.put(
            f"/books/{sample_book.id}",
            json={"title": "1984", "authorId": TOO_LARGE_ID},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid author ID"}
        assert client.get(f"/books/{sample_book.id}").json()["authorId"] == sample_author.id

    def test_update_book_id_too_large(self, client, sample_author):
        response = client.put(
            f"/books/{TOO_LARGE_ID}",
            json={"title": "Ghost", "authorId": sample_author.id},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Book not found"}

    def test_update_book_not_found(self, client, sample_author):
        response = client.put(
            "/books/99999",
            json={"title": "Ghost", "authorId": sample_author.id},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Book not found"}

    @pytest.mark.parametrize("book_id", INVALID_IDS)
    def test_update_book_invalid_id(self, client, book_id):
        response = client.put(f"/books/{book_id}", json={"title": "X", "authorId": 1})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid book ID"}


class TestDeleteBook:
    """Tests for DELETE /books/{book_id} endpoint."""

    def test_delete_book_success(self, client, sample_book, sample_author):
        response = client.delete(f"/books/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Book deleted successfully"}
        assert client.get(f"/books/{sample_book.id}").status_code == status.HTTP_404_NOT_FOUND

        # The author is untouched
        assert client.get(f"/authors/{sample_author.id}").json()["books"] == []

    def test_delete_book_not_found(self, client):
        response = client.delete("/books/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Book not found"}

    @pytest.mark.parametrize("book_id", INVALID_IDS)
    def test_delete_book_invalid_id(self, client, book_id):
        response = client.delete(f"/books/{book_id}")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid book ID"}


class TestAuthorDeleteScenario:
    """Author 1 cannot be deleted while book 1 references it."""

    def test_delete_author_with_book(self, client):
        client.post("/authors", json={"name": "Test Author"})
        client.post("/books", json={"title": "Test Book", "authorId": 1})

        response = client.delete("/authors/1")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "message": "Cannot delete author. This author has books associated with them."
        }
        assert client.get("/authors/1").status_code == status.HTTP_200_OK
