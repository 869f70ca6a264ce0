"""test_book_controller: 도서 CRUD 테스트."""

import pytest
from dataclasses import replace
from unittest.mock import AsyncMock, patch
from httpx import AsyncClient
from pymysql.err import IntegrityError


class TestGetBooks:
    """GET /api/v1/books 테스트."""

    @pytest.mark.asyncio
    @patch("models.book_models.get_total_books_count", new_callable=AsyncMock)
    @patch("models.book_models.get_books", new_callable=AsyncMock)
    async def test_default_pagination(
        self, mock_get_books, mock_count, client: AsyncClient, book
    ):
        mock_get_books.return_value = [book]
        mock_count.return_value = 1

        res = await client.get("/api/v1/books")

        assert res.status_code == 200
        data = res.json()["data"]
        assert data["books"][0]["book_id"] == 7
        assert data["books"][0]["created_at"] == "2026-02-01T12:00:00Z"
        assert data["pagination"] == {
            "offset": 0,
            "limit": 20,
            "total_count": 1,
            "has_more": False,
        }
        mock_get_books.assert_awaited_once_with(0, 20, category_id=None)

    @pytest.mark.asyncio
    @patch("models.book_models.get_total_books_count", new_callable=AsyncMock)
    @patch("models.book_models.get_books", new_callable=AsyncMock)
    async def test_category_filter_and_has_more(
        self, mock_get_books, mock_count, client: AsyncClient, book
    ):
        mock_get_books.return_value = [book]
        mock_count.return_value = 5

        res = await client.get(
            "/api/v1/books", params={"offset": 2, "limit": 1, "category_id": 3}
        )

        assert res.status_code == 200
        assert res.json()["data"]["pagination"]["has_more"] is True
        mock_get_books.assert_awaited_once_with(2, 1, category_id=3)
        mock_count.assert_awaited_once_with(category_id=3)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params,error",
        [
            ({"offset": -1}, "invalid_offset"),
            ({"limit": 0}, "invalid_limit"),
            ({"limit": 101}, "invalid_limit"),
            ({"limit": "many"}, "invalid_limit"),
            ({"category_id": "x"}, "invalid_category_id"),
            ({"limit": "+5"}, "invalid_limit"),
            ({"limit": "1_0"}, "invalid_limit"),
            ({"offset": " 3"}, "invalid_offset"),
        ],
    )
    async def test_invalid_query(self, params, error, client: AsyncClient):
        res = await client.get("/api/v1/books", params=params)

        assert res.status_code == 400
        assert res.json()["detail"]["error"] == error


class TestGetBook:
    """GET /api/v1/books/:id 테스트."""

    @pytest.mark.asyncio
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_show(self, mock_get, client: AsyncClient, book):
        mock_get.return_value = book

        res = await client.get("/api/v1/books/7")

        assert res.status_code == 200
        assert res.json()["code"] == "BOOK_RETRIEVED"
        assert res.json()["data"]["book"]["title"] == "코스모스"
        mock_get.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_not_found(self, mock_get, client: AsyncClient):
        mock_get.return_value = None

        res = await client.get("/api/v1/books/8")

        assert res.status_code == 404
        assert res.json()["detail"]["error"] == "book_not_found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw_id",
        # "new"는 별도 라우트가 없으므로 show로 해석되어 잘못된 ID로 처리됨
        ["new", "0", "1_0", "%207", "+7", "%D9%A7", "7.0"],
    )
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_invalid_id(self, mock_get, raw_id, client: AsyncClient):
        res = await client.get(f"/api/v1/books/{raw_id}")

        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "invalid_book_id"
        mock_get.assert_not_awaited()


class TestCreateBook:
    """POST /api/v1/books 테스트."""

    @pytest.fixture
    def payload(self):
        return {"title": " 코스모스 ", "author": "칼 세이건", "category_id": 3}

    @pytest.mark.asyncio
    @patch("models.book_models.create_book", new_callable=AsyncMock)
    @patch("models.category_models.get_category_by_id", new_callable=AsyncMock)
    async def test_member_creates(
        self,
        mock_category,
        mock_create,
        client: AsyncClient,
        login_as,
        member,
        category,
        book,
        payload,
    ):
        mock_category.return_value = category
        mock_create.return_value = book

        res = await client.post("/api/v1/books", json=payload, headers=login_as(member))

        assert res.status_code == 201
        assert res.json()["code"] == "BOOK_CREATED"
        mock_create.assert_awaited_once_with(
            user_id=member.id,
            title="코스모스",
            author="칼 세이건",
            category_id=3,
            description=None,
        )

    @pytest.mark.asyncio
    async def test_anonymous_unauthorized(self, client: AsyncClient, payload):
        res = await client.post("/api/v1/books", json=payload)

        assert res.status_code == 401

    @pytest.mark.asyncio
    @patch("models.category_models.get_category_by_id", new_callable=AsyncMock)
    async def test_unknown_category(
        self, mock_category, client: AsyncClient, login_as, member, payload
    ):
        mock_category.return_value = None

        res = await client.post("/api/v1/books", json=payload, headers=login_as(member))

        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "category_not_found"

    @pytest.mark.asyncio
    @patch("models.book_models.create_book", new_callable=AsyncMock)
    @patch("models.category_models.get_category_by_id", new_callable=AsyncMock)
    async def test_category_deleted_before_insert(
        self,
        mock_category,
        mock_create,
        client: AsyncClient,
        login_as,
        member,
        category,
        payload,
    ):
        """확인 이후 카테고리가 삭제되어 FK 위반이 나도 400으로 처리되어야 합니다."""
        mock_category.return_value = category
        mock_create.side_effect = IntegrityError(1452, "Cannot add or update a child row")

        res = await client.post("/api/v1/books", json=payload, headers=login_as(member))

        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "category_not_found"

    @pytest.mark.asyncio
    async def test_missing_title(self, client: AsyncClient, login_as, member):
        res = await client.post(
            "/api/v1/books",
            json={"author": "칼 세이건", "category_id": 3},
            headers=login_as(member),
        )

        assert res.status_code == 422


class TestUpdateBook:
    """PUT/PATCH /api/v1/books/:id 테스트."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["PUT", "PATCH"])
    @patch("models.book_models.update_book", new_callable=AsyncMock)
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_owner_updates(
        self, mock_get, mock_update, method, client: AsyncClient, login_as, member, book
    ):
        mock_get.return_value = book
        mock_update.return_value = replace(book, title="코스모스 (개정판)")

        res = await client.request(
            method,
            "/api/v1/books/7",
            json={"title": "코스모스 (개정판)"},
            headers=login_as(member),
        )

        assert res.status_code == 200
        assert res.json()["data"]["book"]["title"] == "코스모스 (개정판)"
        mock_update.assert_awaited_once_with(
            7, title="코스모스 (개정판)", author=None, description=None, category_id=None
        )

    @pytest.mark.asyncio
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_other_user_forbidden(
        self, mock_get, client: AsyncClient, login_as, other_member, book
    ):
        mock_get.return_value = book

        res = await client.patch(
            "/api/v1/books/7", json={"title": "남의 책"}, headers=login_as(other_member)
        )

        assert res.status_code == 403
        assert res.json()["detail"]["error"] == "not_authorized_to_edit"

    @pytest.mark.asyncio
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_no_changes(self, mock_get, client: AsyncClient, login_as, member, book):
        mock_get.return_value = book

        res = await client.patch("/api/v1/books/7", json={}, headers=login_as(member))

        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "no_changes_provided"

    @pytest.mark.asyncio
    @patch("models.category_models.get_category_by_id", new_callable=AsyncMock)
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_move_to_unknown_category(
        self, mock_get, mock_category, client: AsyncClient, login_as, member, book
    ):
        mock_get.return_value = book
        mock_category.return_value = None

        res = await client.patch(
            "/api/v1/books/7", json={"category_id": 99}, headers=login_as(member)
        )

        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "category_not_found"

    @pytest.mark.asyncio
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_missing_book(self, mock_get, client: AsyncClient, login_as, member):
        mock_get.return_value = None

        res = await client.put(
            "/api/v1/books/70", json={"title": "없음"}, headers=login_as(member)
        )

        assert res.status_code == 404

    @pytest.mark.asyncio
    @patch("models.book_models.update_book", new_callable=AsyncMock)
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_admin_updates_any(
        self, mock_get, mock_update, client: AsyncClient, login_as, admin, book
    ):
        """관리자는 다른 사용자가 등록한 도서도 수정할 수 있습니다."""
        mock_get.return_value = book
        mock_update.return_value = replace(book, author="Carl Sagan")

        res = await client.patch(
            "/api/v1/books/7", json={"author": "Carl Sagan"}, headers=login_as(admin)
        )

        assert res.status_code == 200
        assert res.json()["data"]["book"]["author"] == "Carl Sagan"
        assert res.json()["data"]["book"]["user_id"] == book.user_id

    @pytest.mark.asyncio
    @patch("models.book_models.update_book", new_callable=AsyncMock)
    @patch("models.category_models.get_category_by_id", new_callable=AsyncMock)
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_category_deleted_before_update(
        self,
        mock_get,
        mock_category,
        mock_update,
        client: AsyncClient,
        login_as,
        member,
        category,
        book,
    ):
        mock_get.return_value = book
        mock_category.return_value = category
        mock_update.side_effect = IntegrityError(1452, "Cannot add or update a child row")

        res = await client.patch(
            "/api/v1/books/7", json={"category_id": 3}, headers=login_as(member)
        )

        assert res.status_code == 400
        assert res.json()["detail"]["error"] == "category_not_found"


class TestDeleteBook:
    """DELETE /api/v1/books/:id 테스트."""

    @pytest.mark.asyncio
    @patch("models.book_models.delete_book", new_callable=AsyncMock)
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_owner_deletes(
        self, mock_get, mock_delete, client: AsyncClient, login_as, member, book
    ):
        mock_get.return_value = book
        mock_delete.return_value = True

        res = await client.delete("/api/v1/books/7", headers=login_as(member))

        assert res.status_code == 200
        assert res.json()["code"] == "BOOK_DELETED"
        mock_delete.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    @patch("models.book_models.delete_book", new_callable=AsyncMock)
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_admin_deletes_any(
        self, mock_get, mock_delete, client: AsyncClient, login_as, admin, book
    ):
        mock_get.return_value = book
        mock_delete.return_value = True

        res = await client.delete("/api/v1/books/7", headers=login_as(admin))

        assert res.status_code == 200

    @pytest.mark.asyncio
    @patch("models.book_models.delete_book", new_callable=AsyncMock)
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_other_user_forbidden(
        self, mock_get, mock_delete, client: AsyncClient, login_as, other_member, book
    ):
        mock_get.return_value = book

        res = await client.delete("/api/v1/books/7", headers=login_as(other_member))

        assert res.status_code == 403
        mock_delete.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("models.book_models.delete_book", new_callable=AsyncMock)
    @patch("models.book_models.get_book_by_id", new_callable=AsyncMock)
    async def test_missing_book(
        self, mock_get, mock_delete, client: AsyncClient, login_as, member
    ):
        mock_get.return_value = None

        res = await client.delete("/api/v1/books/70", headers=login_as(member))

        assert res.status_code == 404
        assert res.json()["detail"]["error"] == "book_not_found"
        mock_delete.assert_not_awaited()
