"""
API tests for position endpoints.

Tests cover:
- Opening positions (quote lookup, duplicates, validation)
- Buy and sell trades, including oversell
- Price refresh
- Bulk replace and delete
"""

from decimal import Decimal

from fastapi.testclient import TestClient


def _open(client: TestClient, symbol: str = "600519.SH", price: str = "1680.50",
          quantity: str = "100", **extra):
    return client.post("/positions", json={
        "symbol": symbol,
        "price": price,
        "quantity": quantity,
        **extra,
    })


# =============================================================================
# OPEN POSITION TESTS
# =============================================================================


class TestOpenPositionAPI:

    def test_open_position_success(self, client: TestClient):
        """
        GIVEN a symbol known to the quote source
        WHEN I POST /positions
        THEN response is 201 with the quote's name and price
        """
        response = _open(client, symbol="600519.sh", emotion="理性建仓", reasons=["财报利好"])

        assert response.status_code == 201
        data = response.json()
        assert data["symbol"] == "600519.SH"
        assert data["name"] == "贵州茅台"
        assert Decimal(data["cost_price"]) == Decimal("1680.50")
        assert Decimal(data["current_price"]) == Decimal("1700.00")
        assert data["is_cleared"] is False
        assert len(data["transactions"]) == 1
        txn = data["transactions"][0]
        assert txn["txn_type"] == "buy"
        assert txn["emotion"] == "理性建仓"
        assert txn["reasons"] == ["财报利好"]

    def test_unknown_symbol_returns_400(self, client: TestClient):
        response = _open(client, symbol="999999.SH")

        assert response.status_code == 400
        assert response.json()["error"] == "QUOTE_NOT_FOUND"
        assert client.get("/positions").json()["count"] == 0

    def test_duplicate_symbol_returns_400(self, client: TestClient):
        _open(client)

        response = _open(client, price="1700")

        assert response.status_code == 400
        assert response.json()["error"] == "DUPLICATE_POSITION"

    def test_non_positive_price_returns_422(self, client: TestClient):
        response = _open(client, price="0")

        assert response.status_code == 422

    def test_open_in_unknown_account_returns_404(self, client: TestClient):
        response = _open(client, account_id="missing")

        assert response.status_code == 404


# =============================================================================
# LIST / GET TESTS
# =============================================================================


class TestListPositionsAPI:

    def test_list_filtered_by_account(self, client: TestClient):
        other = client.post("/accounts", json={"name": "策略账户"}).json()["account_id"]
        _open(client)
        _open(client, symbol="000858.SZ", price="150", account_id=other)

        all_positions = client.get("/positions").json()
        mine = client.get("/positions", params={"account_id": other}).json()

        assert all_positions["count"] == 2
        assert [p["symbol"] for p in mine["positions"]] == ["000858.SZ"]

    def test_get_unknown_position_returns_404(self, client: TestClient):
        assert client.get("/positions/missing").status_code == 404


# =============================================================================
# TRADE TESTS
# =============================================================================


class TestTradeAPI:

    def test_buy_more(self, client: TestClient):
        """
        GIVEN 100 shares at 1680.50
        WHEN I buy 100 more at 1700.00
        THEN quantity is 200 and cost price is the weighted 1690.25
        """
        position_id = _open(client).json()["position_id"]

        response = client.post(f"/positions/{position_id}/trades", json={
            "txn_type": "buy",
            "price": "1700.00",
            "quantity": "100",
        })

        assert response.status_code == 201
        data = response.json()
        assert Decimal(data["quantity"]) == Decimal("200")
        assert Decimal(data["cost_price"]) == Decimal("1690.25")

    def test_sell_all_clears_position(self, client: TestClient):
        position_id = _open(client).json()["position_id"]

        response = client.post(f"/positions/{position_id}/trades", json={
            "txn_type": "sell",
            "price": "1750",
            "quantity": "100",
        })

        assert response.status_code == 201
        assert response.json()["is_cleared"] is True
        assert Decimal(response.json()["total_sell_amount"]) == Decimal("175000")

    def test_oversell_returns_400(self, client: TestClient):
        position_id = _open(client).json()["position_id"]

        response = client.post(f"/positions/{position_id}/trades", json={
            "txn_type": "sell",
            "price": "1700",
            "quantity": "101",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "INSUFFICIENT_SHARES"
        stored = client.get(f"/positions/{position_id}").json()
        assert Decimal(stored["quantity"]) == Decimal("100")

    def test_invalid_trade_type_returns_422(self, client: TestClient):
        position_id = _open(client).json()["position_id"]

        response = client.post(f"/positions/{position_id}/trades", json={
            "txn_type": "short",
            "price": "1700",
            "quantity": "1",
        })

        assert response.status_code == 422


# =============================================================================
# REFRESH TESTS
# =============================================================================


class TestRefreshAPI:

    def test_refresh_updates_positions(self, client: TestClient):
        position_id = _open(client).json()["position_id"]

        response = client.post("/positions/refresh")

        assert response.status_code == 200
        assert response.json()["updated"] == 1
        assert response.json()["skipped"] == 0
        stored = client.get(f"/positions/{position_id}").json()
        assert Decimal(stored["change_percent"]) == Decimal("1.16")

    def test_refresh_with_no_positions(self, client: TestClient):
        response = client.post("/positions/refresh")

        assert response.status_code == 200
        assert response.json()["updated"] == 0


# =============================================================================
# REPLACE / DELETE TESTS
# =============================================================================


class TestReplaceAndDeleteAPI:

    def test_replace_positions(self, client: TestClient):
        """
        GIVEN an exported position list
        WHEN it is PUT back with one position removed
        THEN only the remaining position is stored
        """
        _open(client)
        _open(client, symbol="000858.SZ", price="150")
        positions = client.get("/positions").json()["positions"]
        keep = [p for p in positions if p["symbol"] == "000858.SZ"]

        response = client.put("/positions", json={"account_id": None, "positions": keep})

        assert response.status_code == 200
        assert [p["symbol"] for p in response.json()["positions"]] == ["000858.SZ"]

    def test_replace_rejects_inconsistent_position(self, client: TestClient):
        _open(client)
        position = client.get("/positions").json()["positions"][0]
        position["quantity"] = "999"

        response = client.put("/positions", json={"positions": [position]})

        assert response.status_code == 400
        assert Decimal(client.get("/positions").json()["positions"][0]["quantity"]) == Decimal("100")

    def test_delete_position(self, client: TestClient):
        position_id = _open(client).json()["position_id"]

        response = client.delete(f"/positions/{position_id}")

        assert response.status_code == 204
        assert client.get(f"/positions/{position_id}").status_code == 404
