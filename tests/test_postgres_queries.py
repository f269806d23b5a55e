from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from techmarket import postgres_queries


def fake_conn(*resultados):
    conn = MagicMock()
    cursor = conn.cursor.return_value
    cursor.fetchall.side_effect = list(resultados)
    return conn, cursor


def test_recent_orders_uses_client_id(capsys):
    pedidos = [("o1", datetime(2024, 5, 1, 10, 0), "SHIPPED", Decimal("99.90"))]
    conn, cursor = fake_conn([("c1", "Ana")], pedidos)

    assert postgres_queries.fetch_client_and_recent_orders(conn, "ana@x.com") == pedidos

    primeira, segunda = cursor.execute.call_args_list
    assert primeira.args[1] == ("ana@x.com",)
    assert segunda.args[1] == ("c1", 3)
    out = capsys.readouterr().out
    assert "Cliente: Ana" in out
    assert "#1 | Pedido #o1" in out
    assert cursor.close.call_count == 2


def test_recent_orders_unknown_client(capsys):
    conn, cursor = fake_conn([])
    assert postgres_queries.fetch_client_and_recent_orders(conn, "x@x.com") == []
    assert cursor.execute.call_count == 1
    assert "Cliente não encontrado." in capsys.readouterr().out


def test_products_by_category_sorted_in_sql(capsys):
    conn, cursor = fake_conn([("p1", "Mouse", Decimal("10.00"), 3)])
    postgres_queries.fetch_products_by_category(conn, "Periféricos")
    sql, params = cursor.execute.call_args.args
    assert "ORDER BY preco ASC" in sql
    assert params == ("Periféricos",)
    assert "Categoria: Periféricos" in capsys.readouterr().out


def test_delivered_orders_filters_status_by_client_id():
    conn, cursor = fake_conn([("c1", "Ana")], [])
    assert postgres_queries.fetch_delivered_orders_by_email(conn, "a@b.c") == []
    primeira, segunda = cursor.execute.call_args_list
    assert primeira.args[1] == ("a@b.c",)
    sql, params = segunda.args
    assert "status = 'DELIVERED'" in sql
    assert params == ("c1",)


def test_delivered_orders_unknown_client(capsys):
    conn, cursor = fake_conn([])
    assert postgres_queries.fetch_delivered_orders_by_email(conn, "ninguem@x.com") == []
    assert cursor.execute.call_count == 1
    assert "Cliente não encontrado." in capsys.readouterr().out


def test_top_selling_products(capsys):
    conn, cursor = fake_conn([("p1", "Mouse", 12), ("p2", "SSD", 4)])
    resultado = postgres_queries.fetch_top_selling_products(conn)
    assert [r[2] for r in resultado] == [12, 4]
    assert cursor.execute.call_args.args[1] == (5,)
    assert "#2 | Produto #p2 | Nome: SSD | Quantidade vendida: 4" in capsys.readouterr().out


def test_pix_payments_passes_cutoff():
    since = datetime(2024, 1, 1)
    conn, cursor = fake_conn([])
    postgres_queries.fetch_pix_payments_since(conn, since)
    sql, params = cursor.execute.call_args.args
    assert "tipo = 'pix'" in sql
    assert params == (since,)


def test_total_spent(capsys):
    since = datetime(2024, 1, 1)
    conn, cursor = fake_conn([("c1", "Ana")], [(Decimal("150.00"),)])
    total = postgres_queries.get_total_spent_by_client(conn, "ana@x.com", since)
    assert total == Decimal("150.00")
    assert cursor.execute.call_args.args[1] == ("c1", since)
    assert "Cliente: Ana | Email: ana@x.com | Total gasto: R$ 150,00" in capsys.readouterr().out


def test_total_spent_without_orders(capsys):
    conn, _ = fake_conn([("c1", "Ana")], [(None,)])
    assert postgres_queries.get_total_spent_by_client(conn, "ana@x.com") is None
    assert "Nenhum pedido" in capsys.readouterr().out


def test_total_spent_unknown_client(capsys):
    conn, cursor = fake_conn([])
    assert postgres_queries.get_total_spent_by_client(conn, "ninguem@x.com") is None
    assert cursor.execute.call_count == 1
    assert "Cliente não encontrado." in capsys.readouterr().out


def test_first_cliente_and_categoria():
    conn, _ = fake_conn([("ana@x.com", "Ana")], [("Games",)])
    assert postgres_queries.get_first_cliente(conn) == ("ana@x.com", "Ana")
    assert postgres_queries.get_first_categoria(conn) == "Games"
