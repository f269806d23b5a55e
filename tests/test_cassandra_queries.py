import uuid
from collections import namedtuple
from datetime import datetime
from decimal import Decimal

from techmarket import cassandra_queries
from techmarket.seed_data import ItemPedidoUDT, PagamentoUDT

Cliente = namedtuple("Cliente", ["id", "nome"])
Produto = namedtuple("Produto", ["id", "nome", "preco", "estoque"])
Pedido = namedtuple("Pedido", ["id_pedido", "data_pedido", "status", "valor_total"])
PedidoItens = namedtuple("PedidoItens", ["itens"])
PedidoPagamentos = namedtuple("PedidoPagamentos", ["id_pedido", "pagamentos"])
PedidoValor = namedtuple("PedidoValor", ["data_pedido", "valor_total"])
Nome = namedtuple("Nome", ["id", "nome"])

P1, P2, P3 = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()


def item(id_produto, quantidade):
    return ItemPedidoUDT(uuid.uuid4(), id_produto, quantidade, Decimal("1.00"))


def pix(data, tipo="pix"):
    return PagamentoUDT(uuid.uuid4(), tipo, "COMPLETED", data)


def test_count_units_sold_skips_empty_lists():
    rows = [PedidoItens([item(P1, 2), item(P2, 1)]), PedidoItens(None), PedidoItens([item(P1, 3)])]
    assert cassandra_queries.count_units_sold(rows) == {P1: 5, P2: 1}


def test_collect_pix_payments_filters_and_sorts():
    since = datetime(2024, 6, 1)
    rows = [
        PedidoPagamentos("o1", [pix(datetime(2024, 6, 2))]),
        PedidoPagamentos("o2", [pix(datetime(2024, 6, 10)), pix(datetime(2024, 6, 11), tipo="boleto")]),
        PedidoPagamentos("o3", [pix(datetime(2024, 5, 31))]),
        PedidoPagamentos("o4", None),
    ]
    pagamentos = cassandra_queries.collect_pix_payments(rows, since)
    assert [p["id_pedido"] for p in pagamentos] == ["o2", "o1"]


def test_sum_spent_since():
    since = datetime(2024, 6, 1)
    rows = [PedidoValor(datetime(2024, 6, 5), Decimal("10.00")),
            PedidoValor(datetime(2024, 6, 1), Decimal("5.50")),
            PedidoValor(datetime(2024, 1, 1), Decimal("99.00"))]
    assert cassandra_queries.sum_spent_since(rows, since) == Decimal("15.50")
    assert cassandra_queries.sum_spent_since(rows[2:], since) is None


def test_recent_orders(fake_cassandra, capsys):
    cid = uuid.uuid4()
    pedidos = [Pedido("o1", datetime(2024, 5, 1), "PENDING", Decimal("10"))]
    conn = fake_cassandra({"FROM clientes": [Cliente(cid, "Ana")], "FROM pedidos_por_cliente": pedidos})

    assert cassandra_queries.fetch_client_and_recent_orders(conn, "ana@x.com", limit=2) == pedidos
    assert conn.calls[0][1] == ("ana@x.com",)
    assert conn.calls[1][1] == (cid, 2)
    assert "Cliente: Ana" in capsys.readouterr().out


def test_unknown_client(fake_cassandra, capsys):
    conn = fake_cassandra()
    assert cassandra_queries.fetch_delivered_orders_by_email(conn, "x@x.com") == []
    assert cassandra_queries.get_total_spent_by_client(conn, "x@x.com") is None
    assert "Cliente não encontrado." in capsys.readouterr().out


def test_products_sorted_by_price(fake_cassandra):
    conn = fake_cassandra({"FROM produtos": [Produto("b", "SSD", Decimal("300"), 1),
                                             Produto("a", "Mouse", Decimal("20"), 5)]})
    produtos = cassandra_queries.fetch_products_by_category(conn, "Periféricos")
    assert [p.nome for p in produtos] == ["Mouse", "SSD"]


def test_delivered_orders_filtered_and_sorted(fake_cassandra):
    pedidos = [Pedido("o1", datetime(2024, 1, 1), "DELIVERED", Decimal("1")),
               Pedido("o2", datetime(2024, 3, 1), "PENDING", Decimal("1")),
               Pedido("o3", datetime(2024, 2, 1), "DELIVERED", Decimal("1"))]
    conn = fake_cassandra({"FROM clientes": [Cliente(uuid.uuid4(), "Ana")],
                           "FROM pedidos_por_cliente": pedidos})
    entregues = cassandra_queries.fetch_delivered_orders_by_email(conn, "ana@x.com")
    assert [p.id_pedido for p in entregues] == ["o3", "o1"]


def test_top_selling_resolves_names(fake_cassandra, capsys):
    conn = fake_cassandra({
        "SELECT itens": [PedidoItens([item(P1, 1), item(P2, 4)]), PedidoItens([item(P3, 2)])],
        "WHERE id IN": [Nome(P2, "SSD"), Nome(P3, "Mouse")],
    })
    resultado = cassandra_queries.fetch_top_selling_products(conn, limit=2)
    assert resultado == [{"id": P2, "nome": "SSD", "total_vendido": 4},
                         {"id": P3, "nome": "Mouse", "total_vendido": 2}]
    assert conn.calls[-1][1] == ([P2, P3],)
    assert "#1 | Produto #" in capsys.readouterr().out


def test_top_selling_without_sales(fake_cassandra, capsys):
    conn = fake_cassandra()
    assert cassandra_queries.fetch_top_selling_products(conn) == []
    assert len(conn.calls) == 1
    assert "Nenhuma venda encontrada." in capsys.readouterr().out


def test_total_spent(fake_cassandra, capsys):
    since = datetime(2024, 6, 1)
    conn = fake_cassandra({"FROM clientes": [Cliente(uuid.uuid4(), "Ana")],
                           "FROM pedidos_por_cliente": [PedidoValor(datetime(2024, 7, 1), Decimal("42.00"))]})
    assert cassandra_queries.get_total_spent_by_client(conn, "ana@x.com", since) == Decimal("42.00")
    assert "Total gasto: R$ 42,00" in capsys.readouterr().out
