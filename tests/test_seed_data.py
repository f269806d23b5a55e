import copy
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from techmarket import seed_data
from techmarket.init_databases import CASSANDRA_TABLES


def test_inserir_postgres_commits_every_row(dataset):
    conn = MagicMock()
    cursor = conn.cursor.return_value

    seed_data.inserir_postgres(conn, dataset)

    esperado = 1 + len(dataset.clientes) + len(dataset.produtos) + len(dataset.pedidos) \
        + len(dataset.itens) + len(dataset.pagamentos)
    assert cursor.execute.call_count == esperado
    assert cursor.execute.call_args_list[0].args[0].startswith("TRUNCATE")
    conn.commit.assert_called_once()
    cursor.close.assert_called_once()


def test_inserir_postgres_rolls_back_on_error(dataset):
    conn = MagicMock()
    cursor = conn.cursor.return_value
    cursor.execute.side_effect = [None, RuntimeError("boom")]

    with pytest.raises(RuntimeError):
        seed_data.inserir_postgres(conn, dataset)
    conn.rollback.assert_called_once()
    conn.commit.assert_not_called()
    cursor.close.assert_called_once()


def test_inserir_mongodb_converts_decimals_without_mutating(dataset):
    db = MagicMock()
    original = copy.deepcopy(dataset.pedidos)

    seed_data.inserir_mongodb(db, dataset)

    db["pedidos"].delete_many.assert_called_with({})
    assert db.__getitem__.return_value.insert_many.call_count == 3
    pedidos = db.__getitem__.return_value.insert_many.call_args_list[-1].args[0]
    assert len(pedidos) == len(dataset.pedidos)
    assert isinstance(pedidos[0]["valor_total"], float)
    assert isinstance(pedidos[0]["itens"][0]["valor_unitario"], float)
    assert dataset.pedidos == original
    assert isinstance(dataset.pedidos[0]["valor_total"], Decimal)


def test_inserir_cassandra_uses_udts(dataset, fake_cassandra):
    conn = fake_cassandra()

    seed_data.inserir_cassandra(conn, dataset)

    truncates = [q for q in conn.schema_calls if q.startswith("TRUNCATE")]
    assert truncates == [f"TRUNCATE {t}" for t in CASSANDRA_TABLES]
    assert not any(q.startswith("TRUNCATE") for q, _ in conn.calls)
    inserts = [p for q, p in conn.calls if q.startswith("INSERT INTO pedidos_por_cliente")]
    assert len(inserts) == len(dataset.pedidos)

    pedido = dataset.pedidos[0]
    params = inserts[0]
    assert params[0] == pedido["id_cliente"]
    assert all(isinstance(i, seed_data.ItemPedidoUDT) for i in params[5])
    assert params[6][0].tipo == pedido["pagamentos"][0]["tipo"]


def test_print_resumo(capsys):
    seed_data.print_resumo({"PostgreSQL": 1.234, "MongoDB": 0.5})
    out = capsys.readouterr().out
    assert "PostgreSQL: 1.23 segundos" in out
    assert "MongoDB: 0.50 segundos" in out
