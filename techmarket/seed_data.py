# seed_data.py
"""
Inserção dos dados fictícios nos três bancos.

Cada função limpa os dados antigos, insere clientes, produtos e pedidos
(com itens e pagamentos) e mede o tempo de cada etapa.
"""
import logging
import time
from collections import namedtuple
from decimal import Decimal

from techmarket.init_databases import CASSANDRA_TABLES, MONGODB_COLLECTIONS
from techmarket.timing import log_time

logger = logging.getLogger(__name__)

# Campos na mesma ordem dos UDTs; o driver serializa tuplas por posição
ItemPedidoUDT = namedtuple('ItemPedidoUDT', ['id', 'id_produto', 'quantidade', 'valor_unitario'])
PagamentoUDT = namedtuple('PagamentoUDT', ['id', 'tipo', 'status', 'data_pagamento'])


# Inserção no PostgreSQL
def inserir_postgres(conn, dataset):
    logger.info("Inserindo dados no PostgreSQL...")
    start_time = time.time()
    cursor = conn.cursor()

    try:
        # Limpar dados antigos
        cursor.execute("TRUNCATE TABLE pagamento, item_pedido, pedido, produto, cliente CASCADE")

        start = time.time()
        for cliente in dataset.clientes:
            cursor.execute(
                "INSERT INTO cliente (id, nome, email, telefone, cpf, data_cadastro) VALUES (%s, %s, %s, %s, %s, %s)",
                (str(cliente['id']), cliente['nome'], cliente['email'], cliente['telefone'],
                 cliente['cpf'], cliente['data_cadastro'])
            )
        logger.info("%d clientes inseridos", len(dataset.clientes))
        log_time("Clientes (PostgreSQL)", start)

        start = time.time()
        for produto in dataset.produtos:
            cursor.execute(
                "INSERT INTO produto (id, nome, categoria, preco, estoque) VALUES (%s, %s, %s, %s, %s)",
                (str(produto['id']), produto['nome'], produto['categoria'], produto['preco'], produto['estoque'])
            )
        logger.info("%d produtos inseridos", len(dataset.produtos))
        log_time("Produtos (PostgreSQL)", start)

        start = time.time()
        total_itens = 0
        total_pagamentos = 0
        for pedido in dataset.pedidos:
            cursor.execute(
                "INSERT INTO pedido (id, id_cliente, data_pedido, status, valor_total) VALUES (%s, %s, %s, %s, %s)",
                (str(pedido['id']), str(pedido['id_cliente']), pedido['data_pedido'],
                 pedido['status'], pedido['valor_total'])
            )
            for item in pedido['itens']:
                cursor.execute(
                    "INSERT INTO item_pedido (id, id_pedido, id_produto, quantidade, valor_unitario) "
                    "VALUES (%s, %s, %s, %s, %s)",
                    (str(item['id']), str(pedido['id']), str(item['id_produto']),
                     item['quantidade'], item['valor_unitario'])
                )
                total_itens += 1
            for pagamento in pedido['pagamentos']:
                cursor.execute(
                    "INSERT INTO pagamento (id, id_pedido, tipo, status, data_pagamento) VALUES (%s, %s, %s, %s, %s)",
                    (str(pagamento['id']), str(pedido['id']), pagamento['tipo'],
                     pagamento['status'], pagamento['data_pagamento'])
                )
                total_pagamentos += 1
        logger.info("%d pedidos, %d itens e %d pagamentos inseridos",
                    len(dataset.pedidos), total_itens, total_pagamentos)
        log_time("Pedidos, itens e pagamentos (PostgreSQL)", start)

        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()

    return log_time("Dados inseridos no PostgreSQL", start_time)


def _documento(registro):
    """Cópia do registro com Decimal convertido em float (BSON não tem Decimal nativo)."""
    documento = {}
    for chave, valor in registro.items():
        if isinstance(valor, list):
            documento[chave] = [_documento(v) for v in valor]
        elif isinstance(valor, Decimal):
            documento[chave] = float(valor)
        else:
            documento[chave] = valor
    return documento


# Inserção no MongoDB
def inserir_mongodb(db, dataset):
    logger.info("Inserindo dados no MongoDB...")
    start_time = time.time()

    # Limpar dados antigos
    for colecao in MONGODB_COLLECTIONS:
        db[colecao].delete_many({})

    lotes = [
        ('clientes', dataset.clientes, "Clientes (MongoDB)"),
        ('produtos', dataset.produtos, "Produtos (MongoDB)"),
        # pedidos com itens e pagamentos embutidos
        ('pedidos', dataset.pedidos, "Pedidos (MongoDB)"),
    ]
    for colecao, registros, label in lotes:
        start = time.time()
        if registros:
            db[colecao].insert_many([_documento(r) for r in registros])
        logger.info("%d documentos inseridos em %s", len(registros), colecao)
        log_time(label, start)

    return log_time("Dados inseridos no MongoDB", start_time)


# Inserção no Cassandra
def inserir_cassandra(connection, dataset):
    logger.info("Inserindo dados no Cassandra...")
    start_time = time.time()

    # Limpar dados antigos
    for tabela in CASSANDRA_TABLES:
        connection.execute_schema(f"TRUNCATE {tabela}")

    start = time.time()
    for cliente in dataset.clientes:
        connection.execute(
            "INSERT INTO clientes (id, nome, email, telefone, cpf, data_cadastro) VALUES (?, ?, ?, ?, ?, ?)",
            (cliente['id'], cliente['nome'], cliente['email'], cliente['telefone'],
             cliente['cpf'], cliente['data_cadastro'])
        )
    logger.info("%d clientes inseridos", len(dataset.clientes))
    log_time("Clientes (Cassandra)", start)

    start = time.time()
    for produto in dataset.produtos:
        connection.execute(
            "INSERT INTO produtos (id, nome, categoria, preco, estoque) VALUES (?, ?, ?, ?, ?)",
            (produto['id'], produto['nome'], produto['categoria'], produto['preco'], produto['estoque'])
        )
    logger.info("%d produtos inseridos", len(dataset.produtos))
    log_time("Produtos (Cassandra)", start)

    start = time.time()
    for pedido in dataset.pedidos:
        itens = [ItemPedidoUDT(i['id'], i['id_produto'], i['quantidade'], i['valor_unitario'])
                 for i in pedido['itens']]
        pagamentos = [PagamentoUDT(p['id'], p['tipo'], p['status'], p['data_pagamento'])
                      for p in pedido['pagamentos']]
        connection.execute(
            "INSERT INTO pedidos_por_cliente (id_cliente, data_pedido, id_pedido, status, valor_total, itens, pagamentos) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (pedido['id_cliente'], pedido['data_pedido'], pedido['id'], pedido['status'],
             pedido['valor_total'], itens, pagamentos)
        )
    logger.info("%d pedidos inseridos", len(dataset.pedidos))
    log_time("Pedidos (Cassandra)", start)

    return log_time("Dados inseridos no Cassandra", start_time)


def print_resumo(tempos):
    print("\nResumo dos tempos de inserção:")
    for banco, tempo in tempos.items():
        print(f"{banco}: {tempo:.2f} segundos")
