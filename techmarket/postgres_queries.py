import logging
import time
from datetime import timedelta

import psycopg2

from techmarket.formatting import (format_mais_vendido, format_pagamento, format_pedido,
                                   format_produto, format_total_gasto)
from techmarket.timing import log_time, utc_now

logger = logging.getLogger(__name__)

ERRORS = (psycopg2.Error,)


def _fetch(conn, query, params=None):
    cursor = conn.cursor()
    try:
        cursor.execute(query, params)
        return cursor.fetchall()
    finally:
        cursor.close()


def _print_rows(results, formatter, vazio):
    if not results:
        print(vazio)
    for i, row in enumerate(results, 1):
        print(formatter(i, row))


def run_query(conn, description, query, params=None, formatter=None):
    start = time.time()
    results = _fetch(conn, query, params)
    log_time(description, start, 4)
    _print_rows(results, formatter or (lambda i, row: row), "Nenhum resultado encontrado.")
    return results


def get_first_cliente(conn):
    """Busca o primeiro cliente disponível no banco"""
    rows = _fetch(conn, "SELECT email, nome FROM cliente LIMIT 1")
    return (rows[0][0], rows[0][1]) if rows else (None, None)


def get_first_categoria(conn):
    """Busca a primeira categoria disponível no banco"""
    rows = _fetch(conn, "SELECT DISTINCT categoria FROM produto LIMIT 1")
    return rows[0][0] if rows else None


# Q1 - Cliente por email e seus últimos pedidos
def fetch_client_and_recent_orders(conn, email, limit=3):
    start = time.time()
    cliente = _fetch(conn, "SELECT id, nome FROM cliente WHERE email = %s", (email,))
    if not cliente:
        log_time("Q1 - Últimos pedidos do cliente", start, 4)
        print("Cliente não encontrado.")
        return []

    id_cliente, nome = cliente[0]
    pedidos = _fetch(conn,
                     """
                     SELECT id, data_pedido, status, valor_total
                     FROM pedido
                     WHERE id_cliente = %s
                     ORDER BY data_pedido DESC
                     LIMIT %s
                     """,
                     (id_cliente, limit))
    log_time("Q1 - Últimos pedidos do cliente", start, 4)

    print(f"Cliente: {nome}")
    _print_rows(pedidos, lambda i, row: f"#{i} | " + format_pedido(*row), "Nenhum pedido encontrado.")
    return pedidos


# Q2 - Produtos da categoria ordenados por preço
def fetch_products_by_category(conn, categoria):
    return run_query(conn, f"Q2 - Produtos da categoria {categoria} ordenados por preço",
                     """
                     SELECT id, nome, preco, estoque
                     FROM produto
                     WHERE categoria = %s
                     ORDER BY preco ASC
                     """,
                     (categoria,),
                     formatter=lambda i, row: f"#{i} | " + format_produto(*row, categoria=categoria))


# Q3 - Pedidos entregues do cliente
def fetch_delivered_orders_by_email(conn, email):
    description = f"Q3 - Pedidos entregues do cliente {email}"
    start = time.time()
    cliente = _fetch(conn, "SELECT id, nome FROM cliente WHERE email = %s", (email,))
    if not cliente:
        log_time(description, start, 4)
        print("Cliente não encontrado.")
        return []

    pedidos = _fetch(conn,
                     """
                     SELECT id, data_pedido, status, valor_total
                     FROM pedido
                     WHERE id_cliente = %s AND status = 'DELIVERED'
                     ORDER BY data_pedido DESC
                     """,
                     (cliente[0][0],))
    log_time(description, start, 4)

    _print_rows(pedidos, lambda i, row: f"#{i} | " + format_pedido(*row),
                f"Nenhum pedido entregue encontrado para: {email}")
    return pedidos


# Q4 - Produtos mais vendidos
def fetch_top_selling_products(conn, limit=5):
    return run_query(conn, f"Q4 - Top {limit} produtos mais vendidos",
                     """
                     SELECT pr.id, pr.nome, SUM(ip.quantidade) AS total_vendido
                     FROM item_pedido ip
                     JOIN produto pr ON pr.id = ip.id_produto
                     GROUP BY pr.id, pr.nome
                     ORDER BY total_vendido DESC
                     LIMIT %s
                     """,
                     (limit,),
                     formatter=lambda i, row: format_mais_vendido(i, *row))


# Q5 - Pagamentos via PIX desde uma data (padrão: último mês)
def fetch_pix_payments_since(conn, since=None):
    since = since or utc_now() - timedelta(days=30)
    return run_query(conn, "Q5 - Pagamentos via PIX no último mês",
                     """
                     SELECT id, id_pedido, status, data_pagamento
                     FROM pagamento
                     WHERE tipo = 'pix' AND data_pagamento >= %s
                     ORDER BY data_pagamento DESC
                     """,
                     (since,),
                     formatter=lambda i, row: format_pagamento(*row))


# Q6 - Total gasto pelo cliente em um período (padrão: últimos 3 meses)
def get_total_spent_by_client(conn, email, since=None):
    since = since or utc_now() - timedelta(days=90)
    start = time.time()
    cliente = _fetch(conn, "SELECT id, nome FROM cliente WHERE email = %s", (email,))
    total = None
    if cliente:
        # SUM sem GROUP BY devolve uma linha com NULL quando nenhum pedido entra no período
        total = _fetch(conn,
                       """
                       SELECT SUM(valor_total) AS total_gasto
                       FROM pedido
                       WHERE id_cliente = %s AND data_pedido >= %s
                       """,
                       (cliente[0][0], since))[0][0]
    log_time("Q6 - Total gasto pelo cliente no período", start, 4)

    if not cliente:
        print("Cliente não encontrado.")
        return None
    if total is None:
        print("Nenhum pedido encontrado para este cliente no período.")
        return None

    print(format_total_gasto(cliente[0][1], email, total))
    return total
