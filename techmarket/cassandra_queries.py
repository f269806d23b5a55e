"""
Consultas no Cassandra.

O modelo só atende leituras pela chave de partição (pedidos por cliente);
ordenações, filtros e agregações fora dela são feitos no cliente.
"""
import logging
import time
from collections import Counter
from datetime import timedelta
from decimal import Decimal

from cassandra import DriverException, RequestExecutionException, RequestValidationException
from cassandra.cluster import NoHostAvailable

from techmarket.formatting import (format_mais_vendido, format_pagamento, format_pedido,
                                   format_produto, format_total_gasto)
from techmarket.timing import log_time, utc_now

logger = logging.getLogger(__name__)

ERRORS = (DriverException, RequestExecutionException, RequestValidationException, NoHostAvailable)

SELECT_CLIENTE_POR_EMAIL = "SELECT id, nome FROM clientes WHERE email = ? LIMIT 1"


# --- Processamento no cliente ---
def count_units_sold(rows):
    vendas = Counter()
    for row in rows:
        for item in row.itens or ():
            vendas[item.id_produto] += item.quantidade
    return vendas


def collect_pix_payments(rows, since):
    pagamentos = []
    for row in rows:
        for pagamento in row.pagamentos or ():
            if pagamento.tipo == 'pix' and pagamento.data_pagamento >= since:
                pagamentos.append({
                    'id': pagamento.id,
                    'id_pedido': row.id_pedido,
                    'status': pagamento.status,
                    'data_pagamento': pagamento.data_pagamento,
                })
    pagamentos.sort(key=lambda p: p['data_pagamento'], reverse=True)
    return pagamentos


def sum_spent_since(rows, since):
    """Soma valor_total dos pedidos a partir de `since`; None se nenhum pedido entrar no período."""
    total = None
    for row in rows:
        if row.data_pedido >= since:
            total = (total or Decimal("0")) + row.valor_total
    return total


def _print_rows(results, formatter, vazio):
    if not results:
        print(vazio)
    for i, row in enumerate(results, 1):
        print(formatter(i, row))


def _find_cliente(connection, email):
    return connection.execute(SELECT_CLIENTE_POR_EMAIL, (email,)).one()


def get_first_cliente(connection):
    row = connection.execute("SELECT email, nome FROM clientes LIMIT 1").one()
    return (row.email, row.nome) if row else (None, None)


def get_first_categoria(connection):
    row = connection.execute("SELECT categoria FROM produtos LIMIT 1").one()
    return row.categoria if row else None


def _linha_pedido(i, row):
    return f"#{i} | " + format_pedido(row.id_pedido, row.data_pedido, row.status, row.valor_total)


# Q1 - Cliente por email e seus últimos pedidos
def fetch_client_and_recent_orders(connection, email, limit=3):
    start = time.time()
    cliente = _find_cliente(connection, email)
    if not cliente:
        log_time("Q1 - Últimos pedidos do cliente", start, 4)
        print("Cliente não encontrado.")
        return []

    # clustering por data_pedido DESC: a partição já vem ordenada
    pedidos = list(connection.execute(
        """
        SELECT id_pedido, data_pedido, status, valor_total
        FROM pedidos_por_cliente
        WHERE id_cliente = ?
        LIMIT ?
        """,
        (cliente.id, limit)))
    log_time("Q1 - Últimos pedidos do cliente", start, 4)

    print(f"Cliente: {cliente.nome}")
    _print_rows(pedidos, _linha_pedido, "Nenhum pedido encontrado.")
    return pedidos


# Q2 - Produtos da categoria ordenados por preço
def fetch_products_by_category(connection, categoria):
    start = time.time()
    rows = connection.execute(
        "SELECT id, nome, preco, estoque FROM produtos WHERE categoria = ?",
        (categoria,))
    produtos = sorted(rows, key=lambda p: p.preco)
    log_time(f"Q2 - Produtos da categoria {categoria} ordenados por preço", start, 4)

    _print_rows(produtos,
                lambda i, p: f"#{i} | " + format_produto(p.id, p.nome, p.preco, p.estoque, categoria=categoria),
                f"Nenhum produto encontrado na categoria: {categoria}")
    return produtos


# Q3 - Pedidos entregues do cliente
def fetch_delivered_orders_by_email(connection, email):
    start = time.time()
    cliente = _find_cliente(connection, email)
    if not cliente:
        log_time(f"Q3 - Pedidos entregues do cliente {email}", start, 4)
        print("Cliente não encontrado.")
        return []

    rows = connection.execute(
        """
        SELECT id_pedido, data_pedido, status, valor_total
        FROM pedidos_por_cliente
        WHERE id_cliente = ?
        """,
        (cliente.id,))
    entregues = sorted((row for row in rows if row.status == 'DELIVERED'),
                       key=lambda row: row.data_pedido, reverse=True)
    log_time(f"Q3 - Pedidos entregues do cliente {email}", start, 4)

    _print_rows(entregues, _linha_pedido, f"Nenhum pedido entregue encontrado para: {email}")
    return entregues


# Q4 - Produtos mais vendidos
def fetch_top_selling_products(connection, limit=5):
    start = time.time()
    vendas = count_units_sold(connection.execute("SELECT itens FROM pedidos_por_cliente"))
    mais_vendidos = vendas.most_common(limit)

    nomes = {}
    if mais_vendidos:
        ids = [id_produto for id_produto, _ in mais_vendidos]
        for row in connection.execute("SELECT id, nome FROM produtos WHERE id IN ?", (ids,)):
            nomes[row.id] = row.nome

    resultado = [{'id': id_produto, 'nome': nomes.get(id_produto), 'total_vendido': total}
                 for id_produto, total in mais_vendidos]
    log_time(f"Q4 - Top {limit} produtos mais vendidos", start, 4)

    _print_rows(resultado,
                lambda i, p: format_mais_vendido(i, p['id'], p['nome'], p['total_vendido']),
                "Nenhuma venda encontrada.")
    return resultado


# Q5 - Pagamentos via PIX desde uma data (padrão: último mês)
def fetch_pix_payments_since(connection, since=None):
    since = since or utc_now() - timedelta(days=30)
    start = time.time()
    pagamentos = collect_pix_payments(
        connection.execute("SELECT id_pedido, pagamentos FROM pedidos_por_cliente"), since)
    log_time("Q5 - Pagamentos via PIX no último mês", start, 4)

    _print_rows(pagamentos,
                lambda i, p: format_pagamento(p['id'], p['id_pedido'], p['status'], p['data_pagamento']),
                "Nenhum pagamento PIX encontrado no período.")
    return pagamentos


# Q6 - Total gasto pelo cliente em um período (padrão: últimos 3 meses)
def get_total_spent_by_client(connection, email, since=None):
    since = since or utc_now() - timedelta(days=90)
    start = time.time()
    cliente = _find_cliente(connection, email)
    total = None
    if cliente:
        rows = connection.execute(
            "SELECT data_pedido, valor_total FROM pedidos_por_cliente WHERE id_cliente = ?",
            (cliente.id,))
        total = sum_spent_since(rows, since)
    log_time("Q6 - Total gasto pelo cliente no período", start, 4)

    if not cliente:
        print("Cliente não encontrado.")
        return None
    if total is None:
        print("Nenhum pedido encontrado para este cliente no período.")
        return None

    print(format_total_gasto(cliente.nome, email, total))
    return total
