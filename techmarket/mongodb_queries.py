import logging
import time
from datetime import timedelta

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from techmarket.formatting import (format_mais_vendido, format_pagamento, format_pedido,
                                   format_produto, format_total_gasto)
from techmarket.timing import log_time, utc_now

logger = logging.getLogger(__name__)

ERRORS = (PyMongoError,)

PEDIDO_PROJECTION = {"_id": 0, "id": 1, "data_pedido": 1, "status": 1, "valor_total": 1}


# --- Pipelines de agregação ---
def top_selling_pipeline(limit=5):
    return [
        {"$unwind": "$itens"},
        {"$group": {"_id": "$itens.id_produto", "total_vendido": {"$sum": "$itens.quantidade"}}},
        {"$sort": {"total_vendido": -1}},
        {"$limit": limit},
        {"$lookup": {"from": "produtos", "localField": "_id", "foreignField": "id", "as": "produto"}},
        {"$unwind": {"path": "$produto", "preserveNullAndEmptyArrays": True}},
        {"$project": {"_id": 0, "id": "$_id", "nome": "$produto.nome", "total_vendido": 1}},
        # $lookup não preserva a ordem do $sort anterior
        {"$sort": {"total_vendido": -1}},
    ]


def pix_payments_pipeline(since):
    return [
        {"$match": {"pagamentos": {"$elemMatch": {"tipo": "pix", "data_pagamento": {"$gte": since}}}}},
        {"$unwind": "$pagamentos"},
        {"$match": {"pagamentos.tipo": "pix", "pagamentos.data_pagamento": {"$gte": since}}},
        {"$project": {
            "_id": 0,
            "id": "$pagamentos.id",
            "id_pedido": "$id",
            "status": "$pagamentos.status",
            "data_pagamento": "$pagamentos.data_pagamento",
        }},
        {"$sort": {"data_pagamento": -1}},
    ]


def total_spent_pipeline(id_cliente, since):
    return [
        {"$match": {"id_cliente": id_cliente, "data_pedido": {"$gte": since}}},
        {"$group": {"_id": "$id_cliente", "total_gasto": {"$sum": "$valor_total"}}},
    ]


def _print_rows(results, formatter, vazio):
    if not results:
        print(vazio)
    for i, row in enumerate(results, 1):
        print(formatter(i, row))


def _find_cliente(db, email):
    return db.clientes.find_one({"email": email}, {"_id": 0, "id": 1, "nome": 1})


def get_first_cliente(db):
    cliente = db.clientes.find_one()
    if cliente:
        return cliente.get("email"), cliente.get("nome")
    return None, None


def get_first_categoria(db):
    produto = db.produtos.find_one()
    if produto:
        return produto.get("categoria")
    return None


def _linha_pedido(i, row):
    return f"#{i} | " + format_pedido(row["id"], row["data_pedido"], row["status"], row["valor_total"])


# Q1 - Cliente por email e seus últimos pedidos
def fetch_client_and_recent_orders(db, email, limit=3):
    start = time.time()
    cliente = _find_cliente(db, email)
    if not cliente:
        log_time("Q1 - Últimos pedidos do cliente", start, 4)
        print("Cliente não encontrado.")
        return []

    pedidos = list(
        db.pedidos.find({"id_cliente": cliente["id"]}, PEDIDO_PROJECTION)
        .sort("data_pedido", DESCENDING)
        .limit(limit)
    )
    log_time("Q1 - Últimos pedidos do cliente", start, 4)

    print(f"Cliente: {cliente['nome']}")
    _print_rows(pedidos, _linha_pedido, "Nenhum pedido encontrado.")
    return pedidos


# Q2 - Produtos da categoria ordenados por preço
def fetch_products_by_category(db, categoria):
    start = time.time()
    produtos = list(
        db.produtos.find({"categoria": categoria},
                         {"_id": 0, "id": 1, "nome": 1, "preco": 1, "estoque": 1})
        .sort("preco", ASCENDING)
    )
    log_time(f"Q2 - Produtos da categoria {categoria} ordenados por preço", start, 4)

    _print_rows(produtos,
                lambda i, p: f"#{i} | " + format_produto(p["id"], p["nome"], p["preco"], p["estoque"],
                                                        categoria=categoria),
                f"Nenhum produto encontrado na categoria: {categoria}")
    return produtos


# Q3 - Pedidos entregues do cliente
def fetch_delivered_orders_by_email(db, email):
    start = time.time()
    cliente = _find_cliente(db, email)
    if not cliente:
        log_time(f"Q3 - Pedidos entregues do cliente {email}", start, 4)
        print("Cliente não encontrado.")
        return []

    pedidos = list(
        db.pedidos.find({"id_cliente": cliente["id"], "status": "DELIVERED"}, PEDIDO_PROJECTION)
        .sort("data_pedido", DESCENDING)
    )
    log_time(f"Q3 - Pedidos entregues do cliente {email}", start, 4)

    _print_rows(pedidos, _linha_pedido, f"Nenhum pedido entregue encontrado para: {email}")
    return pedidos


# Q4 - Produtos mais vendidos
def fetch_top_selling_products(db, limit=5):
    start = time.time()
    produtos = list(db.pedidos.aggregate(top_selling_pipeline(limit)))
    log_time(f"Q4 - Top {limit} produtos mais vendidos", start, 4)

    _print_rows(produtos,
                lambda i, p: format_mais_vendido(i, p["id"], p.get("nome"), p["total_vendido"]),
                "Nenhuma venda encontrada.")
    return produtos


# Q5 - Pagamentos via PIX desde uma data (padrão: último mês)
def fetch_pix_payments_since(db, since=None):
    since = since or utc_now() - timedelta(days=30)
    start = time.time()
    pagamentos = list(db.pedidos.aggregate(pix_payments_pipeline(since)))
    log_time("Q5 - Pagamentos via PIX no último mês", start, 4)

    _print_rows(pagamentos,
                lambda i, p: format_pagamento(p["id"], p["id_pedido"], p["status"], p["data_pagamento"]),
                "Nenhum pagamento PIX encontrado no período.")
    return pagamentos


# Q6 - Total gasto pelo cliente em um período (padrão: últimos 3 meses)
def get_total_spent_by_client(db, email, since=None):
    since = since or utc_now() - timedelta(days=90)
    start = time.time()
    cliente = _find_cliente(db, email)
    resultado = []
    if cliente:
        resultado = list(db.pedidos.aggregate(total_spent_pipeline(cliente["id"], since)))
    log_time("Q6 - Total gasto pelo cliente no período", start, 4)

    if not cliente:
        print("Cliente não encontrado.")
        return None
    if not resultado:
        print("Nenhum pedido encontrado para este cliente no período.")
        return None

    total = resultado[0]["total_gasto"]
    print(format_total_gasto(cliente["nome"], email, total))
    return total
