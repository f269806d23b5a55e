# --- Funções de Formatação ---
from datetime import datetime
from decimal import Decimal


def format_currency_br(valor) -> str:
    if valor is None:
        valor = Decimal("0")
    valor_str = f"{Decimal(str(valor)):,.2f}"
    return "R$ " + valor_str.replace(",", "X").replace(".", ",").replace("X", ".")


def format_date(data) -> str:
    if isinstance(data, datetime):
        return data.strftime('%d/%m/%Y %H:%M')
    return str(data) if data else 'N/A'


def format_pedido(id_pedido, data_pedido, status, valor_total, id_cliente=None):
    cliente = f" | Cliente #{id_cliente}" if id_cliente is not None else ""
    return (f"Pedido #{id_pedido}{cliente} | Data: {format_date(data_pedido)} | "
            f"Status: {status} | Valor: {format_currency_br(valor_total)}")


def format_produto(id_produto, nome, preco, estoque, categoria=None):
    categoria_str = f" | Categoria: {categoria}" if categoria else ""
    return (f"Produto #{id_produto} | Nome: {nome}{categoria_str} | "
            f"Preço: {format_currency_br(preco)} | Estoque: {estoque}")


def format_mais_vendido(posicao, id_produto, nome, total_vendido):
    return f"#{posicao} | Produto #{id_produto} | Nome: {nome or 'N/A'} | Quantidade vendida: {total_vendido}"


def format_pagamento(id_pagamento, id_pedido, status, data_pagamento, tipo="pix"):
    return (f"Pagamento #{id_pagamento} | Pedido #{id_pedido} | Tipo: {tipo.upper()} | "
            f"Status: {status.capitalize()} | Data: {format_date(data_pagamento)}")


def format_total_gasto(nome, email, total):
    return f"Cliente: {nome} | Email: {email} | Total gasto: {format_currency_br(total)}"
