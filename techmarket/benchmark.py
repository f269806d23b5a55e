import logging

from techmarket import cassandra_queries, mongodb_queries, postgres_queries

logger = logging.getLogger(__name__)

BACKENDS = {
    'postgres': postgres_queries,
    'mongodb': mongodb_queries,
    'cassandra': cassandra_queries,
}

# nome -> (função, argumento exigido)
QUERIES = {
    'q1': ('fetch_client_and_recent_orders', 'email'),
    'q2': ('fetch_products_by_category', 'categoria'),
    'q3': ('fetch_delivered_orders_by_email', 'email'),
    'q4': ('fetch_top_selling_products', None),
    'q5': ('fetch_pix_payments_since', None),
    'q6': ('get_total_spent_by_client', 'email'),
}


def resolve_targets(queries, conn, email=None, categoria=None):
    """Completa email/categoria com o primeiro registro do banco quando não informados."""
    if email is None:
        email, nome = queries.get_first_cliente(conn)
        if email:
            print(f"Cliente encontrado: {nome} ({email})")
    if categoria is None:
        categoria = queries.get_first_categoria(conn)
        if categoria:
            print(f"Categoria encontrada: {categoria}")
    return email, categoria


def run_query(queries, conn, name, email=None, categoria=None):
    """Executa uma consulta pelo nome (q1..q6); erros do driver são registrados e retornam None."""
    func_name, argumento = QUERIES[name]
    args = {'email': (email,), 'categoria': (categoria,), None: ()}[argumento]
    if argumento and args[0] is None:
        logger.warning("%s ignorada: nenhum valor para %s", name.upper(), argumento)
        return None

    print()
    try:
        return getattr(queries, func_name)(conn, *args)
    except queries.ERRORS as e:
        logger.error("Erro ao executar a consulta %s: %s", name.upper(), e)
        return None


def run_all(queries, conn, email=None, categoria=None, names=None):
    email, categoria = resolve_targets(queries, conn, email, categoria)
    return {name: run_query(queries, conn, name, email=email, categoria=categoria)
            for name in (names or QUERIES)}
