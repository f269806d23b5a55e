# init_databases.py
import logging

logger = logging.getLogger(__name__)

POSTGRES_SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS cliente (
        id UUID PRIMARY KEY,
        nome VARCHAR(100),
        email VARCHAR(150) UNIQUE,
        telefone VARCHAR(30),
        cpf VARCHAR(14),
        data_cadastro TIMESTAMP
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS produto (
        id UUID PRIMARY KEY,
        nome VARCHAR(100),
        categoria VARCHAR(50),
        preco DECIMAL(10, 2),
        estoque INTEGER
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS pedido (
        id UUID PRIMARY KEY,
        id_cliente UUID REFERENCES cliente(id),
        data_pedido TIMESTAMP,
        status VARCHAR(20),
        valor_total DECIMAL(12, 2)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS item_pedido (
        id UUID PRIMARY KEY,
        id_pedido UUID REFERENCES pedido(id),
        id_produto UUID REFERENCES produto(id),
        quantidade INTEGER,
        valor_unitario DECIMAL(10, 2)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS pagamento (
        id UUID PRIMARY KEY,
        id_pedido UUID REFERENCES pedido(id),
        tipo VARCHAR(20),
        status VARCHAR(20),
        data_pagamento TIMESTAMP
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_cliente_email ON cliente(email);",
    "CREATE INDEX IF NOT EXISTS idx_produto_categoria ON produto(categoria);",
    "CREATE INDEX IF NOT EXISTS idx_pedido_cliente ON pedido(id_cliente);",
    "CREATE INDEX IF NOT EXISTS idx_pedido_status ON pedido(status);",
    "CREATE INDEX IF NOT EXISTS idx_item_pedido_produto ON item_pedido(id_produto);",
    "CREATE INDEX IF NOT EXISTS idx_pagamento_tipo ON pagamento(tipo);",
    "CREATE INDEX IF NOT EXISTS idx_pagamento_data ON pagamento(data_pagamento);",
]

MONGODB_COLLECTIONS = ['clientes', 'produtos', 'pedidos']

# (coleção, chaves, opções)
MONGODB_INDEXES = [
    ('clientes', [('email', 1)], {'unique': True}),
    ('clientes', [('id', 1)], {'unique': True}),
    ('produtos', [('id', 1)], {'unique': True}),
    ('produtos', [('categoria', 1), ('preco', 1)], {}),
    ('pedidos', [('id_cliente', 1), ('data_pedido', -1)], {}),
    ('pedidos', [('status', 1)], {}),
    ('pedidos', [('itens.id_produto', 1)], {}),
    ('pedidos', [('pagamentos.tipo', 1), ('pagamentos.data_pagamento', -1)], {}),
]

CASSANDRA_KEYSPACE_CQL = """
CREATE KEYSPACE IF NOT EXISTS {keyspace}
WITH replication = {{'class': 'SimpleStrategy', 'replication_factor': 1}};
"""

CASSANDRA_SCHEMA = [
    """
    CREATE TYPE IF NOT EXISTS item_pedido (
        id UUID,
        id_produto UUID,
        quantidade INT,
        valor_unitario DECIMAL
    );
    """,
    """
    CREATE TYPE IF NOT EXISTS pagamento (
        id UUID,
        tipo TEXT,
        status TEXT,
        data_pagamento TIMESTAMP
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS clientes (
        id UUID PRIMARY KEY,
        nome TEXT,
        email TEXT,
        telefone TEXT,
        cpf TEXT,
        data_cadastro TIMESTAMP
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS produtos (
        id UUID PRIMARY KEY,
        nome TEXT,
        categoria TEXT,
        preco DECIMAL,
        estoque INT
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS pedidos_por_cliente (
        id_cliente UUID,
        data_pedido TIMESTAMP,
        id_pedido UUID,
        status TEXT,
        valor_total DECIMAL,
        itens LIST<FROZEN<item_pedido>>,
        pagamentos LIST<FROZEN<pagamento>>,
        PRIMARY KEY (id_cliente, data_pedido, id_pedido)
    ) WITH CLUSTERING ORDER BY (data_pedido DESC, id_pedido ASC);
    """,
    # Índices secundários
    "CREATE INDEX IF NOT EXISTS idx_clientes_email ON clientes(email);",
    "CREATE INDEX IF NOT EXISTS idx_produtos_categoria ON produtos(categoria);",
]

CASSANDRA_TABLES = ['clientes', 'produtos', 'pedidos_por_cliente']


# PostgreSQL
def init_postgres(conn):
    logger.info("Inicializando PostgreSQL...")
    cursor = conn.cursor()
    try:
        for statement in POSTGRES_SCHEMA:
            cursor.execute(statement)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()
    logger.info("PostgreSQL inicializado com sucesso!")


# MongoDB
def init_mongodb(db):
    logger.info("Inicializando MongoDB...")
    colecoes_existentes = db.list_collection_names()
    for colecao in MONGODB_COLLECTIONS:
        if colecao not in colecoes_existentes:
            db.create_collection(colecao)

    for colecao, chaves, opcoes in MONGODB_INDEXES:
        db[colecao].create_index(chaves, **opcoes)
    logger.info("MongoDB inicializado com sucesso!")


# Cassandra
def init_cassandra(connection):
    logger.info("Inicializando Cassandra...")
    connection.connect(use_keyspace=False)
    connection.execute_schema(CASSANDRA_KEYSPACE_CQL.format(keyspace=connection.keyspace))
    connection.set_keyspace(connection.keyspace)
    for statement in CASSANDRA_SCHEMA:
        connection.execute_schema(statement)
    logger.info("Cassandra inicializado com sucesso!")
