# config.py
"""
Configuração dos bancos a partir de variáveis de ambiente.

Um arquivo .env na pasta de trabalho é carregado antes da leitura; variáveis
já definidas no ambiente têm precedência.
"""
import os
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CASSANDRA_PORT = 9042
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _get_int(name, default):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} deve ser um inteiro, recebido {raw!r}") from None


def postgres_config():
    return {
        "host": os.getenv("POSTGRES_HOST", "localhost"),
        "port": _get_int("POSTGRES_PORT", 5432),
        "database": os.getenv("POSTGRES_DB", "techmarket"),
        "user": os.getenv("POSTGRES_USER", "techmarket"),
        "password": os.getenv("POSTGRES_PASSWORD", "password"),
    }


def mongodb_config():
    uri = os.getenv("MONGO_URI", "mongodb://localhost:27017/techmarket")
    db_name = os.getenv("MONGO_DB_NAME")
    if not db_name:
        # Nome do banco embutido na URI, ex.: mongodb://host:27017/techmarket
        db_name = urlparse(uri).path.lstrip("/") or "techmarket"
    return {"uri": uri, "db_name": db_name}


def cassandra_config():
    host = os.getenv("CASSANDRA_HOST", "127.0.0.1")
    port = DEFAULT_CASSANDRA_PORT
    if ":" in host:
        host, raw_port = host.rsplit(":", 1)
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"CASSANDRA_HOST com porta inválida: {raw_port!r}") from None

    username = os.getenv("CASSANDRA_USERNAME")
    password = os.getenv("CASSANDRA_PASSWORD")
    return {
        "contact_points": [host],
        "port": port,
        "local_dc": os.getenv("CASSANDRA_DATACENTER", "datacenter1"),
        "keyspace": os.getenv("CASSANDRA_KEYSPACE", "techmarket"),
        "username": username if username and password else None,
        "password": password if username and password else None,
    }


def dataset_sizes():
    return {
        "num_clientes": _get_int("NUM_CLIENTES", 20000),
        "num_produtos": _get_int("NUM_PRODUTOS", 5000),
        "num_pedidos": _get_int("NUM_PEDIDOS", 30000),
    }


def log_level():
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL inválido: {level!r} (use um de {', '.join(LOG_LEVELS)})")
    return level
