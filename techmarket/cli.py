import argparse
import logging
from contextlib import contextmanager

from techmarket import config
from techmarket.benchmark import BACKENDS, QUERIES, run_all
from techmarket.cassandra_connection import CassandraConnection
from techmarket.generate_data import MockDataGenerator
from techmarket.init_databases import init_cassandra, init_mongodb, init_postgres
from techmarket.mongodb_connection import MongoDBConnection
from techmarket.postgres_connection import PostgresConnection
from techmarket.seed_data import inserir_cassandra, inserir_mongodb, inserir_postgres, print_resumo

logger = logging.getLogger(__name__)

NOMES = {'postgres': 'PostgreSQL', 'mongodb': 'MongoDB', 'cassandra': 'Cassandra'}


@contextmanager
def open_backend(backend, autocommit=False, use_keyspace=True):
    """Abre a conexão do backend e entrega o handle usado pelas consultas."""
    if backend == 'postgres':
        db = PostgresConnection()
        conn = None
        try:
            conn = db.connect()
            conn.autocommit = autocommit
            yield conn
        finally:
            if conn is not None:
                db.release(conn)
            db.close()
    elif backend == 'mongodb':
        connection = MongoDBConnection()
        try:
            yield connection.connect()
        finally:
            connection.close()
    elif backend == 'cassandra':
        connection = CassandraConnection()
        try:
            if use_keyspace:
                connection.connect()
            yield connection
        finally:
            connection.close()
    else:
        raise ValueError(f"backend desconhecido: {backend}")


INITIALIZERS = {'postgres': init_postgres, 'mongodb': init_mongodb, 'cassandra': init_cassandra}
SEEDERS = {'postgres': inserir_postgres, 'mongodb': inserir_mongodb, 'cassandra': inserir_cassandra}


def _backends(escolha):
    return list(BACKENDS) if escolha == 'all' else [escolha]


def cmd_init(args):
    for backend in _backends(args.backend):
        with open_backend(backend, use_keyspace=False) as conn:
            INITIALIZERS[backend](conn)
    return 0


def cmd_seed(args):
    tamanhos = config.dataset_sizes()
    num_clientes = args.clientes if args.clientes is not None else tamanhos['num_clientes']
    num_produtos = args.produtos if args.produtos is not None else tamanhos['num_produtos']
    num_pedidos = args.pedidos if args.pedidos is not None else tamanhos['num_pedidos']

    logger.info("Gerando %d clientes, %d produtos e %d pedidos...", num_clientes, num_produtos, num_pedidos)
    dataset = MockDataGenerator(seed=args.seed).gerar_dataset(num_clientes, num_produtos, num_pedidos)

    tempos = {}
    for backend in _backends(args.backend):
        with open_backend(backend) as conn:
            tempos[NOMES[backend]] = SEEDERS[backend](conn, dataset)
    if len(tempos) > 1:
        print_resumo(tempos)
    return 0


def cmd_query(args):
    queries = BACKENDS[args.backend]
    names = list(QUERIES) if args.query == 'all' else [args.query]
    with open_backend(args.backend, autocommit=True) as conn:
        run_all(queries, conn, email=args.email, categoria=args.categoria, names=names)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog='techmarket',
                                     description="Benchmark PostgreSQL x MongoDB x Cassandra")
    sub = parser.add_subparsers(dest='command', required=True)
    escolhas = list(BACKENDS) + ['all']

    p_init = sub.add_parser('init', help="cria tabelas, coleções e índices")
    p_init.add_argument('backend', choices=escolhas)
    p_init.set_defaults(func=cmd_init)

    p_seed = sub.add_parser('seed', help="popula os bancos com dados fictícios")
    p_seed.add_argument('backend', choices=escolhas)
    p_seed.add_argument('--clientes', type=int)
    p_seed.add_argument('--produtos', type=int)
    p_seed.add_argument('--pedidos', type=int)
    p_seed.add_argument('--seed', type=int, help="semente para dados reprodutíveis")
    p_seed.set_defaults(func=cmd_seed)

    p_query = sub.add_parser('query', help="executa as consultas Q1-Q6")
    p_query.add_argument('backend', choices=list(BACKENDS))
    p_query.add_argument('query', nargs='?', default='all', choices=list(QUERIES) + ['all'])
    p_query.add_argument('--email')
    p_query.add_argument('--categoria')
    p_query.set_defaults(func=cmd_query)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    errors = tuple(e for queries in BACKENDS.values() for e in queries.ERRORS)
    try:
        logging.basicConfig(level=config.log_level(), format='%(asctime)s - %(levelname)s - %(message)s')
        return args.func(args)
    except errors as e:
        logger.error("Erro durante '%s': %s", args.command, e)
        return 1
    except ValueError as e:
        logger.error("%s", e)
        return 1
