from psycopg2.pool import SimpleConnectionPool

from techmarket.config import postgres_config


class PostgresConnection:
    def __init__(self, config=None, minconn=1, maxconn=5):
        self.pool = SimpleConnectionPool(minconn, maxconn, **(config or postgres_config()))

    def connect(self):
        return self.pool.getconn()

    def release(self, conn):
        self.pool.putconn(conn)

    def close(self):
        if not self.pool.closed:
            self.pool.closeall()
