import logging

from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import Cluster, ExecutionProfile, EXEC_PROFILE_DEFAULT
from cassandra.policies import DCAwareRoundRobinPolicy

from techmarket.config import cassandra_config

logger = logging.getLogger(__name__)


class CassandraConnection:
    def __init__(self, config=None, request_timeout=300):
        self.config = config or cassandra_config()
        self.keyspace = self.config["keyspace"]

        auth_provider = None
        if self.config.get("username"):
            auth_provider = PlainTextAuthProvider(self.config["username"], self.config["password"])

        profile = ExecutionProfile(
            load_balancing_policy=DCAwareRoundRobinPolicy(local_dc=self.config["local_dc"]),
            request_timeout=request_timeout,
        )
        self.cluster = Cluster(
            contact_points=self.config["contact_points"],
            port=self.config["port"],
            auth_provider=auth_provider,
            execution_profiles={EXEC_PROFILE_DEFAULT: profile},
        )
        self.session = None
        self._prepared = {}

    def connect(self, use_keyspace=True):
        if self.session is None:
            self.session = self.cluster.connect(self.keyspace if use_keyspace else None)
        return self.session

    def set_keyspace(self, keyspace):
        self.session.set_keyspace(keyspace)
        self._prepared.clear()

    def prepare(self, query):
        statement = self._prepared.get(query)
        if statement is None:
            statement = self.session.prepare(query)
            self._prepared[query] = statement
        return statement

    def execute(self, query, params=None):
        """Executa DML/SELECT sempre como prepared statement."""
        try:
            return self.session.execute(self.prepare(query), params or ())
        except Exception:
            logger.error("Erro ao executar query: %s com params: %s", query, params)
            raise

    def execute_schema(self, query):
        """DDL e TRUNCATE, que não passam por prepare."""
        try:
            return self.session.execute(query)
        except Exception:
            logger.error("Erro ao executar comando: %s", query)
            raise

    def close(self):
        self.cluster.shutdown()
        self.session = None
        self._prepared.clear()
