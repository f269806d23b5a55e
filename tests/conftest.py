import pytest

from techmarket.generate_data import MockDataGenerator


@pytest.fixture
def dataset():
    return MockDataGenerator(seed=42).gerar_dataset(20, 10, 30)


class FakeResultSet(list):
    """Imita o ResultSet do cassandra-driver: iterável e com .one()."""

    def one(self):
        return self[0] if self else None


class FakeCassandraConnection:
    """Responde a execute() com as linhas registradas para o primeiro trecho de CQL que casar."""

    def __init__(self, respostas=None):
        self.respostas = respostas or {}
        self.calls = []
        self.schema_calls = []
        self.keyspace = "techmarket"

    def execute(self, query, params=None):
        self.calls.append((" ".join(query.split()), params))
        for trecho, linhas in self.respostas.items():
            if trecho in query:
                return FakeResultSet(linhas)
        return FakeResultSet()

    def execute_schema(self, query):
        self.schema_calls.append(" ".join(query.split()))
        return FakeResultSet()


@pytest.fixture
def fake_cassandra():
    return FakeCassandraConnection


