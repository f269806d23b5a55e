import time
from datetime import datetime, timezone


def log_time(label, start, decimal_places=2):
    """Imprime o tempo decorrido desde `start` (valor de time.time())."""
    elapsed = time.time() - start
    print(f"{label} - Tempo: {elapsed:.{decimal_places}f} s")
    return elapsed


def utc_now():
    # Cassandra e BSON guardam milissegundos; segundos inteiros evitam perda na ida e volta
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)
