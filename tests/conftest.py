import numpy as np
import pytest

from basketminer.TransactionStore import TransactionStore

# T1={X,Y,Z}, T2={Y,Z}, T3={X,Z}, T4={X,Y}, T5={X,Y,Z}, T6={X,Y,Z}
SCENARIO = {
    "T1": ["X", "Y", "Z"],
    "T2": ["Y", "Z"],
    "T3": ["X", "Z"],
    "T4": ["X", "Y"],
    "T5": ["X", "Y", "Z"],
    "T6": ["X", "Y", "Z"],
}


def scenario_rows():
    return [(entity, item) for entity, items in SCENARIO.items() for item in items]


def random_rows(seed, transactions=60, items="abcdefg", p=0.45):
    rng = np.random.default_rng(seed)
    rows = []
    for tid in range(transactions):
        basket = [item for item in items if rng.random() < p]
        # keep every transaction non-empty
        if not basket:
            basket = [items[tid % len(items)]]
        rows.extend(("c%03d" % tid, item) for item in basket)
    return rows


@pytest.fixture
def scenario_store():
    return TransactionStore.build(scenario_rows())


@pytest.fixture(params=[1, 2, 3])
def random_store(request):
    return TransactionStore.build(random_rows(request.param))
