import logging
from concurrent.futures import ThreadPoolExecutor

import pandas as pd

from basketminer.ItemsetMiner import ItemsetMiner
from basketminer.Parameters import DEFAULT_MAXLEN, check_confidence, check_positive_int, check_support
from basketminer.RuleGenerator import RuleGenerator

logger = logging.getLogger(__name__)

COLUMNS = ["support", "confidence", "rule_count"]


def sweep(store, supports, confidences, maxlen=DEFAULT_MAXLEN, n_jobs=1):
    """Number of rules for every (support, confidence) pair of the grid.

    Rows come in input order, supports outer and confidences inner. Itemsets are
    mined once per support value and reused for all its confidence values, which
    gives the same counts as one mining run per cell. Support rows are independent
    and only read the store, so with n_jobs > 1 they run on a thread pool.
    """
    supports = [check_support(value) for value in supports]
    confidences = [check_confidence(value) for value in confidences]
    n_jobs = check_positive_int(n_jobs, "n_jobs")

    miner = ItemsetMiner(maxlen=maxlen)
    generator = RuleGenerator(maxlen=maxlen)

    def support_row(min_support):
        itemsets = miner.mine(store, min_support)
        row = []
        for min_confidence in confidences:
            count = len(generator.generate(itemsets, store, min_confidence))
            logger.info(f"support={min_support} confidence={min_confidence}: {count} rules")
            row.append((min_support, min_confidence, count))
        return row

    if n_jobs == 1:
        rows = [support_row(value) for value in supports]
    else:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            rows = list(executor.map(support_row, supports))

    return pd.DataFrame([cell for row in rows for cell in row], columns=COLUMNS)


def to_grid(table):
    """Pivot a sweep table to supports x confidences of rule counts, e.g. for a heatmap."""
    return table.pivot(index="support", columns="confidence", values="rule_count")
