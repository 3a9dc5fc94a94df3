import logging
from concurrent.futures import ThreadPoolExecutor
from itertools import combinations

import numpy as np
import pandas as pd

from basketminer.Exceptions import MiningAborted
from basketminer.ItemsetRec import ItemsetRec
from basketminer.Parameters import DEFAULT_MAXLEN, check_positive_int, check_support

logger = logging.getLogger(__name__)


class ItemsetMiner:
    """Level-wise (Apriori) search for frequent itemsets.

    Level k candidates are built only from the frequent itemsets of level k-1, and a
    candidate is dropped as soon as one of its (k-1)-subsets is missing from level
    k-1. Each surviving candidate is counted by intersecting the transaction ids of
    the two level k-1 itemsets it was joined from.
    """

    """
    :param
    @maxlen - largest itemset size to search for.  By default it is 10
    @n_jobs - number of threads used to count the candidates of one level
    @abort - optional object with an is_set() method (e.g. threading.Event), checked before each level
    """
    def __init__(self, maxlen=DEFAULT_MAXLEN, n_jobs=1, abort=None):
        self.maxlen = check_positive_int(maxlen, "maxlen")
        self.n_jobs = check_positive_int(n_jobs, "n_jobs")
        self.abort = abort

    def mine(self, store, min_support):
        min_support = check_support(min_support)
        if store.size() == 0:
            logger.warning("No transactions to mine")
            return []

        # the minimum number of transactions a frequent itemset must be contained in
        min_count = _min_count(min_support, store.size())

        # level 1: every distinct item, keyed by its canonical tuple
        level = {}
        covers = {}
        for item, tids in store.transaction_ids.items():
            if len(tids) >= min_count:
                key = (item,)
                level[key] = ItemsetRec(key, len(tids), store.count_to_support(len(tids)))
                covers[key] = tids
        logger.info(f"Found {len(level)} frequent 1-itemsets out of {len(store.transaction_ids)} items")

        frequent = dict(level)
        k = 2
        while level and k <= self.maxlen:
            if self.abort is not None and self.abort.is_set():
                raise MiningAborted(k, len(frequent))

            candidates = generate_candidates(level, k)
            if not candidates:
                break

            counted = self._count(candidates, covers)

            level = {}
            next_covers = {}
            for key, tids in zip(candidates, counted):
                if len(tids) >= min_count:
                    level[key] = ItemsetRec(key, len(tids), store.count_to_support(len(tids)))
                    next_covers[key] = tids
            covers = next_covers
            frequent.update(level)
            logger.info(f"Found {len(level)} frequent {k}-itemsets from {len(candidates)} candidates")
            k += 1

        if not frequent:
            logger.warning(f"No itemset reaches min_support={min_support}")
        return sorted(frequent.values(), key=ItemsetRec.sort_key)

    # count every candidate, preserving candidate order so the output never depends on scheduling
    def _count(self, candidates, covers):
        def cover(key):
            # a candidate is the join of its two prefix parents
            left = covers[key[:-1]]
            right = covers[key[:-2] + key[-1:]]
            return np.intersect1d(left, right, assume_unique=True)

        if self.n_jobs == 1 or len(candidates) < 2:
            return [cover(key) for key in candidates]
        with ThreadPoolExecutor(max_workers=self.n_jobs) as executor:
            return list(executor.map(cover, candidates))

    @staticmethod
    def to_frame(itemsets):
        """Frequent itemsets as a DataFrame with itemsets, length, count and support columns."""
        return pd.DataFrame(
            {
                "itemsets": [frozenset(itemset) for itemset in itemsets],
                "length": [len(itemset) for itemset in itemsets],
                "count": [itemset.count for itemset in itemsets],
                "support": [itemset.support for itemset in itemsets],
            },
            columns=["itemsets", "length", "count", "support"],
        )


def mine(store, min_support, maxlen=DEFAULT_MAXLEN):
    return ItemsetMiner(maxlen=maxlen).mine(store, min_support)


# generate the size-k candidates from the frequent (k-1)-itemsets in `level`
def generate_candidates(level, k):
    keys = sorted(level)
    candidates = []

    # join step: sorted tuples sharing their first k-2 items
    # every candidate whose (k-1)-subsets are all frequent is produced exactly once this way
    for i in range(len(keys)):
        prefix = keys[i][:-1]
        for j in range(i + 1, len(keys)):
            if keys[j][:-1] != prefix:
                # keys are sorted, so no later key shares this prefix
                break
            candidate = keys[i] + keys[j][-1:]
            if not has_infrequent_subset(candidate, level):
                candidates.append(candidate)
            else:
                logger.debug(f"Pruned {k}-candidate {candidate}")

    return candidates


# the anti-monotonicity check: every (k-1)-subset of a frequent k-itemset is frequent
def has_infrequent_subset(candidate, level):
    for subset in combinations(candidate, len(candidate) - 1):
        if subset not in level:
            return True
    return False


def _min_count(min_support, total):
    # smallest count whose support fraction, computed as count / total, meets min_support
    count = max(int(np.ceil(min_support * total)), 1)
    while count > 1 and (count - 1) / total >= min_support:
        count -= 1
    while count / total < min_support:
        count += 1
    return count
