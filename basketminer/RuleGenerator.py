import logging
from itertools import combinations

from basketminer.ItemsetRec import ItemsetRec
from basketminer.Parameters import DEFAULT_MAXLEN, check_confidence, check_positive_int
from basketminer.RuleRec import RuleRec

logger = logging.getLogger(__name__)


class RuleGenerator:
    """Derive antecedent -> consequent rules from frequent itemsets.

    Every non-empty proper subset of a frequent itemset (up to `maxlen` items) is
    tried as an antecedent, with the rest of the itemset as consequent. Since every
    subset of a frequent itemset is itself frequent, the supports of both sides are
    looked up in the frequent-itemset index rather than recounted.
    """

    def __init__(self, maxlen=DEFAULT_MAXLEN):
        self.maxlen = check_positive_int(maxlen, "maxlen")

    def generate(self, frequent_itemsets, store, min_confidence):
        min_confidence = check_confidence(min_confidence)

        # arena of itemsets keyed by their canonical item tuple
        index = {tuple(itemset): itemset for itemset in frequent_itemsets}
        rules = []
        recounted = 0

        for itemset in sorted(index.values(), key=ItemsetRec.sort_key):
            if len(itemset) < 2:
                continue
            for size in range(1, min(len(itemset) - 1, self.maxlen) + 1):
                for antecedent_key in combinations(itemset, size):
                    antecedent = index.get(antecedent_key)
                    if antecedent is None:
                        antecedent = _lookup(antecedent_key, store)
                        index[antecedent_key] = antecedent
                        recounted += 1
                    if antecedent.count == 0:
                        continue

                    # itemset.count / antecedent.count, compared before building the rule
                    if itemset.count / antecedent.count < min_confidence:
                        continue

                    consequent_key = tuple(item for item in itemset if item not in antecedent_key)
                    consequent = index.get(consequent_key)
                    if consequent is None:
                        consequent = _lookup(consequent_key, store)
                        index[consequent_key] = consequent
                        recounted += 1

                    rules.append(RuleRec(antecedent, consequent, itemset.count, itemset.support))

        if recounted:
            logger.debug(f"Counted {recounted} subsets missing from the frequent itemsets")
        if rules:
            logger.info(f"Generated {len(rules)} rules with confidence >= {min_confidence}")
        else:
            logger.warning(f"No rule reaches min_confidence={min_confidence}")
        return rules


def generate(frequent_itemsets, store, min_confidence, maxlen=DEFAULT_MAXLEN):
    return RuleGenerator(maxlen=maxlen).generate(frequent_itemsets, store, min_confidence)


def _lookup(key, store):
    count, support = store.support(key)
    return ItemsetRec(key, count, support)
