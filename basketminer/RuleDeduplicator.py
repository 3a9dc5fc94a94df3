import logging

import numpy as np

from basketminer.Exceptions import InvalidParameter
from basketminer.RuleRanker import rank_key

logger = logging.getLogger(__name__)

SEMANTICS = ("dominance", "general")

# rows of the is-subset matrix computed at a time
BLOCK_SIZE = 1024


class RuleDeduplicator:
    """Remove redundant rules using the is-subset matrix of the rules' full itemsets.

    Rules are first put in rank order (confidence, then support, descending, then
    antecedent and consequent lexicographically) so that two rules which would
    make each other redundant are resolved the same way whatever the input order.

    :param
    @semantics - "dominance": a rule is redundant if another rule's full itemset contains
        its own full itemset and that rule's confidence and support are both at least as high.
        Between two rules over the same itemset only the one ranked ahead can remove the other.
        "general": a rule is redundant if a rule ranked ahead of it has a full itemset
        contained in its own, i.e. a more general rule is at least as good in rank.
    """

    def __init__(self, semantics="dominance"):
        if semantics not in SEMANTICS:
            raise InvalidParameter("semantics", semantics, "one of %s" % ", ".join(SEMANTICS))
        self.semantics = semantics

    def prune(self, rules):
        rules = sorted(set(rules), key=rank_key)
        if len(rules) < 2:
            return rules

        membership = _membership_matrix(rules)
        # item x rule, built once and shared by every block
        present = membership.astype(np.float32).T
        absent = (~membership).astype(np.float32).T
        confidence = np.array([rule.confidence for rule in rules])
        support = np.array([rule.support for rule in rules])

        redundant = np.zeros(len(rules), dtype=bool)
        for start in range(0, len(rules), BLOCK_SIZE):
            stop = min(start + BLOCK_SIZE, len(rules))
            redundant[start:stop] = self._redundant_block(present, absent, confidence, support, start, stop)

        kept = [rule for rule, drop in zip(rules, redundant) if not drop]
        logger.info(f"Removed {int(redundant.sum())} redundant rules, {len(kept)} left ({self.semantics})")
        return kept

    # redundancy flags of the rules in rows [start, stop), each compared with every rule
    def _redundant_block(self, present, absent, confidence, support, start, stop):
        ahead = np.arange(present.shape[1])[None, :] < np.arange(start, stop)[:, None]

        # covers[r, c]: itemset of rule c is a subset of the itemset of rule r
        covers = _no_missing(absent[:, start:stop].T, present)

        if self.semantics == "dominance":
            # contained[r, c]: itemset of rule r is a subset of the itemset of rule c
            contained = _no_missing(present[:, start:stop].T, absent)
            dominates = ((confidence[None, :] >= confidence[start:stop, None])
                         & (support[None, :] >= support[start:stop, None]))
            # rank only settles rules over the same itemset
            return (contained & dominates & (ahead | ~covers)).any(axis=1)

        return (covers & ahead).any(axis=1)


def prune(rules, semantics="dominance"):
    return RuleDeduplicator(semantics).prune(rules)


def is_subset_matrix(left, right):
    """m[i, j] is True when row i of `left` is a subset of row j of `right`.

    Both arguments are boolean item-membership matrices over the same item columns.
    Row i is a subset of row j iff no item of i is missing from j.
    """
    return _no_missing(left.astype(np.float32), (~right).astype(np.float32).T)


# rows x items @ items x rules: count of row items each rule lacks, exact in float32 below 2**24 items
def _no_missing(rows, absent):
    return (rows @ absent) == 0


def _membership_matrix(rules):
    items = sorted({item for rule in rules for item in rule.items})
    column = {item: position for position, item in enumerate(items)}
    membership = np.zeros((len(rules), len(items)), dtype=bool)
    for row, rule in enumerate(rules):
        membership[row, [column[item] for item in rule.items]] = True
    return membership
