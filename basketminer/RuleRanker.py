import logging
import math

from basketminer.Exceptions import InvalidParameter
from basketminer.Parameters import DEFAULT_TOP_N, check_positive_int

logger = logging.getLogger(__name__)

RANKABLE = ("confidence", "support", "lift", "leverage", "conviction")


class RuleRanker:
    """Select the best rules by one measure.

    Ties are broken by support (descending), then by the antecedent and the
    consequent in lexicographic item order, so the ranking never depends on the
    order rules were produced in. Rules whose measure is NaN come last.
    """

    def __init__(self, by="confidence"):
        if by not in RANKABLE:
            raise InvalidParameter("by", by, "one of %s" % ", ".join(RANKABLE))
        self.by = by

    def rank(self, rules):
        return sorted(rules, key=lambda rule: rank_key(rule, self.by))

    def top_n(self, rules, n=DEFAULT_TOP_N):
        n = check_positive_int(n, "top_n")
        ranked = self.rank(rules)
        if n >= len(ranked):
            logger.debug(f"Requested top {n} of {len(ranked)} rules, returning all of them")
        return ranked[:n]


def top_n(rules, n=DEFAULT_TOP_N, by="confidence"):
    return RuleRanker(by).top_n(rules, n)


def rank_key(rule, by="confidence"):
    value = getattr(rule, by)
    if value is None:
        raise ValueError("rule %r has no %s, annotate it first" % (rule, by))
    missing = math.isnan(value)
    return (missing, 0.0 if missing else -value, -rule.support,
            tuple(rule.antecedent), tuple(rule.consequent))
