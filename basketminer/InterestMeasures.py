import logging

import numpy as np

from basketminer.ItemsetRec import ItemsetRec
from basketminer.RuleRec import RuleRec

logger = logging.getLogger(__name__)

MEASURES = ("support", "confidence", "lift", "leverage", "conviction")


# ############################# measures from three supports #############################
# ratio of the observed joint support to the one expected under independence
def lift(rule_confidence, consequent_support):
    if consequent_support == 0:
        return np.nan
    return rule_confidence / consequent_support


def leverage(support, antecedent_support, consequent_support):
    return support - antecedent_support * consequent_support


# infinite when the rule never fails (confidence = 1), including a consequent present in every transaction
def conviction(rule_confidence, consequent_support):
    if rule_confidence >= 1.0:
        return np.inf
    return (1.0 - consequent_support) / (1.0 - rule_confidence)


def annotate(rule, store=None):
    """Return a copy of `rule` with lift, leverage and conviction filled in.

    The measures only need the supports cached on the rule's antecedent and
    consequent. `store` fills in a side whose support was never counted (an
    ItemsetRec built with count=0) and gives the transaction count for lift;
    without a store that count is worked back from the antecedent.
    """
    total = store.size() if store is not None else None
    antecedent = _counted(rule.antecedent, store)
    consequent = _counted(rule.consequent, store)

    # rebuilt so confidence follows the refreshed antecedent count
    plain = RuleRec(antecedent, consequent, rule.count, rule.support)
    return RuleRec(
        antecedent, consequent, rule.count, rule.support,
        lift=_lift_from_counts(plain, antecedent, consequent, total),
        leverage=leverage(plain.support, antecedent.support, consequent.support),
        conviction=conviction(plain.confidence, consequent.support),
    )


def annotate_all(rules, store=None):
    return [annotate(rule, store) for rule in rules]


def filter_rules(rules, min_lift=None, min_leverage=None, min_conviction=None):
    """Keep the annotated rules meeting every given threshold; None disables a threshold."""
    kept = []
    for rule in rules:
        if not rule.annotated:
            raise ValueError("rule %r has no interest measures, annotate it first" % (rule,))
        if min_lift is not None and not rule.lift >= min_lift:
            continue
        if min_leverage is not None and not rule.leverage >= min_leverage:
            continue
        if min_conviction is not None and not rule.conviction >= min_conviction:
            continue
        kept.append(rule)
    logger.info(f"Kept {len(kept)} of {len(rules)} rules after interest filtering")
    return kept


# lift as a ratio of integer counts, exactly 1.0 when count * total == antecedent count * consequent count
def _lift_from_counts(rule, antecedent, consequent, total=None):
    if not (rule.count and antecedent.count and consequent.count and antecedent.support):
        return lift(rule.confidence, consequent.support)
    if total is None:
        total = round(antecedent.count / antecedent.support)
    return (rule.count * total) / (antecedent.count * consequent.count)


def _counted(itemset, store):
    if itemset.count or store is None:
        return itemset
    count, support = store.support(itemset)
    return ItemsetRec(itemset, count, support)
