import pandas as pd

from basketminer.RuleRanker import RuleRanker

FRAME_COLUMNS = ["antecedents", "consequents", "antecedent support", "consequent support",
                 "support", "confidence", "lift", "leverage", "conviction"]


class Associations:
    """The rule set of one mining run.

    Holds the parameters it was mined with, the frequent itemsets, every annotated
    rule, the rules left after redundancy pruning and the ranked top-N view.
    All collections are tuples; a new run produces a new Associations object.
    """

    def __init__(self, min_support, min_confidence, max_antecedent_length,
                 itemsets=(), rules=(), pruned_rules=None, ranked_rules=(), rank_by="confidence"):
        self.min_support = min_support
        self.min_confidence = min_confidence
        self.max_antecedent_length = max_antecedent_length
        self.rank_by = rank_by

        # frequent itemsets sorted by size, then items
        self.itemsets = tuple(itemsets)

        # every rule meeting min_confidence, with interest measures
        self.rules = tuple(rules)

        # rules that survived the redundancy test, in rank order
        self.pruned_rules = self.rules if pruned_rules is None else tuple(pruned_rules)

        # the top-N of pruned_rules
        self.ranked_rules = tuple(ranked_rules)

    @property
    def empty(self):
        return not self.rules

    def __len__(self):
        return len(self.ranked_rules)

    def __iter__(self):
        return iter(self.ranked_rules)

    def rules_for(self, item):
        """Rules (from pruned_rules) whose antecedent contains `item`, best first."""
        matching = [rule for rule in self.pruned_rules if item in rule.antecedent]
        return RuleRanker(self.rank_by).rank(matching)

    def to_frame(self, which="ranked"):
        """
        :param
        @which - "ranked" for the top-N view, "pruned" for every non-redundant rule, "all" for every rule
        """
        try:
            rules = {"ranked": self.ranked_rules, "pruned": self.pruned_rules, "all": self.rules}[which]
        except KeyError:
            raise ValueError("which must be one of ranked, pruned, all, got %r" % (which,)) from None
        return pd.DataFrame([rule.as_dict() for rule in rules], columns=FRAME_COLUMNS)

    def __repr__(self):
        return ("Associations(min_support=%s, min_confidence=%s, itemsets=%d, rules=%d, pruned=%d, ranked=%d)"
                % (self.min_support, self.min_confidence, len(self.itemsets), len(self.rules),
                   len(self.pruned_rules), len(self.ranked_rules)))
