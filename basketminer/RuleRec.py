from basketminer.ItemsetRec import ItemsetRec


# ############################# Class RuleRec #############################
class RuleRec:
    """An association rule antecedent -> consequent.

    Both sides are ItemsetRec objects carrying their own support, so every quality
    measure of the rule is derived from three supports: antecedent, consequent and
    their union. Rules are read-only; InterestMeasures.annotate returns a new rule
    with lift, leverage and conviction filled in.
    """

    __slots__ = ("_antecedent", "_consequent", "_count", "_support", "_confidence",
                 "_lift", "_leverage", "_conviction")

    def __init__(self, antecedent, consequent, count, support,
                 lift=None, leverage=None, conviction=None):
        if not isinstance(antecedent, ItemsetRec) or not isinstance(consequent, ItemsetRec):
            raise TypeError("antecedent and consequent must be ItemsetRec objects")
        if set(antecedent) & set(consequent):
            raise ValueError("antecedent and consequent share items: %s"
                             % sorted(set(antecedent) & set(consequent)))
        self._antecedent = antecedent
        self._consequent = consequent
        self._count = count
        self._support = support
        # from counts, so that e.g. 3 of 4 transactions gives exactly 0.75
        if antecedent.count:
            self._confidence = count / antecedent.count
        else:
            self._confidence = support / antecedent.support if antecedent.support else 0.0
        self._lift = lift
        self._leverage = leverage
        self._conviction = conviction

    antecedent = property(lambda self: self._antecedent)
    consequent = property(lambda self: self._consequent)
    # number of transactions containing antecedent and consequent
    count = property(lambda self: self._count)
    support = property(lambda self: self._support)
    confidence = property(lambda self: self._confidence)
    lift = property(lambda self: self._lift)
    leverage = property(lambda self: self._leverage)
    conviction = property(lambda self: self._conviction)

    @property
    def antecedent_support(self):
        return self._antecedent.support

    @property
    def consequent_support(self):
        return self._consequent.support

    @property
    def annotated(self):
        return self._lift is not None

    @property
    def items(self):
        """The full itemset antecedent | consequent."""
        return frozenset(self._antecedent) | frozenset(self._consequent)

    @property
    def key(self):
        return tuple(self._antecedent), tuple(self._consequent)

    def __eq__(self, other):
        if not isinstance(other, RuleRec):
            return NotImplemented
        return self.key == other.key and self._count == other._count and self._support == other._support

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        text = "%s -> %s (support=%.4f, confidence=%.4f" % (
            "{" + ", ".join(map(str, self._antecedent)) + "}",
            "{" + ", ".join(map(str, self._consequent)) + "}",
            self._support, self._confidence)
        if self.annotated:
            text += ", lift=%.4f, leverage=%.4f, conviction=%.4f" % (self._lift, self._leverage, self._conviction)
        return text + ")"

    def as_dict(self):
        return {
            "antecedents": frozenset(self._antecedent),
            "consequents": frozenset(self._consequent),
            "antecedent support": self.antecedent_support,
            "consequent support": self.consequent_support,
            "support": self._support,
            "confidence": self._confidence,
            "lift": self._lift,
            "leverage": self._leverage,
            "conviction": self._conviction,
        }
