# ############################# Class ItemsetRec #############################
class ItemsetRec(tuple):
    """A frequent itemset: the canonical sorted tuple of its items plus its support.

    The tuple itself is the key used to index itemsets, so two records for the same
    items compare and hash equal regardless of the order the items were given in.
    """

    def __new__(cls, items, count=0, support=0.0):
        items = tuple(sorted(set(items)))
        if not items:
            raise ValueError("an itemset must contain at least one item")
        return super().__new__(cls, items)

    def __init__(self, items, count=0, support=0.0):
        super().__init__()
        self.count = count
        self.support = support

    @property
    def items(self):
        return frozenset(self)

    # the stable ordering used to report itemsets: by size, then lexicographically
    @staticmethod
    def sort_key(itemset):
        return len(itemset), tuple(itemset)

    def __repr__(self):
        return "ItemsetRec(%r, count=%d, support=%.4f)" % (tuple(self), self.count, self.support)

    def __reduce__(self):
        return self.__class__, (tuple(self), self.count, self.support)
