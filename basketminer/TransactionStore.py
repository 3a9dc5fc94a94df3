import logging

import numpy as np
import pandas as pd

from basketminer.Exceptions import ValidationError

logger = logging.getLogger(__name__)

ENTITY = "entity_id"
ITEM = "item"


class TransactionStore:
    """In-memory collection of transactions, one per entity (customer or invoice).

    Transactions are frozensets of item labels, kept in the order their entity was
    first seen. Next to the horizontal layout the store keeps the vertical one: for
    every item, the sorted ids of the transactions that contain it. Support of an
    itemset is the size of the intersection of its items' transaction ids, which is
    the number of transactions the itemset is a subset of.

    A store is never mutated after construction; `extended` returns a new store.
    """

    def __init__(self, entity_ids, transactions):
        self.entity_ids = tuple(entity_ids)
        self.transactions = tuple(frozenset(t) for t in transactions)
        if len(self.entity_ids) != len(self.transactions):
            raise ValueError("every transaction needs exactly one entity id")

        # total number of transactions in DB
        self.noOfTransactions = len(self.transactions)

        # Save the transaction list according to item
        tids = {}
        for tid, transaction in enumerate(self.transactions):
            for item in transaction:
                tids.setdefault(item, []).append(tid)
        self.transaction_ids = {item: np.array(ids, dtype=np.int64) for item, ids in tids.items()}

        # item -> number of transactions containing it
        self.item_counts = {item: len(ids) for item, ids in self.transaction_ids.items()}

    @classmethod
    def build(cls, rows):
        """
        :param
        @rows - ordered iterable of (entity_id, item_label) pairs, already cleaned
        """
        frame = _rows_to_frame(rows)
        return cls._from_clean_frame(frame)

    @classmethod
    def from_frame(cls, frame, entity_col=ENTITY, item_col=ITEM):
        """Build a store from two columns of a DataFrame, e.g. InvoiceNo and Description."""
        missing = {entity_col, item_col} - set(frame.columns)
        if missing:
            raise ValidationError("missing columns: %s" % ", ".join(sorted(map(str, missing))))
        rows = frame[[entity_col, item_col]].itertuples(index=False, name=None)
        return cls.build(rows)

    @classmethod
    def _from_clean_frame(cls, frame):
        if frame.empty:
            logger.warning("Building an empty transaction store")
            return cls([], [])

        # sort=False keeps entities in first-seen order
        grouped = frame.drop_duplicates().groupby(ENTITY, sort=False)[ITEM]
        baskets = grouped.agg(list)
        store = cls(baskets.index.tolist(), baskets.tolist())
        logger.info(f"Built {store.size():,} transactions over {len(store.item_counts):,} items "
                    f"from {len(frame):,} rows")
        return store

    def extended(self, rows):
        """Return a new store holding these transactions followed by `rows`.

        Rows whose entity already has a transaction are merged into it.
        """
        frame = _rows_to_frame(rows)
        current = pd.DataFrame(
            [(entity, item) for entity, transaction in zip(self.entity_ids, self.transactions)
             for item in sorted(transaction)],
            columns=[ENTITY, ITEM],
        )
        return self._from_clean_frame(pd.concat([current, frame], ignore_index=True))

    def size(self):
        return self.noOfTransactions

    def __len__(self):
        return self.noOfTransactions

    def __iter__(self):
        return iter(self.transactions)

    def items(self):
        return set(self.transaction_ids)

    def count_to_support(self, count):
        if self.noOfTransactions == 0:
            return 0.0
        return count / self.noOfTransactions

    def item_support(self, item):
        return self.count_to_support(self.item_counts.get(item, 0))

    def get_tids(self, itemset):
        """Sorted ids of the transactions that contain every item of `itemset`."""
        items = sorted(set(itemset), key=lambda item: self.item_counts.get(item, 0))
        if not items:
            raise ValueError("cannot compute the cover of an empty itemset")
        if items[0] not in self.transaction_ids:
            return np.empty(0, dtype=np.int64)

        # intersect from the rarest item up so the running cover stays small
        tids = self.transaction_ids[items[0]]
        for item in items[1:]:
            if len(tids) == 0:
                break
            tids = np.intersect1d(tids, self.transaction_ids[item], assume_unique=True)
        return tids

    def support(self, itemset):
        """Return (count, fraction) of transactions containing `itemset`."""
        count = int(len(self.get_tids(itemset)))
        return count, self.count_to_support(count)

    def item_frequencies(self):
        """Item frequency table sorted by count (descending) then item."""
        frame = pd.DataFrame(list(self.item_counts.items()), columns=["item", "count"])
        frame["support"] = frame["count"] / self.noOfTransactions if self.noOfTransactions else 0.0
        return frame.sort_values(["count", "item"], ascending=[False, True]).reset_index(drop=True)

    def __repr__(self):
        return "TransactionStore(transactions=%d, items=%d)" % (self.noOfTransactions, len(self.item_counts))


def build(rows):
    return TransactionStore.build(rows)


def _is_missing(value):
    if isinstance(value, str):
        return value == ""
    # None, NaN, NaT and pd.NA
    return pd.api.types.is_scalar(value) and pd.isna(value)


# validate raw rows and convert them to a two-column frame of strings
def _rows_to_frame(rows):
    records = []
    for index, row in enumerate(rows):
        try:
            entity_id, item = row
        except (TypeError, ValueError):
            raise ValidationError("expected an (entity_id, item) pair, got %r" % (row,), index) from None

        if _is_missing(entity_id):
            raise ValidationError("empty entity id", index)
        if _is_missing(item):
            raise ValidationError("empty item label for entity %r" % (entity_id,), index)

        item = str(item)
        if item == "":
            raise ValidationError("empty item label for entity %r" % (entity_id,), index)
        records.append((entity_id, item))

    return pd.DataFrame(records, columns=[ENTITY, ITEM])
