import logging

import pandas as pd

from basketminer import InterestMeasures
from basketminer.Associations import Associations
from basketminer.ItemsetMiner import ItemsetMiner
from basketminer.Parameters import (DEFAULT_MAXLEN, DEFAULT_TOP_N, check_confidence, check_positive_int,
                                    check_support)
from basketminer.RuleDeduplicator import RuleDeduplicator
from basketminer.RuleGenerator import RuleGenerator
from basketminer.RuleRanker import RuleRanker
from basketminer.TransactionStore import ENTITY, ITEM, TransactionStore

logger = logging.getLogger(__name__)


class BasketMiner:
    """Market-basket analysis of a transaction log.

    Runs the whole pipeline: transactions -> frequent itemsets (Apriori) -> rules
    meeting min_confidence -> lift / leverage / conviction -> redundancy pruning
    -> top-N ranking. Every stage takes the previous stage's output and returns a
    new value; nothing is kept on the miner between two calls to fit.

    This program is free software: you can redistribute it and/or modify it under the terms of the
    GNU General Public License as published by the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the
    implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
    for more details.

    You should have received a copy of the GNU General Public License along with this program.
    If not, see <http://www.gnu.org/licenses/>.
    """

    """
    :param
    @min_support - minimum fraction of transactions an itemset must appear in, in (0, 1]
    @min_confidence - minimum confidence of a rule, in [0, 1]
    @max_antecedent_length - largest itemset size mined and largest antecedent generated.  By default it is 10
    @top_n - number of rules in the ranked view.  By default it is 20
    @rank_by - measure the ranked view is sorted on.  By default it is confidence
    @deduplicate - False: keep redundant rules in the ranked view
    @dedup_semantics - "dominance" or "general", see RuleDeduplicator
    @n_jobs - threads used to count candidate supports
    @abort - optional threading.Event-like object; once set, mining stops before the next level
    """
    def __init__(self,
                 min_support,
                 min_confidence,
                 max_antecedent_length=DEFAULT_MAXLEN,
                 top_n=DEFAULT_TOP_N,
                 rank_by="confidence",
                 deduplicate=True,
                 dedup_semantics="dominance",
                 n_jobs=1,
                 abort=None
                 ):
        self.min_support = check_support(min_support)
        self.min_confidence = check_confidence(min_confidence)
        self.max_antecedent_length = check_positive_int(max_antecedent_length, "max_antecedent_length")
        self.top_n = check_positive_int(top_n, "top_n")
        self.deduplicate = deduplicate

        self.miner = ItemsetMiner(maxlen=self.max_antecedent_length, n_jobs=n_jobs, abort=abort)
        self.generator = RuleGenerator(maxlen=self.max_antecedent_length)
        self.deduplicator = RuleDeduplicator(dedup_semantics)
        self.ranker = RuleRanker(rank_by)

    def fit(self, data, entity_col=ENTITY, item_col=ITEM):
        """
        :param
        @data - a TransactionStore, a DataFrame with entity_col and item_col columns,
            or an iterable of (entity_id, item) rows
        """
        store = as_store(data, entity_col, item_col)

        itemsets = self.miner.mine(store, self.min_support)
        rules = self.generator.generate(itemsets, store, self.min_confidence)
        rules = InterestMeasures.annotate_all(rules, store)

        if self.deduplicate:
            pruned = self.deduplicator.prune(rules)
        else:
            pruned = self.ranker.rank(rules)
        ranked = self.ranker.top_n(pruned, self.top_n)

        logger.info(f"Mined {len(itemsets)} itemsets and {len(rules)} rules from {store.size()} transactions, "
                    f"{len(ranked)} in the top {self.top_n} by {self.ranker.by}")

        return Associations(self.min_support, self.min_confidence, self.max_antecedent_length,
                            itemsets=itemsets, rules=rules, pruned_rules=pruned, ranked_rules=ranked,
                            rank_by=self.ranker.by)


def as_store(data, entity_col=ENTITY, item_col=ITEM):
    if isinstance(data, TransactionStore):
        return data
    if isinstance(data, pd.DataFrame):
        return TransactionStore.from_frame(data, entity_col, item_col)
    return TransactionStore.build(data)
