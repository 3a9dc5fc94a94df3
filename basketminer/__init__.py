import logging

from basketminer.Associations import Associations
from basketminer.BasketMiner import BasketMiner
from basketminer.Exceptions import BasketMinerError, InvalidParameter, MiningAborted, ValidationError
from basketminer.InterestMeasures import annotate, annotate_all, filter_rules
from basketminer.ItemsetMiner import ItemsetMiner
from basketminer.ItemsetRec import ItemsetRec
from basketminer.ParameterSweep import sweep
from basketminer.RuleDeduplicator import RuleDeduplicator
from basketminer.RuleGenerator import RuleGenerator
from basketminer.RuleRanker import RuleRanker, top_n
from basketminer.RuleRec import RuleRec
from basketminer.TransactionStore import TransactionStore, build

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
