import random

import numpy as np
import pytest

from basketminer.Exceptions import InvalidParameter
from basketminer.InterestMeasures import annotate_all
from basketminer.ItemsetMiner import mine
from basketminer.RuleDeduplicator import RuleDeduplicator, is_subset_matrix, prune
from basketminer.RuleGenerator import generate
from basketminer.RuleRanker import rank_key
from basketminer.TransactionStore import build


def scenario_rules(store):
    return annotate_all(generate(mine(store, 0.5), store, 0.6), store)


def keys(rules):
    return [rule.key for rule in rules]


def test_dominance_on_scenario(scenario_store):
    kept = prune(scenario_rules(scenario_store))

    assert keys(kept) == [
        (("X",), ("Y",)),
        (("X",), ("Z",)),
        (("Y",), ("Z",)),
        (("X", "Y"), ("Z",)),
    ]


def test_general_on_scenario(scenario_store):
    kept = prune(scenario_rules(scenario_store), semantics="general")

    assert keys(kept) == [
        (("X",), ("Y",)),
        (("X",), ("Z",)),
        (("Y",), ("Z",)),
    ]


@pytest.mark.parametrize("semantics", ["dominance", "general"])
def test_never_increases_rule_count(random_store, semantics):
    rules = annotate_all(generate(mine(random_store, 0.05), random_store, 0.2), random_store)

    kept = prune(rules, semantics)

    assert len(kept) <= len(rules)
    assert set(kept) <= set(rules)


@pytest.mark.parametrize("semantics", ["dominance", "general"])
def test_result_does_not_depend_on_input_order(random_store, semantics):
    rules = annotate_all(generate(mine(random_store, 0.05), random_store, 0.2), random_store)
    shuffled = list(rules)
    random.Random(11).shuffle(shuffled)

    assert keys(prune(rules, semantics)) == keys(prune(shuffled, semantics))


def test_best_rule_per_itemset_survives(random_store):
    rules = annotate_all(generate(mine(random_store, 0.05), random_store, 0.2), random_store)
    kept = set(prune(rules))

    best = {}
    for rule in sorted(rules, key=rank_key):
        best.setdefault(rule.items, rule)

    for items, rule in best.items():
        if rule in kept:
            continue
        # only a rule over a strictly larger itemset, as supported and as confident, can remove it
        assert any(other.items > items and other.support >= rule.support
                   and other.confidence >= rule.confidence for other in rules)


def test_dominance_keeps_a_rule_with_better_support(scenario_store):
    rules = {rule.key: rule for rule in scenario_rules(scenario_store)}
    pair = rules[(("X",), ("Y",))]
    triple = rules[(("X", "Y"), ("Z",))]

    # the pair rule is more confident and better supported than the triple rule
    assert keys(prune([triple, pair])) == [pair.key, triple.key]


def test_duplicate_rules_are_removed_once(scenario_store):
    rules = scenario_rules(scenario_store)

    assert keys(prune(rules + rules)) == keys(prune(rules))


def test_small_inputs(scenario_store):
    rule = scenario_rules(scenario_store)[0]

    assert prune([]) == []
    assert prune([rule]) == [rule]


def test_unknown_semantics():
    with pytest.raises(InvalidParameter):
        RuleDeduplicator("strict")


def test_is_subset_matrix():
    membership = np.array([
        [True, False, False],
        [True, True, False],
        [False, True, True],
    ])

    assert is_subset_matrix(membership, membership).tolist() == [
        [True, True, False],
        [False, True, False],
        [False, False, True],
    ]


@pytest.mark.parametrize("label", ["b", "z"])
def test_dominance_does_not_depend_on_item_names(label):
    store = build([("t1", "x"), ("t1", "y"), ("t1", label),
                   ("t2", "x"), ("t2", "y"), ("t2", label),
                   ("t3", "y"), ("t4", label)])
    rules = annotate_all(generate(mine(store, 0.25), store, 0.0), store)
    by_key = {rule.key: rule for rule in rules}
    pair = by_key[(("x",), ("y",))]
    assert (pair.support, pair.confidence) == (0.5, 1.0)

    kept = prune(rules)

    # every rule shares support 0.5 with a full-confidence rule over {x, y, label}
    assert pair not in kept
    assert len(kept) == 1
    assert kept[0].items == {"x", "y", label}
    assert kept[0].confidence == 1.0


def test_strict_superset_removes_a_tied_rule_ranked_ahead():
    store = build([("t1", "a"), ("t1", "b"), ("t1", "c"), ("t2", "a"), ("t2", "b"), ("t2", "c")])
    rules = {rule.key: rule for rule in annotate_all(generate(mine(store, 0.5), store, 0.0), store)}
    pair = rules[(("a",), ("b",))]
    triple = rules[(("a",), ("b", "c"))]

    # the pair rule wins every tie-break yet is still contained in the triple rule
    assert rank_key(pair) < rank_key(triple)
    assert keys(prune([pair, triple])) == [triple.key]
