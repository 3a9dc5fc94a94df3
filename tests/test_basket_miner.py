import threading

import pandas as pd
import pytest

from basketminer import BasketMiner
from basketminer.Associations import FRAME_COLUMNS
from basketminer.Exceptions import InvalidParameter, MiningAborted

from conftest import scenario_rows


def test_fit_scenario(scenario_store):
    associations = BasketMiner(min_support=0.5, min_confidence=0.6).fit(scenario_store)

    assert len(associations.itemsets) == 7
    assert len(associations.rules) == 12
    assert [rule.key for rule in associations.pruned_rules] == [
        (("X",), ("Y",)),
        (("X",), ("Z",)),
        (("Y",), ("Z",)),
        (("X", "Y"), ("Z",)),
    ]
    assert list(associations) == list(associations.ranked_rules)
    assert all(rule.annotated for rule in associations.rules)


def test_fit_accepts_rows_and_frames(scenario_store):
    miner = BasketMiner(0.5, 0.6)
    frame = pd.DataFrame(scenario_rows(), columns=["CustomerID", "Description"])

    from_store = miner.fit(scenario_store)
    from_rows = miner.fit(scenario_rows())
    from_frame = miner.fit(frame, entity_col="CustomerID", item_col="Description")

    assert from_store.ranked_rules == from_rows.ranked_rules == from_frame.ranked_rules


def test_fit_is_idempotent(random_store):
    miner = BasketMiner(0.05, 0.3, top_n=10)

    first, second = miner.fit(random_store), miner.fit(random_store)

    assert set(first.rules) == set(second.rules)
    assert first.ranked_rules == second.ranked_rules


def test_top_n_and_rank_by(random_store):
    associations = BasketMiner(0.05, 0.2, top_n=5, rank_by="lift").fit(random_store)

    assert len(associations) == 5
    lifts = [rule.lift for rule in associations]
    assert lifts == sorted(lifts, reverse=True)
    assert max(rule.lift for rule in associations.pruned_rules) == lifts[0]


def test_without_deduplication(scenario_store):
    associations = BasketMiner(0.5, 0.6, deduplicate=False, top_n=50).fit(scenario_store)

    assert len(associations.pruned_rules) == 12
    assert len(associations.ranked_rules) == 12


def test_general_semantics(scenario_store):
    associations = BasketMiner(0.5, 0.6, dedup_semantics="general").fit(scenario_store)

    assert len(associations.pruned_rules) == 3


def test_max_antecedent_length(scenario_store):
    associations = BasketMiner(0.5, 0.0, max_antecedent_length=1).fit(scenario_store)

    assert max(len(itemset) for itemset in associations.itemsets) == 1
    assert associations.rules == ()


def test_strict_thresholds_give_an_empty_result(scenario_store):
    associations = BasketMiner(1.0, 1.0).fit(scenario_store)

    assert associations.empty
    assert len(associations) == 0
    frame = associations.to_frame()
    assert frame.empty
    assert list(frame.columns) == FRAME_COLUMNS


def test_to_frame(scenario_store):
    associations = BasketMiner(0.5, 0.6).fit(scenario_store)

    frame = associations.to_frame()
    assert list(frame.columns) == FRAME_COLUMNS
    assert len(frame) == 4
    assert frame.loc[0, "antecedents"] == frozenset({"X"})
    assert frame.loc[0, "confidence"] == pytest.approx(0.8)
    assert len(associations.to_frame("all")) == 12
    assert len(associations.to_frame("pruned")) == 4
    with pytest.raises(ValueError):
        associations.to_frame("best")


def test_rules_for(scenario_store):
    associations = BasketMiner(0.5, 0.6, deduplicate=False).fit(scenario_store)

    rules = associations.rules_for("Z")

    assert [rule.key for rule in rules] == [
        (("Z",), ("X",)),
        (("Z",), ("Y",)),
        (("X", "Z"), ("Y",)),
        (("Y", "Z"), ("X",)),
        (("Z",), ("X", "Y")),
    ]
    assert associations.rules_for("unknown") == []


@pytest.mark.parametrize("kwargs", [
    dict(min_support=0, min_confidence=0.5),
    dict(min_support=0.5, min_confidence=1.2),
    dict(min_support=0.5, min_confidence=0.5, top_n=0),
    dict(min_support=0.5, min_confidence=0.5, max_antecedent_length=0),
    dict(min_support=0.5, min_confidence=0.5, rank_by="zhang"),
    dict(min_support=0.5, min_confidence=0.5, dedup_semantics="loose"),
    dict(min_support=0.5, min_confidence=0.5, n_jobs=0),
])
def test_invalid_configuration(kwargs):
    with pytest.raises(InvalidParameter):
        BasketMiner(**kwargs)


def test_abort(scenario_store):
    abort = threading.Event()
    abort.set()

    with pytest.raises(MiningAborted):
        BasketMiner(0.5, 0.6, abort=abort).fit(scenario_store)


def test_licence_notice_matches_package_metadata():
    assert "GNU General Public License" in BasketMiner.__doc__
    assert "version 3 of the License" in BasketMiner.__doc__
