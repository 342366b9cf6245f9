import math

import pytest

from treceval_measures.counts import ResRels
from treceval_measures.graded import g_measure, ndcg_rel, rndcg


def _binary(results, num_nonrel, num_rel):
    num_rel_ret = sum(1 for rel in results if rel >= 1)
    return ResRels(
        results_rel_list=results,
        rel_levels=[num_nonrel, num_rel],
        num_rel=num_rel,
        num_rel_ret=num_rel_ret,
    )


@pytest.mark.parametrize("measure", [ndcg_rel, rndcg, g_measure])
def test_perfect_ranking_scores_one(measure):
    res_rels = _binary([1, 1, 0], num_nonrel=1, num_rel=2)
    assert measure(res_rels) == pytest.approx(1.0)


@pytest.mark.parametrize("measure", [ndcg_rel, g_measure])
def test_nothing_retrieved_scores_zero(measure):
    res_rels = _binary([], num_nonrel=0, num_rel=2)
    assert measure(res_rels) == 0.0


def test_rndcg_nothing_retrieved_is_zero():
    res_rels = _binary([], num_nonrel=0, num_rel=2)
    assert rndcg(res_rels) == 0.0


def test_rndcg_no_relevant_docs_is_zero():
    res_rels = ResRels(results_rel_list=[0, 0], rel_levels=[2], num_rel=0)
    assert rndcg(res_rels) == 0.0


def test_rndcg_measures_at_level_boundary_only():
    res_rels = _binary([0, 1], num_nonrel=1, num_rel=1)
    assert rndcg(res_rels) == 0.0


@pytest.mark.parametrize("measure", [ndcg_rel, rndcg, g_measure])
def test_worse_ranking_scores_lower(measure):
    good = _binary([1, 1, 0, 0], num_nonrel=2, num_rel=2)
    bad = _binary([0, 0, 1, 1], num_nonrel=2, num_rel=2)
    assert 0.0 <= measure(bad) < measure(good) <= 1.0 + 1e-12


def test_ndcg_rel_between_zero_and_one_with_missing_relevant():
    res_rels = _binary([0, 1, 0], num_nonrel=2, num_rel=3)
    value = ndcg_rel(res_rels)
    assert 0.0 < value < 1.0


@pytest.mark.parametrize("measure", [ndcg_rel, rndcg])
def test_scaling_gains_does_not_change_normalized_measures(measure):
    res_rels = _binary([0, 1, 0, 1], num_nonrel=2, num_rel=3)
    default = measure(res_rels)
    scaled = measure(res_rels, {1: 5.0})
    assert scaled == pytest.approx(default)


def test_gain_pairs_accept_string_levels():
    res_rels = _binary([0, 1, 1], num_nonrel=1, num_rel=2)
    assert g_measure(res_rels, [("1", 2.0)]) == pytest.approx(
        g_measure(res_rels, {1: 2.0})
    )


def test_graded_levels_prefer_higher_gain_first():
    rel_levels = [1, 1, 1]
    high_first = ResRels([2, 1, 0], rel_levels, num_rel=2, num_rel_ret=2)
    low_first = ResRels([1, 2, 0], rel_levels, num_rel=2, num_rel_ret=2)
    assert ndcg_rel(high_first) == pytest.approx(1.0)
    assert ndcg_rel(low_first) < ndcg_rel(high_first)
    assert g_measure(low_first) < g_measure(high_first)


def test_non_positive_gains_give_no_score():
    res_rels = _binary([1, 0], num_nonrel=1, num_rel=1)
    pairs = {1: -1.0}
    assert ndcg_rel(res_rels, pairs) == 0.0
    assert g_measure(res_rels, pairs) == 0.0
    assert math.isnan(rndcg(res_rels, pairs))