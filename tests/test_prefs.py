import pytest

from treceval_measures.prefs import (
    EquivalenceClass,
    JudgmentGroupPrefs,
    ResultsPrefs,
    prefs_avgjg,
    prefs_avgjg_imp,
    prefs_avgjg_ret,
    prefs_avgjg_rnonrel,
    prefs_avgjg_rnonrel_ret,
)


def _jg(**kwargs):
    base = dict(
        num_prefs_fulfilled_ret=3,
        num_prefs_possible_ret=5,
        num_prefs_fulfilled_imp=1,
        num_prefs_possible_imp=2,
        num_prefs_possible_notoccur=3,
    )
    base.update(kwargs)
    return JudgmentGroupPrefs(**base)


def test_prefs_avgjg_single_group_ratio():
    jg = _jg()
    rp = ResultsPrefs(jgs=[jg])
    assert prefs_avgjg(rp) == pytest.approx((3 + 1) / (5 + 2 + 3))


def test_prefs_imp_ignores_notoccur():
    a = ResultsPrefs(jgs=[_jg(num_prefs_possible_notoccur=0)])
    b = ResultsPrefs(jgs=[_jg(num_prefs_possible_notoccur=50)])
    assert prefs_avgjg_imp(a) == prefs_avgjg_imp(b)
    assert prefs_avgjg(a) > prefs_avgjg(b)


def test_prefs_ret_ignores_implied_counts():
    a = ResultsPrefs(jgs=[_jg(num_prefs_fulfilled_imp=0, num_prefs_possible_imp=0)])
    b = ResultsPrefs(jgs=[_jg(num_prefs_fulfilled_imp=7, num_prefs_possible_imp=9)])
    assert prefs_avgjg_ret(a) == prefs_avgjg_ret(b)
    assert prefs_avgjg_ret(a) == pytest.approx(3 / 5)


def test_average_over_groups_is_mean_of_each():
    g1 = _jg()
    g2 = _jg(num_prefs_fulfilled_ret=1, num_prefs_possible_ret=4)
    both = prefs_avgjg(ResultsPrefs(jgs=[g1, g2]))
    one = prefs_avgjg(ResultsPrefs(jgs=[g1]))
    two = prefs_avgjg(ResultsPrefs(jgs=[g2]))
    assert both == pytest.approx((one + two) / 2)


def test_group_without_possible_prefs_still_counts_in_average():
    g1 = _jg()
    empty = JudgmentGroupPrefs()
    alone = prefs_avgjg_ret(ResultsPrefs(jgs=[g1]))
    with_empty = prefs_avgjg_ret(ResultsPrefs(jgs=[g1, empty]))
    assert with_empty == pytest.approx(alone / 2)


@pytest.mark.parametrize(
    "measure",
    [prefs_avgjg, prefs_avgjg_imp, prefs_avgjg_ret,
     prefs_avgjg_rnonrel, prefs_avgjg_rnonrel_ret],
)
def test_no_groups_scores_zero(measure):
    assert measure(ResultsPrefs()) == 0.0


def test_rnonrel_equals_avgjg_when_r_equals_n():
    jg = _jg(num_rel=4, num_nonrel=4, num_rel_ret=3)
    rp = ResultsPrefs(jgs=[jg])
    assert prefs_avgjg_rnonrel(rp) == pytest.approx(prefs_avgjg(rp))


def test_rnonrel_ret_equals_ret_when_r_equals_n():
    jg = _jg(num_rel_ret=2, num_nonrel_ret=2, num_rel=5)
    rp = ResultsPrefs(jgs=[jg])
    assert prefs_avgjg_rnonrel_ret(rp) == pytest.approx(prefs_avgjg_ret(rp))


def test_rnonrel_adds_fulfilled_prefs_when_few_nonrel():
    jg = JudgmentGroupPrefs(
        num_prefs_fulfilled_ret=2,
        num_prefs_possible_ret=3,
        num_rel=3,
        num_nonrel=1,
        num_rel_ret=2,
    )
    assert prefs_avgjg_rnonrel(ResultsPrefs(jgs=[jg])) == pytest.approx(2 / 3)


def test_rnonrel_recounts_from_equivalence_classes():
    jg = JudgmentGroupPrefs(
        num_rel=2,
        num_nonrel=3,
        ecs=[
            EquivalenceClass(2.0, [0]),
            EquivalenceClass(1.0, [1]),
            EquivalenceClass(0.0, [2, 3, 4]),
        ],
    )
    rp = ResultsPrefs(jgs=[jg], num_judged_ret=5)
    assert prefs_avgjg_rnonrel(rp) == pytest.approx(6 / 11)


def test_rnonrel_ret_ignores_unretrieved_docs_in_classes():
    ecs = [
        EquivalenceClass(1.0, [0]),
        EquivalenceClass(0.0, [1, 2, 3]),
    ]
    jg = JudgmentGroupPrefs(num_rel=1, num_rel_ret=1, num_nonrel_ret=3, ecs=ecs)
    short = ResultsPrefs(jgs=[jg], num_judged_ret=4)
    extra = JudgmentGroupPrefs(
        num_rel=1,
        num_rel_ret=1,
        num_nonrel_ret=3,
        ecs=[EquivalenceClass(1.0, [0]), EquivalenceClass(0.0, [1, 2, 3, 9, 10])],
    )
    longer = ResultsPrefs(jgs=[extra], num_judged_ret=4)
    assert prefs_avgjg_rnonrel_ret(short) == prefs_avgjg_rnonrel_ret(longer)
    assert 0.0 < prefs_avgjg_rnonrel_ret(short) <= 1.0


def _array_jg(rel_array, prefs_pairs, num_rel, num_nonrel):
    size = len(rel_array)
    array = [[0] * size for _ in range(size)]
    for i, j in prefs_pairs:
        array[i][j] = 1
    return JudgmentGroupPrefs(
        num_rel=num_rel,
        num_nonrel=num_nonrel,
        num_rel_ret=num_rel,
        num_nonrel_ret=num_nonrel,
        prefs_array=array,
        rel_array=rel_array,
    )


def test_rnonrel_prefs_array_perfect_ranking_scores_one():
    jg = _array_jg([1.0, 0.0, 0.0], [(0, 1), (0, 2)], num_rel=1, num_nonrel=2)
    rp = ResultsPrefs(jgs=[jg], num_judged_ret=3)
    assert prefs_avgjg_rnonrel(rp) == 1.0
    assert prefs_avgjg_rnonrel_ret(rp) == 1.0


def test_rnonrel_prefs_array_worst_ranking_scores_zero():
    jg = _array_jg([0.0, 0.0, 1.0], [(2, 0), (2, 1)], num_rel=1, num_nonrel=2)
    rp = ResultsPrefs(jgs=[jg], num_judged_ret=3)
    assert prefs_avgjg_rnonrel(rp) == 0.0
    assert prefs_avgjg_rnonrel_ret(rp) == 0.0


def test_rnonrel_prefs_array_unretrieved_relevant_is_failure():
    jg = _array_jg([0.0, 0.0, 1.0], [(2, 0), (2, 1)], num_rel=1, num_nonrel=2)
    rp = ResultsPrefs(jgs=[jg], num_judged_ret=2)
    assert prefs_avgjg_rnonrel(rp) == 0.0


def test_equivalence_class_and_group_sizes():
    ec = EquivalenceClass(0.0, [4, 5, 6])
    jg = _array_jg([1.0, 0.0], [(0, 1)], num_rel=1, num_nonrel=1)
    rp = ResultsPrefs(jgs=[jg, jg])
    assert ec.num_in_ec == 3
    assert jg.num_judged == 2
    assert rp.num_jgs == 2