# treceval_measures

Measures for evaluating a ranked retrieval result for one query against
relevance judgments, as used in TREC-style experiments.

Each measure is a plain function. It takes a per-query summary of a
ranking and returns the score for that query: a `ResRels` from
`treceval_measures.counts` for most measures, a sequence of `ResRels`
(one per judgment group) for the `*_avgjg` measures, and a `ResultsPrefs`
for the preference measures.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Example

```python
from treceval_measures.counts import ResRels
from treceval_measures.precision import average_precision, precision_at

# Ranks 1 and 3 are relevant; 5 judged docs at level 0, 3 at level 1.
rr = ResRels(results_rel_list=[1, 0, 1], rel_levels=[5, 3],
             num_rel=3, num_rel_ret=2)

average_precision(rr)        # (1/1 + 2/3) / 3
precision_at(rr, [2, 1])     # {1: 1.0, 2: 0.5}
```

`ResRels.num_ret` defaults to the length of `results_rel_list`;
`rel_levels[i]` is the number of judged documents at relevance level `i`.

## Modules

- `treceval_measures.counts`: the `ResRels` summary and the count
  measures `num_ret`, `num_rel`, `num_rel_ret`, `num_nonrel_judged_ret`,
  `average_num_q(num_queries, num_q_rels, average_complete)` and
  `total_num_rel(query_judgments)`. `total_num_rel` takes
  `(rel_format, judgments)` items for the formats `"qrels"` and
  `"qrels_jg"` and raises `ValueError` for any other format.
- `treceval_measures.precision`: `average_precision`,
  `gm_average_precision`, `average_precision_avgjg`, `r_precision`,
  `precision_at`, `precision_at_avgjg`, `average_precision_at` (map at
  cutoffs), `bin_g` and `inf_ap`, plus the constants `RELVALUE_NONPOOL`,
  `RELVALUE_UNJUDGED`, `MIN_GEO_MEAN` and `INFAP_EPSILON`.
- `treceval_measures.interpolated`: `iprec_at_recall`, `eleven_pt_avg`,
  `rprec_mult` and `rprec_mult_avgjg`, with defaults
  `DEFAULT_RECALL_CUTOFFS` and `DEFAULT_RPREC_MULT_CUTOFFS`.
- `treceval_measures.judged`: `bpref` and `gm_bpref`.
- `treceval_measures.gains`: gain tables (`RelGain`, `Gains`,
  `setup_gains`) and `ndcg`, `ndcg_p` and `ndcg_cut` (default cutoffs
  `DEFAULT_NDCG_CUTOFFS`).
- `treceval_measures.graded`: the experimental measures `ndcg_rel`,
  `rndcg` and `g_measure`.
- `treceval_measures.prefs`: `EquivalenceClass`, `JudgmentGroupPrefs`,
  `ResultsPrefs` and the measures `prefs_avgjg`, `prefs_avgjg_imp`,
  `prefs_avgjg_ret`, `prefs_avgjg_rnonrel` and `prefs_avgjg_rnonrel_ret`.
- `treceval_measures.zscores`: `ZScore`, `QueryZScores`,
  `ZScoreFormatError`, `parse_zscores(text)` and `read_zscores(path)`.

## Conventions

- Relevance levels are integers. A document counts as relevant when its
  level is at or above `relevance_level` (default 1).
- `RELVALUE_NONPOOL` (-1) marks a retrieved document that was not in the
  judgment pool; `RELVALUE_UNJUDGED` (-2) marks a pooled document that was
  never judged. `bpref`, `gm_bpref` and `inf_ap` skip both.
- Measures that take cutoffs return a dict with one value per cutoff,
  keyed by cutoff in ascending order. Integer cutoffs must be positive and
  without duplicates, and an empty list of cutoffs raises `ValueError`.
- The `gm_*` measures return the logarithm of the score (bounded below by
  `MIN_GEO_MEAN`), ready for geometric averaging over queries.
- Gain pairs, given as a mapping or an iterable of `(rel_level, gain)`
  pairs, override the default gain of a level, which is the level itself.
  The level may be an integer or text starting with one.

## Z-score files

A z-score file holds one line per query and measure:

```
qid  measure_name  mean  stddev
```

Fields are separated by whitespace. `read_zscores(path)` and
`parse_zscores(text)` return a list of `QueryZScores`, sorted by query id,
each holding its `ZScore` entries sorted by measure name. Empty input, or
a line without exactly four fields, raises `ZScoreFormatError`, whose
`line` attribute gives the offending line number.

## What this package does not do

It has no command-line program and does not read qrels or result files.
The caller builds the `ResRels`, judgment-group and `ResultsPrefs`
summaries of each query; the package does not derive preference counts
from judgments, average scores over queries, or format results for
printing.