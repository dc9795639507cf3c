# %% [markdown]
# # typeflow: Quickstart
#
# **Finding "Ireland (Republic)" when the user typed "rep of ireland"**
#
# ---
#
# ## The Problem
#
# You have a long list of names and a user who types whatever comes to mind:
#
# ```
# "irland"          vs  "Ireland"
# "nothern ireland" vs  "Northern Ireland"
# "rep of ireland"  vs  "Ireland (Republic)"
# ```
#
# Comparing the query against every name works, but names that share a
# prefix ("Iran", "Iraq", "Ireland") repeat the same comparison work.
# **typeflow** stores the names in a prefix index and keeps one incremental
# edit distance state in step with a walk over it, so shared prefixes are
# only compared once.
#
# ---
#
# ## Table of Contents
#
# | Part | Topic | Description |
# |------|-------|-------------|
# | 1 | Edit Distance | One-shot distance and similarity |
# | 2 | Incremental State | Extend, roll back, lower bounds |
# | 3 | Search | FuzzySearchEngine, filters, pruning modes |
# | 4 | Polars | FuzzyIndex over Series and DataFrames |

# %%
import logging
import time

import polars as pl

import typeflow as tf
from typeflow import batch

COUNTRIES = [
    "England", "Finland", "France", "Iceland", "India", "Iran", "Iraq",
    "Ireland", "Ireland (Republic)", "Israel", "Italy", "Northern Ireland",
    "Poland", "Scotland", "Switzerland", "Thailand", "United Kingdom",
    "United States", "Wales",
]

# %% [markdown]
# ---
# ## Part 1: Edit Distance
#
# The Levenshtein distance counts single-character insertions, deletions and
# substitutions. Similarity normalizes it by the longer string.

# %%
print(tf.levenshtein("kitten", "sitting"))  # 3
print(tf.levenshtein_similarity("ireland (republic)", "rep of ireland"))  # 0.333...
print(tf.levenshtein("Hello", "HELLO", normalize="lowercase"))  # 0

# %% [markdown]
# `max_distance` stops early once the answer is known to be too large.

# %%
print(tf.levenshtein("a" * 2000, "b" * 2000, max_distance=3))  # 4

# %% [markdown]
# ---
# ## Part 2: Incremental State
#
# An `EditDistanceState` compares a growing source against a target. Only the
# new rows are computed on each `extend`, and `rollback_by` returns to any
# earlier prefix.

# %%
state = tf.EditDistanceState("rep of ireland")
for delta in ["ir", "e", "land", " (republic)"]:
    state.extend(delta)
    print(f"{state.source!r:24} distance={state.distance:2} lower_bound={state.lower_bound()}")

state.rollback_by(len(" (republic)"))
print(state)

# %% [markdown]
# `TWO_ROW` keeps only two rows of the matrix. It uses less memory but
# recomputes the rows on every change.

# %%
compact = tf.EditDistanceState("rep of ireland", strategy="two_row")
compact.extend("ireland (republic)")
print(compact.distance)  # 12

# %% [markdown]
# ---
# ## Part 3: Search
#
# Filters turn each candidate into its index key. The query is compared as
# given, so normalize it the same way yourself.

# %%
engine = tf.FuzzySearchEngine(filters=[tf.lowercase_filter])
engine.set_source(COUNTRIES)

for query, threshold in [("irland", 0.6), ("rep of ireland", 0.32), ("nothern ireland", 0.7)]:
    print(f"\n{query!r} (>= {threshold}):")
    for m in engine.find_best_matches(query, threshold, limit=5):
        print(f"  [{m.similarity:.0%}] {m.value}")

# %% [markdown]
# ### Pruning modes
#
# - `exact` (default) skips a subtree only when no key below it can reach
#   the threshold.
# - `heuristic` skips everything below a key that missed the threshold. It is
#   faster and can miss longer keys.
# - `none` visits every node.

# %%
for pruning in tf.PruningMode:
    e = tf.FuzzySearchEngine(pruning=pruning)
    e.set_source(["a", "abcd"])
    print(pruning.value, [m.to_dict() for m in e.find_match("abcd", 0.5)])

# %% [markdown]
# Debug logging reports how many nodes each search visited and pruned.

# %%
logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
engine.find_match("rep of ireland", 0.32)
logging.getLogger().setLevel(logging.WARNING)

# %% [markdown]
# ### Quick comparisons without an engine

# %%
print(batch.best_matches(["apple", "apply", "banana"], "appel", limit=2))
print(batch.pairwise(["hello", "world"], ["hallo", "word"]))

# %% [markdown]
# ---
# ## Part 4: Polars
#
# `FuzzyIndex` builds an engine from a Series and normalizes queries the same
# way as the indexed items.

# %%
index = tf.FuzzyIndex.from_series(pl.Series(COUNTRIES), normalize="lowercase")
queries = pl.Series(["Irland", "Nothern Ireland", None, "Swizerland"])
print(index.search_series(queries, min_similarity=0.6))

# %%
words = [f"{c} {i}" for c in COUNTRIES for i in range(500)]
big = tf.FuzzyIndex(words, normalize="lowercase")
start = time.perf_counter()
hits = big.search("irland 42", min_similarity=0.8)
print(f"{len(words)} items, {len(hits)} hits in {time.perf_counter() - start:.3f}s")
