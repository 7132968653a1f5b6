from __future__ import annotations

import pytest

from folio.explorer.fuzzy import DEFAULT_KEYS, FuzzySearcher, SearchKey, match_score
from tests.helpers.content import make_item


@pytest.mark.parametrize(
    ("pattern", "text", "expected"),
    [
        ("auto", "Automation pipeline", 0.0),
        ("PIPE", "automation pipeline", 0.0),
        ("", "anything", 0.0),
        ("automaton", "Automation pipeline", 1 / 9),
        ("zzzzz", "Automation pipeline", 1.0),
    ],
)
def test_match_score(pattern, text, expected):
    assert match_score(pattern, text) == pytest.approx(expected)


def test_match_score_ignores_location():
    far = "x" * 200 + " kubernetes"

    assert match_score("kubernetes", far) == 0.0
    assert match_score("kubernets", far) == pytest.approx(1 / 9)


def test_default_key_weights():
    assert {key.name: key.weight for key in DEFAULT_KEYS} == {
        "title": 0.55,
        "summary": 0.30,
        "tags": 0.10,
        "type": 0.05,
    }


def test_typo_matches_and_nonsense_does_not():
    searcher = FuzzySearcher([make_item("pipeline", title="Automation pipeline")])

    assert [r.item.id for r in searcher.search("automaton")] == ["pipeline"]
    assert searcher.search("zzzzz") == []


def test_matches_tags_and_type():
    items = [
        make_item("siem", title="Log platform", tags=["Splunk", "Sigma"]),
        make_item("vision", title="Leaf classifier", type="ai"),
    ]
    searcher = FuzzySearcher(items)

    assert [r.item.id for r in searcher.search("splunk")] == ["siem"]
    assert [r.item.id for r in searcher.search("ai")] == ["vision"]


def test_title_hit_ranks_above_summary_hit():
    items = [
        make_item("model", title="Homelab", summary="A threat model for my network"),
        make_item("hunting", title="Threat hunting notes", summary="Logs."),
    ]
    searcher = FuzzySearcher(items)

    results = searcher.search("threat")

    assert [r.item.id for r in results] == ["hunting", "model"]
    assert results[0].score < results[1].score
    assert results[1].ref_index == 0


def test_equal_scores_keep_input_order():
    items = [make_item(f"item-{n}", title="Incident response") for n in range(4)]
    searcher = FuzzySearcher(items)

    assert [r.ref_index for r in searcher.search("incident")] == [0, 1, 2, 3]


def test_threshold_controls_tolerance():
    items = [make_item("pipeline", title="Automation pipeline")]

    assert FuzzySearcher(items, threshold=0.05).search("automaton") == []
    assert FuzzySearcher(items, threshold=0.2).search("automaton")


def test_missing_fields_are_skipped():
    searcher = FuzzySearcher([make_item("bare", title="Bare")])

    assert searcher.score("bare", searcher.items[0]) is not None
    assert searcher.score("summary text", searcher.items[0]) is None


def test_keys_need_positive_weight():
    with pytest.raises(ValueError, match="positive"):
        FuzzySearcher([], keys=[SearchKey("title", 0)])
