import json
import pytest
from .analysis import analyze_phrase
from .importer import build_index
from .index_store import IndexStore
from .ranking import rank, phrase_match, sloppy_gap, category_filter, MAPREDUCE, LUCENE

def build(tmp_path, docs):
    with open(tmp_path / 'pages.jsonl', 'w', encoding='utf8') as f:
        for doc in docs:
            f.write(json.dumps(doc) + '\n')

    store = IndexStore.open(tmp_path / 'index.db')
    build_index(store, tmp_path / 'pages.jsonl', tmp_path / 'index.txt')
    return store

def test_phrase_match():
    assert phrase_match([[0, 5], [6]]) == True
    assert phrase_match([[0], [2]]) == False
    assert phrase_match([[3], [2]]) == False
    assert phrase_match([[4]]) == True
    assert phrase_match([]) == False
    assert phrase_match(None) == False

    # Offsets leave room for stop words dropped from the query
    assert phrase_match([[1], [4]], [0, 3]) == True
    assert phrase_match([[1], [2]], [0, 3]) == False
    assert phrase_match([[7, 9], [10]], [2, 3]) == True

def test_sloppy_gap():
    assert sloppy_gap([[0], [1], [2]]) == 0
    assert sloppy_gap([[0], [3]]) == 2
    assert sloppy_gap([[0, 10], [12]]) == 1
    # Out of order doesn't match
    assert sloppy_gap([[5], [2]]) == None
    assert sloppy_gap([[0], [20]]) == None
    assert sloppy_gap([[0], [20]], slop=30) == 19
    assert sloppy_gap(None) == None

    assert sloppy_gap([[1], [4]], [0, 3]) == 0
    assert sloppy_gap([[1], [2]], [0, 3]) == 2
    assert sloppy_gap([[0], [2, 5]], [0, 3]) == 1

@pytest.mark.parametrize('method', [MAPREDUCE, LUCENE])
def test_phrase_boost(tmp_path, method):
    index = build(tmp_path, [
        {'id': 0, 'title': 'alpha gamma beta', 'content': 'alpha beta', 'categories': []},
        {'id': 1, 'title': 'alpha beta gamma', 'content': 'alpha beta', 'categories': []},
    ])

    ranked = rank(index, method, analyze_phrase('alpha beta'))

    assert [doc_id for doc_id, _ in ranked] == [1, 0]
    assert ranked[0][1] > ranked[1][1]

def test_mapreduce_needs_title_and_content(tmp_path):
    index = build(tmp_path, [
        {'id': 0, 'title': 'alpha', 'content': 'nothing to see', 'categories': []},
        {'id': 1, 'title': 'nothing', 'content': 'alpha', 'categories': []},
        {'id': 2, 'title': 'alpha', 'content': 'alpha', 'categories': []},
    ])

    assert [doc_id for doc_id, _ in rank(index, MAPREDUCE, analyze_phrase('alpha'))] == [2]
    assert [doc_id for doc_id, _ in rank(index, LUCENE, analyze_phrase('alpha'))] == [2, 0, 1]

def test_mapreduce_scores(tmp_path):
    index = build(tmp_path, [
        {'id': 0, 'title': 'alpha beta', 'content': 'alpha beta', 'categories': []},
        {'id': 1, 'title': 'alpha', 'content': 'beta', 'categories': []},
    ])

    scores = dict(rank(index, MAPREDUCE, analyze_phrase('alpha beta')))

    assert scores[0] == pytest.approx(20 + 5 + 0.5 * (2 + 1.05))
    assert scores[1] == pytest.approx(1 + 0.5 * 1)

def test_category_filter(tmp_path):
    index = build(tmp_path, [
        {'id': 0, 'title': 'foo', 'content': 'foo', 'categories': ['Sports', 'News']},
        {'id': 1, 'title': 'foo foo', 'content': 'foo foo foo', 'categories': ['Sports']},
        {'id': 2, 'title': 'bar', 'content': 'bar', 'categories': ['Breaking News']},
    ])

    assert category_filter(index, None) == None
    assert category_filter(index, []) == set()
    assert category_filter(index, analyze_phrase('news')) == {0, 2}
    assert category_filter(index, analyze_phrase('breaking news')) == {2}
    assert category_filter(index, analyze_phrase('news breaking')) == set()

    ranked = rank(index, MAPREDUCE, analyze_phrase('foo'), analyze_phrase('news'))
    assert [doc_id for doc_id, _ in ranked] == [0]

    # The category is required; the keyword phrases only add to the score
    ranked = rank(index, LUCENE, analyze_phrase('foo'), analyze_phrase('news'))
    assert [doc_id for doc_id, _ in ranked] == [0, 2]
    assert ranked[0][1] > ranked[1][1]

    # With a category, lucene doesn't need a keyword match
    assert [doc_id for doc_id, _ in rank(index, LUCENE, [], analyze_phrase('news'))] == [0, 2]
    assert rank(index, MAPREDUCE, [], analyze_phrase('news')) == []

def test_unknown_terms(tmp_path):
    index = build(tmp_path, [
        {'id': 0, 'title': 'foo', 'content': 'foo', 'categories': []},
    ])

    assert rank(index, MAPREDUCE, analyze_phrase('zebra')) == []
    assert rank(index, LUCENE, analyze_phrase('foo zebra')) == []
    assert rank(index, MAPREDUCE, []) == []

def test_ranking_is_deterministic(tmp_path):
    docs = [
        {'id': i, 'title': 'alpha beta', 'content': 'alpha {} beta'.format('x ' * (i % 3)), 'categories': []}
        for i in range(20)
    ]
    index = build(tmp_path, docs)

    for method in [MAPREDUCE, LUCENE]:
        first = rank(index, method, analyze_phrase('alpha beta'))
        assert first == rank(index, method, analyze_phrase('alpha beta'))

        # Ties are broken by doc id
        for (a, score_a), (b, score_b) in zip(first, first[1:]):
            assert score_a > score_b or (score_a == score_b and a < b)

def test_category_phrase_with_stop_words(tmp_path):
    index = build(tmp_path, [
        {'id': 0, 'title': 'paris', 'content': 'paris', 'categories': ['Cities in France']},
        {'id': 1, 'title': 'lyon', 'content': 'lyon', 'categories': ['Cities', 'France']},
    ])

    assert category_filter(index, analyze_phrase('cities in france')) == {0}
    assert category_filter(index, analyze_phrase('cities of france')) == {0}

    for method in [MAPREDUCE, LUCENE]:
        ranked = rank(index, method, analyze_phrase('paris'), analyze_phrase('cities in france'))
        assert [doc_id for doc_id, _ in ranked] == [0]

def test_title_phrase_with_stop_words(tmp_path):
    index = build(tmp_path, [
        {'id': 0, 'title': 'the lord of the rings', 'content': 'the lord of the rings is a novel', 'categories': []},
        {'id': 1, 'title': 'rings of a lord', 'content': 'lord rings', 'categories': []},
    ])

    scores = dict(rank(index, MAPREDUCE, analyze_phrase('lord of the rings')))

    assert scores[0] == pytest.approx(20 + 5 + 0.5 * (2 + 1.05))
    assert scores[1] == pytest.approx(5 + 1 + 0.5 * (1.05 + 1))

    ranked = rank(index, LUCENE, analyze_phrase('lord of the rings'))
    assert ranked[0] == (0, pytest.approx(2.0 + 1.0))
