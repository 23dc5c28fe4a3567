import io
import json
from .analysis import FIELDS, stem, document_fields, field_length
from .mapreduce import iter_documents, map_document, map_phase, reduce_phase, run_job
from .postings import parse_term_record

def write_jsonl(path, docs):
    with open(path, 'w', encoding='utf8') as f:
        for doc in docs:
            f.write(json.dumps(doc) + '\n')

def read_index(path):
    with open(path, 'r', encoding='utf8') as f:
        return dict(parse_term_record(line) for line in f)

DOCS = [
    {'id': 0, 'title': 'Alpha beta', 'content': 'Alpha beta gamma. Beta again, and beta once more.', 'categories': ['Greek letters']},
    {'id': 1, 'title': 'Gamma', 'content': 'The gamma function extends the factorial.', 'categories': []},
    {'id': 2, 'title': 'Delta', 'content': 'A river delta; not a Greek letter here.', 'categories': ['Rivers', 'Greek']},
]

def test_tokenization(tmp_path):
    write_jsonl(tmp_path / 'pages.jsonl', [
        {'id': 7, 'title': 'Hello, WORLD!', 'content': 'the quick brown fox jumps', 'categories': ['Animals']},
    ])

    run_job(tmp_path / 'pages.jsonl', tmp_path / 'index.txt')
    index = read_index(tmp_path / 'index.txt')

    for word in ['hello', 'world', 'quick', 'brown', 'fox', 'jumps', 'animals']:
        assert [p.doc_id for p in index[stem(word)]] == [7]

    assert not 'the' in index

    # Positions count the dropped "the"
    assert index[stem('quick')][0].positions == ((), (1,), ())
    assert index[stem('animals')][0].freq == (0, 0, 1)

def test_map_document():
    pairs = dict(map_document(DOCS[0]))

    beta = pairs[stem('beta')]
    assert beta.doc_id == 0
    assert beta.freq == (1, 3, 0)
    assert beta.positions == ((1,), (1, 3, 6), ())

def test_runs_are_merged_in_document_order(tmp_path):
    write_jsonl(tmp_path / 'pages.jsonl', DOCS)

    # Spill after every document, so each ends up in its own run
    run_paths = map_phase(iter_documents(tmp_path / 'pages.jsonl'), str(tmp_path), spill_threshold=1)
    assert len(run_paths) == 3

    output = io.StringIO()
    terms = reduce_phase(run_paths, output)

    lines = output.getvalue().splitlines()
    assert len(lines) == terms
    assert [line.split('\t')[0] for line in lines] == sorted(line.split('\t')[0] for line in lines)

    index = dict(parse_term_record(line) for line in lines)
    assert [p.doc_id for p in index[stem('gamma')]] == [0, 1]
    assert [p.doc_id for p in index[stem('greek')]] == [0, 2]

def test_positions_are_consistent(tmp_path):
    write_jsonl(tmp_path / 'pages.jsonl', DOCS)
    run_job(tmp_path / 'pages.jsonl', tmp_path / 'index.txt', spill_threshold=2)
    index = read_index(tmp_path / 'index.txt')

    lengths = {doc['id']: [field_length(text) for text in document_fields(doc)] for doc in DOCS}

    for term, postings in index.items():
        doc_ids = [p.doc_id for p in postings]
        assert len(doc_ids) == len(set(doc_ids))

        for posting in postings:
            for field in FIELDS:
                assert len(posting.positions[field]) == posting.freq[field]
                assert all(p < lengths[posting.doc_id][field] for p in posting.positions[field])

def test_duplicate_documents_are_posted_once(tmp_path):
    write_jsonl(tmp_path / 'pages.jsonl', [DOCS[1], DOCS[1]])
    run_job(tmp_path / 'pages.jsonl', tmp_path / 'index.txt', spill_threshold=1)

    index = read_index(tmp_path / 'index.txt')
    assert [p.doc_id for p in index[stem('gamma')]] == [1]

def test_malformed_lines_are_skipped(tmp_path, capsys):
    with open(tmp_path / 'pages.jsonl', 'w', encoding='utf8') as f:
        f.write(json.dumps(DOCS[1]) + '\n')
        f.write('{not json\n')
        f.write(json.dumps({'id': 'x', 'title': 'a', 'content': 'b'}) + '\n')
        f.write('\n')

    docs = list(iter_documents(tmp_path / 'pages.jsonl'))
    assert [doc['id'] for doc in docs] == [1]

    out = capsys.readouterr().out
    assert 'line 2' in out
    assert 'line 3' in out
    assert not 'line 4' in out

def test_empty_input(tmp_path):
    write_jsonl(tmp_path / 'pages.jsonl', [])
    assert run_job(tmp_path / 'pages.jsonl', tmp_path / 'index.txt') == 0
    assert read_index(tmp_path / 'index.txt') == {}
