"""
Build the positional inverted index from a JSONL export, as a local map/reduce.

Phase 1 (map) tokenizes each document's title, content and categories into one
posting per distinct term. Postings are buffered in memory and spilled to sorted
run files whenever the buffer grows past `spill_threshold`.

Phase 2 (reduce) merges the runs and groups them by term, writing one
`term<TAB>posting;posting;...` line per term, sorted by term.
"""
import heapq
import json
import os
import tempfile
import time
from itertools import groupby
from operator import itemgetter
from .analysis import FIELDS, analyze, document_fields
from .postings import make_posting, format_posting
from .utils import elapsed_time

SPILL_THRESHOLD = 500000

REPORT_EVERY = 1000

def iter_documents(jsonl_path):
    """Yield each well-formed document in a JSONL export, reporting (and skipping) bad lines."""
    with open(jsonl_path, 'r', encoding='utf8') as f:
        for line_no, line in enumerate(f, 1):
            if not line.strip():
                # The trailing empty line is expected; nothing to report.
                continue

            try:
                doc = json.loads(line)
                int(doc['id'])
                doc['title'].lower()
                doc['content'].lower()
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                print('Skipping malformed JSON on line {} of {}: {!r}'.format(line_no, jsonl_path, e))
                continue

            yield doc

def map_document(doc):
    """Return [(term, Posting)] for one document, one entry per distinct term."""
    doc_id = int(doc['id'])
    positions = {}

    for field, text in zip(FIELDS, document_fields(doc)):
        for position, term in analyze(text):
            if not term in positions:
                positions[term] = ([], [], [])

            positions[term][field].append(position)

    return [(term, make_posting(doc_id, p)) for term, p in positions.items()]

def write_run(path, pairs):
    # A stable sort keeps postings of the same term in encounter order.
    pairs.sort(key=itemgetter(0))

    with open(path, 'w', encoding='utf8') as f:
        for term, posting in pairs:
            f.write('{}\t{}\n'.format(term, posting))

def iter_run(path):
    with open(path, 'r', encoding='utf8') as f:
        for line in f:
            term, posting = line.rstrip('\n').split('\t', 1)
            yield term, posting

def map_phase(documents, run_dir, spill_threshold=SPILL_THRESHOLD):
    """Map every document, spilling sorted runs into run_dir. Returns the run paths in order."""
    start = time.time()
    run_paths = []
    pairs = []
    mapped = 0

    def flush():
        if not pairs:
            return

        run_path = os.path.join(run_dir, 'run_{:06d}.tsv'.format(len(run_paths)))
        write_run(run_path, pairs)
        run_paths.append(run_path)
        pairs.clear()

    for doc in documents:
        for term, posting in map_document(doc):
            pairs.append((term, format_posting(posting)))

        mapped += 1
        if mapped % REPORT_EVERY == 0:
            print('MapReduce has mapped {} documents. Elapsed time: {}.'.format(mapped, elapsed_time(start)))

        if len(pairs) >= spill_threshold:
            flush()

    flush()
    print('Summary: MapReduce has mapped {} documents into {} runs. Elapsed time: {}.'.format(mapped, len(run_paths), elapsed_time(start)))
    return run_paths

def reduce_phase(run_paths, output):
    """Merge runs and write one line per term to the open file `output`. Returns the term count."""
    # heapq.merge is stable, so earlier runs (earlier documents) come first within a term.
    merged = heapq.merge(*[iter_run(path) for path in run_paths], key=itemgetter(0))

    terms = 0
    for term, group in groupby(merged, key=itemgetter(0)):
        seen = set()
        postings = []
        for _, posting in group:
            doc_id = posting.split(':', 1)[0]
            if doc_id in seen:
                print('Skipping duplicate posting for term {!r}, doc {}.'.format(term, doc_id))
                continue

            seen.add(doc_id)
            postings.append(posting)

        output.write('{}\t{}\n'.format(term, ';'.join(postings)))
        terms += 1

    return terms

def run_job(jsonl_path, output_path, spill_threshold=SPILL_THRESHOLD, tmp_dir=None):
    """Run both phases over a JSONL export, writing the textual index to output_path."""
    start = time.time()
    print('MapReduce started. Input: {}. Output: {}.'.format(jsonl_path, output_path))

    with tempfile.TemporaryDirectory(dir=tmp_dir) as run_dir:
        run_paths = map_phase(iter_documents(jsonl_path), run_dir, spill_threshold)

        with open(output_path, 'w', encoding='utf8') as output:
            terms = reduce_phase(run_paths, output)

    print('Summary: MapReduce has written {} terms. Elapsed time: {}.'.format(terms, elapsed_time(start)))
    return terms
