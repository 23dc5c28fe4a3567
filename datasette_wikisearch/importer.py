import time
from .analysis import FIELDS, document_fields, field_length
from .errors import ParseError
from .index_store import DOC_ID_KEY, DOC_LENGTH_KEY, AVG_DOC_LENGTH_KEY, DOC_COUNT_KEY
from .mapreduce import iter_documents, run_job, REPORT_EVERY
from .postings import parse_term_record, format_postings
from .utils import elapsed_time

def iter_term_records(index_path):
    with open(index_path, 'r', encoding='utf8') as f:
        for line in f:
            if not line.strip():
                continue

            try:
                term, postings = parse_term_record(line)
            except ParseError as e:
                print('Skipping malformed index line: {}'.format(e))
                continue

            yield term, format_postings(postings).encode('utf-8')

def import_term_records(store, index_path):
    """Load the reduce output into the store under one key per term. Returns the term count."""
    start = time.time()
    imported = store.put_many(iter_term_records(index_path))
    print('Summary: Importer has imported {} terms. Elapsed time: {}.'.format(imported, elapsed_time(start)))
    return imported

def doc_stats(documents):
    """Yield (key, bytes) for every DocStats entry.

    Lengths are plain whitespace token counts per field; nothing is dropped or stemmed.
    """
    start = time.time()
    totals = [0] * len(FIELDS)
    count = 0

    for doc in documents:
        doc_id = int(doc['id'])
        yield DOC_ID_KEY.format(doc_id), doc['title'].encode('utf-8')

        for field, text in zip(FIELDS, document_fields(doc)):
            length = field_length(text)
            totals[field] += length
            yield DOC_LENGTH_KEY.format(doc_id, field), str(length).encode('utf-8')

        count += 1
        if count % REPORT_EVERY == 0:
            print('Importer has imported {} document lengths. Elapsed time: {}.'.format(count, elapsed_time(start)))

    for field in FIELDS:
        average = totals[field] // count if count else 0
        yield AVG_DOC_LENGTH_KEY.format(field), str(average).encode('utf-8')

    yield DOC_COUNT_KEY, str(count).encode('utf-8')

    print('Summary: Importer has imported {} document lengths. Total lengths: {}. Elapsed time: {}.'.format(count, totals, elapsed_time(start)))

def import_doc_stats(store, jsonl_path):
    return store.put_many(doc_stats(iter_documents(jsonl_path)))

def import_index(store, index_path, jsonl_path):
    terms = import_term_records(store, index_path)
    import_doc_stats(store, jsonl_path)
    return terms

def build_index(store, jsonl_path, index_path, **kwargs):
    """Run the map/reduce job over jsonl_path, then load its output into store."""
    run_job(jsonl_path, index_path, **kwargs)
    return import_index(store, index_path, jsonl_path)
