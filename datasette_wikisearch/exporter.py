import json
import time
from .pages import BATCH_READ_COUNT
from .utils import elapsed_time

REPORT_EVERY = 1000

def page_to_json(doc_id, page):
    return {
        'id': doc_id,
        'title': page.title,
        'content': page.content,
        'categories': list(page.categories),
        'lastModify': page.last_modify,
    }

def export_pages(store, output_path):
    """Write every page in store to output_path as JSONL; ids are the export ordinals."""
    start = time.time()
    num_of_pages = store.count()
    print('Exporter started. Pages to export: {}.'.format(num_of_pages))

    written = 0
    with open(output_path, 'w', encoding='utf8') as f:
        while written < num_of_pages:
            pages = store.select_range(min(BATCH_READ_COUNT, num_of_pages - written), written)

            if not pages:
                break

            for page in pages:
                f.write(json.dumps(page_to_json(written, page)))
                f.write('\n')
                written += 1

            if written == num_of_pages or written % REPORT_EVERY == 0:
                print('{}Exporter has exported {} pages, {:.2f}% completed. Elapsed time: {}.'.format(
                    'Summary: ' if written == num_of_pages else '',
                    written,
                    written * 100.0 / num_of_pages,
                    elapsed_time(start),
                ))

    return written
