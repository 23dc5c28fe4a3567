import threading
import time
import traceback
from datasette import Response
from .config import plugin_config, get_database
from .errors import QueryError
from .highlight import SNIPPET_LENGTH
from .index_store import IndexStore
from .pages import PageStore
from .ranking import METHODS
from .searcher import Searcher, ranked_page_to_json

_index_stores = {}
_index_stores_lock = threading.Lock()

def get_index_store(path):
    with _index_stores_lock:
        if not path in _index_stores:
            _index_stores[path] = IndexStore.open(path)

        return _index_stores[path]

def error(reason, status):
    return Response.json({'error': True, 'data': reason}, status=status)

async def wikisearch_query(datasette, request):
    if request.method != 'GET':
        return Response('Unexpected method', status=405)

    start = time.monotonic()

    try:
        method = (request.args.get('method') or '').strip().lower()
        keyword = request.args.get('keyword')

        if not method:
            raise QueryError('Parameter `method` missing.')

        if not (keyword or '').strip():
            raise QueryError('Parameter `keyword` missing.')

        if not method in METHODS:
            raise QueryError('Invalid parameter `method`. Available methods are `lucene` and `mapreduce`.')

        config = plugin_config(datasette)
        if not config.get('index'):
            raise QueryError('Method `{}` is not configured: no index.'.format(method))

        db = get_database(datasette)
        if db is None:
            raise QueryError('Method `{}` is not configured: no pages database.'.format(method))

        index_store = get_index_store(config['index'])
        snippet_length = config.get('snippet-length', SNIPPET_LENGTH)

        def search(conn):
            return Searcher(index_store, PageStore(conn), snippet_length).search(keyword, method)

        rv = await db.execute_fn(search)
    except QueryError as e:
        return error(str(e), 400)
    except Exception:
        traceback.print_exc()
        return error('Internal server error', 500)

    return Response.json({
        'error': False,
        'data': {
            'hits': rv['hits'],
            'pages': [ranked_page_to_json(page) for page in rv['pages']],
            'elapsedTime': int((time.monotonic() - start) * 1000),
        }
    })

def get_routes(datasette):
    return [
        (r"^/query$", wikisearch_query),
    ]
