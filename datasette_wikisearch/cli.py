import argparse
import sys
from .errors import WikiSearchError

DEFAULT_PORT = 10483

def parse_args(argv):
    ap = argparse.ArgumentParser(prog='wikisearch', description='Crawl, index and search a wiki.')
    sub = ap.add_subparsers(dest='command', required=True)

    crawler = sub.add_parser('crawler', help='Crawl pages into a SQLite database')
    crawler.add_argument('-t', '--threads', type=int, help='Number of crawler/writer pairs')
    crawler.add_argument('-c', '--pages', type=int, help='Number of pages to crawl')
    crawler.add_argument('-d', '--depth', type=int, help='Maximum link depth from the entry URL')
    crawler.add_argument('-i', '--interval', type=int, help='Milliseconds between fetches, per thread')
    crawler.add_argument('-u', '--entry-url', help='URL each thread starts from')
    crawler.add_argument('-H', '--host-regex', help='Hosts to follow')
    crawler.add_argument('-P', '--path-regex', help='Paths to follow')
    crawler.add_argument('db_path')

    exporter = sub.add_parser('exporter', help='Export crawled pages as JSON lines')
    exporter.add_argument('db_path')
    exporter.add_argument('json_output_path')

    mapreduce = sub.add_parser('mapreduce', help='Build the textual inverted index from an export')
    mapreduce.add_argument('json_input_path')
    mapreduce.add_argument('index_output_path')

    importer = sub.add_parser('importer', help='Load the textual index into an index store')
    importer.add_argument('index_output_path')
    importer.add_argument('json_input_path')
    importer.add_argument('index_store_path')

    webapi = sub.add_parser('webapi', help='Serve the query API')
    webapi.add_argument('-p', '--port', type=int, default=DEFAULT_PORT)
    webapi.add_argument('--host', default='127.0.0.1')
    webapi.add_argument('db_path')
    webapi.add_argument('index_store_path')

    return ap.parse_args(argv)

def run_crawler(args):
    from .config import crawl_config, THREADS, MAX_PAGES, INTERVAL
    from .plugins.discover_allow import HOST_REGEX, PATH_REGEX
    from .plugins.max_depth import MAX_DEPTH
    from .plugins.seed_entry_url import ENTRY_URL
    from .workers import Crawler

    config = crawl_config(**{
        THREADS: args.threads,
        MAX_PAGES: args.pages,
        MAX_DEPTH: args.depth,
        INTERVAL: args.interval,
        ENTRY_URL: args.entry_url,
        HOST_REGEX: args.host_regex,
        PATH_REGEX: args.path_regex,
    })

    Crawler(args.db_path, config).start()

def run_exporter(args):
    from .exporter import export_pages
    from .pages import PageStore

    store = PageStore.open(args.db_path)
    try:
        export_pages(store, args.json_output_path)
    finally:
        store.close()

def run_mapreduce(args):
    from .mapreduce import run_job

    run_job(args.json_input_path, args.index_output_path)

def run_importer(args):
    from .importer import import_index
    from .index_store import IndexStore

    store = IndexStore.open(args.index_store_path)
    try:
        import_index(store, args.index_output_path, args.json_input_path)
    finally:
        store.close()

def run_webapi(args):
    import uvicorn
    from datasette.app import Datasette

    ds = Datasette(
        files=[args.db_path],
        metadata={
            'plugins': {
                'datasette-wikisearch': {
                    'index': args.index_store_path,
                }
            }
        }
    )

    uvicorn.run(ds.app(), host=args.host, port=args.port)

COMMANDS = {
    'crawler': run_crawler,
    'exporter': run_exporter,
    'mapreduce': run_mapreduce,
    'importer': run_importer,
    'webapi': run_webapi,
}

def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        COMMANDS[args.command](args)
    except (WikiSearchError, OSError) as e:
        print('{}: {}'.format(args.command, e))
        return 1

    return 0

if __name__ == '__main__':
    sys.exit(main())
