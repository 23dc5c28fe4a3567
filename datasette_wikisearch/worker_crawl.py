import queue
import threading
import time
from collections import deque, namedtuple
from datetime import datetime
from datasette_wikisearch.plugin import pm
from .config import MAX_PAGES, INTERVAL
from .errors import FetchError, ParseError, WriterFailed, Interrupted
from .plugins.max_depth import MAX_DEPTH
from .urls import canonicalize, absolutize_url
from .utils import elapsed_time
from .worker_write import WriterWorker, BATCH_WRITE_COUNT

FrontierItem = namedtuple('FrontierItem', ['url', 'depth'])

QUEUE_CAPACITY = 2 * BATCH_WRITE_COUNT

# How long to block on a full queue before re-checking the writer's health.
PUT_TIMEOUT = 0.1

def discover_urls(config, visited, from_url, from_depth, document):
    urls = [new_url for urls in pm.hook.discover_urls(config=config, url=from_url, document=document) for new_url in urls]

    # Resolve relative paths; drops the anchor and anything that isn't HTTP/HTTPS.
    urls = [absolutize_url(from_url, new_url) for new_url in urls]
    urls = [x for x in urls if x]

    new_urls = []
    seen = set()
    for to_url in urls:
        if to_url in seen:
            continue
        seen.add(to_url)

        results = pm.hook.canonicalize_url(config=config, from_url=from_url, to_url=to_url, to_url_depth=from_depth + 1)
        if False in results:
            # Someone rejected the URL; this wins.
            continue

        if to_url in visited:
            continue

        new_urls.append(to_url)

    return new_urls

def seed_urls(config):
    return [url for urls in pm.hook.get_seed_urls(config=config) for url in urls]

class CrawlWorker:
    """One crawler thread's work: fetch, extract and enqueue pages for its paired writer."""

    def __init__(self, thread_id, config, visited, store_factory, num_of_pages=None, cancel=None, on_commit=None):
        self.thread_id = thread_id
        self.config = config
        self.visited = visited
        self.num_of_pages = config[MAX_PAGES] if num_of_pages is None else num_of_pages
        self.crawl_depth = config.get(MAX_DEPTH, 0)
        self.crawl_interval = config.get(INTERVAL, 0)
        self.cancel = cancel or threading.Event()

        self.crawl_count = 0
        self.frontier = deque()
        self.page_queue = queue.Queue(maxsize=QUEUE_CAPACITY)
        self.writer = WriterWorker(thread_id, store_factory, self.page_queue, on_commit=on_commit)

    def put(self, item):
        while True:
            try:
                self.page_queue.put(item, timeout=PUT_TIMEOUT)
                return
            except queue.Full:
                if not self.writer.alive():
                    raise WriterFailed('writer of CrawlThread {} exited'.format(self.thread_id))

    def reseed(self):
        """Refill an empty frontier with the seed URLs. False if there's nothing left to visit."""
        seeds = seed_urls(self.config)
        pending = []
        for url in seeds:
            try:
                if canonicalize(url) in self.visited:
                    continue
            except FetchError:
                pass

            pending.append(url)

        # A seed that doesn't redirect ends up in the visited set itself; once all of
        # them have, restarting from them would spin forever.
        if not pending:
            return False

        self.frontier.extend(FrontierItem(url, 0) for url in seeds)
        return True

    def process(self, item):
        try:
            document = pm.hook.fetch_url(config=self.config, url=item.url)
        except FetchError as e:
            print('CrawlThread {} failed to fetch {}: {}'.format(self.thread_id, item.url, e))
            return

        if document is None:
            print('CrawlThread {} failed to fetch {}: no fetcher'.format(self.thread_id, item.url))
            return

        # Special:Random redirects, so work with the URL we actually landed on.
        try:
            actual_url = canonicalize(document.url)
        except FetchError as e:
            print('CrawlThread {} reports a malformed URL: {}'.format(self.thread_id, e))
            return

        # The redirected url may be a special page; those never count as visited.
        results = pm.hook.canonicalize_url(config=self.config, from_url=item.url, to_url=actual_url, to_url_depth=item.depth)
        if False in results:
            return

        if not self.visited.add(actual_url):
            # Another thread got here first.
            return

        try:
            page = pm.hook.extract_page(config=self.config, url=actual_url, document=document)
        except ParseError as e:
            print('CrawlThread {} failed to parse {}: {}'.format(self.thread_id, actual_url, e))
            return

        if page is None or not page.title.strip() or not page.content.strip():
            return

        self.put(page)
        self.crawl_count += 1

        # Hit the depth limit?
        if item.depth >= self.crawl_depth:
            return

        for url in discover_urls(self.config, self.visited, actual_url, item.depth, document):
            self.frontier.append(FrontierItem(url, item.depth + 1))

    def report_progress(self, summary, start):
        print('{}CrawlThread {} crawled {} pages, {:.2f}% completed. Elapsed time: {}.'.format(
            'Summary: ' if summary else '',
            self.thread_id,
            self.crawl_count,
            self.crawl_count * 100.0 / self.num_of_pages if self.num_of_pages else 100.0,
            elapsed_time(start),
        ))

    def stop_writer(self):
        # The sentinel queues up behind every pending page, so the writer drains
        # the queue before it sees it.
        if self.writer.alive():
            try:
                self.put(None)
            except WriterFailed:
                pass

        self.writer.join()

    def run(self):
        start = time.time()
        print('CrawlThread {} started at {}. Pages to crawl: {}.'.format(self.thread_id, datetime.now().time().replace(microsecond=0), self.num_of_pages))

        report_every = max(1, min(self.num_of_pages, BATCH_WRITE_COUNT))
        interrupted = False

        self.writer.start()
        try:
            while self.crawl_count < self.num_of_pages and self.writer.alive():
                if self.cancel.is_set():
                    interrupted = True
                    break

                # The frontier may run dry because of the depth limit. If so, start over
                # from the entry url, which is never put into the visited set.
                if not self.frontier and not self.reseed():
                    print('CrawlThread {} has nothing left to crawl.'.format(self.thread_id))
                    break

                item = self.frontier.popleft()

                if item.url in self.visited:
                    continue

                before = self.crawl_count
                self.process(item)

                if self.crawl_count != before and self.crawl_count % report_every == 0:
                    self.report_progress(False, start)

                # Be polite. A cancel wakes us up early; the loop notices it.
                self.cancel.wait(self.crawl_interval / 1000.0)
        finally:
            self.stop_writer()

        if self.writer.failed.is_set():
            raise WriterFailed('writer of CrawlThread {} failed: {}'.format(self.thread_id, self.writer.error))

        if interrupted:
            raise Interrupted('CrawlThread {} was cancelled'.format(self.thread_id))

        self.report_progress(True, start)
        return self.crawl_count
