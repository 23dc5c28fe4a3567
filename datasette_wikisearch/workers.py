import threading
import time
from datetime import datetime
from .config import THREADS, MAX_PAGES
from .errors import WriterFailed, Interrupted
from .pages import PageStore
from .utils import elapsed_time
from .visited import VisitedSet
from .worker_crawl import CrawlWorker

class Counter:
    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def add(self, n):
        with self._lock:
            self._value += n
            return self._value

    @property
    def value(self):
        with self._lock:
            return self._value

def split_pages(num_of_pages, num_of_threads):
    """Spread the page target over the threads, giving the remainder to the first ones."""
    base, extra = divmod(num_of_pages, num_of_threads)
    return [base + (1 if i < extra else 0) for i in range(num_of_threads)]

class Crawler:
    """A fixed pool of crawler/writer pairs sharing one visited set."""

    def __init__(self, db_path, config):
        self.db_path = db_path
        self.config = config
        self.visited = VisitedSet()
        self.committed_count = Counter()
        self.cancel_event = threading.Event()
        self.results = {}

    def store_factory(self):
        return PageStore.open(self.db_path)

    def init_schema(self):
        store = self.store_factory()
        try:
            store.init_schema()
        finally:
            store.close()

    def entrypoint(self, worker):
        try:
            self.results[worker.thread_id] = worker.run()
        except Interrupted as e:
            print('{}; shutting down.'.format(e))
            self.results[worker.thread_id] = worker.crawl_count
        except WriterFailed as e:
            print('CrawlThread {} stopped early: {}'.format(worker.thread_id, e))
            self.results[worker.thread_id] = worker.crawl_count

    def start(self):
        """Run the crawl to completion (or cancellation); returns the number of pages committed."""
        start = time.time()
        num_of_threads = self.config[THREADS]
        num_of_pages = self.config[MAX_PAGES]

        print('Crawler started at {}. Pages to crawl: {}.'.format(datetime.now().time().replace(microsecond=0), num_of_pages))
        self.init_schema()

        threads = []
        for i, pages in enumerate(split_pages(num_of_pages, num_of_threads)):
            worker = CrawlWorker(
                i,
                self.config,
                self.visited,
                self.store_factory,
                num_of_pages=pages,
                cancel=self.cancel_event,
                on_commit=self.committed_count.add,
            )
            t = threading.Thread(target=self.entrypoint, args=(worker,), name='crawler-{}'.format(i), daemon=True)
            threads.append(t)
            t.start()

        try:
            for t in threads:
                t.join()
        except KeyboardInterrupt:
            print('Crawler interrupted; waiting for writers to flush.')
            self.cancel()
            for t in threads:
                t.join()

        print('Summary: Crawler committed {} pages in total. Elapsed time: {}.'.format(self.committed_count.value, elapsed_time(start)))
        return self.committed_count.value

    def cancel(self):
        self.cancel_event.set()
