import threading
from .errors import StoreError

# The number of pages written per SQL transaction.
BATCH_WRITE_COUNT = 50

class WriterWorker(threading.Thread):
    """Consumes pages from a crawler's queue and batch-inserts them into a PageStore.

    A `None` on the queue tells the writer to flush what it has buffered and exit.
    If a commit fails the batch is rolled back, `failed` is set and the writer exits;
    its paired crawler treats that as fatal.
    """

    def __init__(self, thread_id, store_factory, page_queue, on_commit=None):
        super().__init__(name='writer-{}'.format(thread_id), daemon=True)
        self.thread_id = thread_id
        self.store_factory = store_factory
        self.page_queue = page_queue
        self.on_commit = on_commit
        self.committed_count = 0
        self.failed = threading.Event()
        self.error = None

    def commit(self, store, buffered):
        if not buffered:
            return

        inserted = store.insert_batch(buffered)
        self.committed_count += inserted

        if self.on_commit:
            self.on_commit(inserted)

        print('Thread {} committed {} pages. Most recent one: {}.'.format(self.thread_id, inserted, buffered[-1].title))
        buffered.clear()

    def run(self):
        store = None
        buffered = []

        try:
            store = self.store_factory()

            while True:
                page = self.page_queue.get()

                try:
                    if page is None:
                        break

                    buffered.append(page)
                    if len(buffered) >= BATCH_WRITE_COUNT:
                        self.commit(store, buffered)
                finally:
                    self.page_queue.task_done()

            self.commit(store, buffered)
        except StoreError as e:
            print('Thread {} writer failed: {}'.format(self.thread_id, e))
            self.error = e
            self.failed.set()
        finally:
            print('Summary: thread {} committed {} pages.'.format(self.thread_id, self.committed_count))

            if store is not None:
                store.close()

    def alive(self):
        return self.is_alive() and not self.failed.is_set()
