import sqlite3
import threading
import zstandard
from more_itertools import batched
from .errors import IndexStoreError, StoreError
from .postings import parse_postings
from .schema import index_schema
from .utils import connect

DOC_ID_KEY = '__docId_{}'
DOC_LENGTH_KEY = '__docLength_{}_{}'
AVG_DOC_LENGTH_KEY = '__avgDocLength_{}'
DOC_COUNT_KEY = '__docCount'

WRITE_BATCH_SIZE = 1000

class IndexStore:
    """Key/value store for term records and document statistics, backed by SQLite.

    Values are zstd-compressed. One instance may be shared by several reader threads.
    """

    def __init__(self, conn):
        self.conn = conn
        self._lock = threading.Lock()
        self._compressor = zstandard.ZstdCompressor(level=9)
        self._decompressor = zstandard.ZstdDecompressor()

    @classmethod
    def open(cls, path):
        try:
            conn = connect(path, check_same_thread=False)
            conn.executescript(index_schema)
        except (StoreError, sqlite3.Error) as e:
            raise IndexStoreError('unable to open index store {}: {}'.format(path, e)) from e

        return cls(conn)

    def get(self, key):
        with self._lock:
            try:
                row = self.conn.execute('SELECT value FROM kv WHERE key = ?', [key]).fetchone()

                if not row:
                    return None

                return self._decompressor.decompress(row[0])
            except (sqlite3.Error, zstandard.ZstdError) as e:
                raise IndexStoreError('unable to read key {!r}: {}'.format(key, e)) from e

    def put(self, key, value):
        self.put_many([(key, value)])

    def put_many(self, items):
        """Write (key, bytes) pairs, one transaction per batch."""
        written = 0
        with self._lock:
            try:
                for batch in batched(items, WRITE_BATCH_SIZE):
                    with self.conn:
                        self.conn.execute('BEGIN TRANSACTION')
                        self.conn.executemany(
                            'INSERT OR REPLACE INTO kv(key, value) VALUES (?, ?)',
                            [(k, self._compressor.compress(v)) for k, v in batch]
                        )
                    written += len(batch)
            except (sqlite3.Error, zstandard.ZstdError) as e:
                raise IndexStoreError('unable to write index: {}'.format(e)) from e

        return written

    def get_text(self, key):
        rv = self.get(key)
        if rv is None:
            return None

        return rv.decode('utf-8')

    def get_int(self, key, default=None):
        rv = self.get_text(key)
        if rv is None:
            return default

        try:
            return int(rv)
        except ValueError as e:
            raise IndexStoreError('key {!r} is not an integer: {!r}'.format(key, rv)) from e

    def get_postings(self, term):
        """The TermRecord for a term, as a list of Postings; [] for unknown terms."""
        return parse_postings(self.get_text(term))

    def close(self):
        with self._lock:
            self.conn.close()
