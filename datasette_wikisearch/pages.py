import sqlite3
from collections import namedtuple
from datetime import datetime, timezone
from more_itertools import batched
from .errors import StoreError
from .schema import schema, current_schema_version
from .utils import connect

BATCH_READ_COUNT = 50

CATEGORY_DELIMITER = '|'

Page = namedtuple('Page', ['title', 'content', 'categories', 'last_modify'], defaults=(None,))

def utc_now():
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()

def join_categories(categories):
    return CATEGORY_DELIMITER.join(categories)

def split_categories(value):
    if not value:
        return []

    return value.split(CATEGORY_DELIMITER)

def row_to_page(row):
    title, content, categories, last_modify = row
    return Page(title, content, split_categories(categories), last_modify)

class PageStore:
    """The `pages` table. Each instance owns one connection; never share it across threads."""

    def __init__(self, conn):
        self.conn = conn

    @classmethod
    def open(cls, path):
        return cls(connect(path))

    def init_schema(self):
        try:
            v, = self.conn.execute('PRAGMA user_version').fetchone()

            if v == current_schema_version:
                return

            if v:
                raise StoreError('unsupported schema version in pages db: {}'.format(v))

            self.conn.executescript(schema)
        except sqlite3.Error as e:
            raise StoreError('unable to create pages schema: {}'.format(e)) from e

    def insert_batch(self, pages):
        """Insert pages in one transaction, ignoring duplicate titles. Returns rows inserted."""
        if not pages:
            return 0

        rows = []
        for page in pages:
            rows.append([
                page.title,
                page.content,
                join_categories(page.categories),
                page.last_modify or utc_now(),
            ])

        try:
            with self.conn:
                self.conn.execute('BEGIN TRANSACTION')
                before = self.conn.total_changes
                self.conn.executemany('INSERT OR IGNORE INTO pages(title, content, categories, lastModify) VALUES (?, ?, ?, ?)', rows)
                return self.conn.total_changes - before
        except sqlite3.Error as e:
            raise StoreError('unable to insert {} pages: {}'.format(len(rows), e)) from e

    def count(self):
        try:
            n, = self.conn.execute('SELECT COUNT(*) FROM pages').fetchone()
        except sqlite3.Error as e:
            raise StoreError('unable to count pages: {}'.format(e)) from e

        return n

    def select_range(self, limit, offset):
        try:
            rows = self.conn.execute('SELECT title, content, categories, lastModify FROM pages ORDER BY rowid LIMIT ? OFFSET ?', [limit, offset]).fetchall()
        except sqlite3.Error as e:
            raise StoreError('unable to read pages: {}'.format(e)) from e

        return [row_to_page(row) for row in rows]

    def select_by_titles(self, titles):
        """Look up pages by title, BATCH_READ_COUNT at a time. Missing titles are skipped."""
        rv = []

        for batch in batched(titles, BATCH_READ_COUNT):
            try:
                rows = self.conn.execute(
                    'SELECT title, content, categories, lastModify FROM pages WHERE title IN ({})'.format(', '.join(['?'] * len(batch))),
                    batch
                ).fetchall()
            except sqlite3.Error as e:
                raise StoreError('unable to read pages: {}'.format(e)) from e

            rv.extend(row_to_page(row) for row in rows)

        return rv

    def get_by_title(self, title):
        pages = self.select_by_titles([title])
        if not pages:
            return None

        return pages[0]

    def close(self):
        self.conn.close()
