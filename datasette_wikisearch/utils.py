import sqlite3
import time
from .errors import StoreError

def ensure_wal_mode(conn):
    old_level = conn.isolation_level
    try:
        conn.isolation_level = None
        mode, = conn.execute('PRAGMA journal_mode=WAL').fetchone()
        if mode != 'wal':
            raise StoreError('unable to set PRAGMA journal_mode=WAL on connection, got {}'.format(mode))
    finally:
        conn.isolation_level = old_level

def connect(path, check_same_thread=True):
    try:
        conn = sqlite3.connect(str(path), check_same_thread=check_same_thread)
        conn.isolation_level = None
        ensure_wal_mode(conn)

        # See https://www.sqlite.org/pragma.html#pragma_synchronous; this is much faster,
        # at the expense of durability in the event of an unplanned shutdown.
        conn.execute('pragma synchronous = normal;')
    except sqlite3.Error as e:
        raise StoreError('unable to open database {}: {}'.format(path, e)) from e

    return conn

def elapsed_time(start, now=None):
    """Format the seconds elapsed since `start` (a time.time() value) as hh:mm:ss."""
    if now is None:
        now = time.time()

    elapsed = max(0, int(now - start))
    return '{:02d}:{:02d}:{:02d}'.format(elapsed // 3600, (elapsed // 60) % 60, elapsed % 60)
