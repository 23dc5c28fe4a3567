import threading
import zlib

NUM_SHARDS = 16

class VisitedSet:
    """Process-wide set of canonical URLs. Grows monotonically; never shrinks."""

    def __init__(self, num_shards=NUM_SHARDS):
        self._shards = [set() for _ in range(num_shards)]
        self._locks = [threading.Lock() for _ in range(num_shards)]

    def _shard(self, url):
        return zlib.crc32(url.encode('utf-8')) % len(self._shards)

    def add(self, url):
        """Add url; returns True if it was not already present."""
        i = self._shard(url)
        with self._locks[i]:
            if url in self._shards[i]:
                return False

            self._shards[i].add(url)
            return True

    def __contains__(self, url):
        i = self._shard(url)
        with self._locks[i]:
            return url in self._shards[i]

    def contains(self, url):
        return url in self

    def __len__(self):
        total = 0
        for i in range(len(self._shards)):
            with self._locks[i]:
                total += len(self._shards[i])
        return total

    def snapshot(self):
        rv = set()
        for i in range(len(self._shards)):
            with self._locks[i]:
                rv.update(self._shards[i])
        return rv
