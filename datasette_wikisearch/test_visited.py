import threading
from .visited import VisitedSet

def test_add():
    visited = VisitedSet()

    assert visited.add('https://en.wikipedia.org/wiki/A') == True
    assert visited.add('https://en.wikipedia.org/wiki/A') == False
    assert 'https://en.wikipedia.org/wiki/A' in visited
    assert not visited.contains('https://en.wikipedia.org/wiki/B')
    assert len(visited) == 1

def test_concurrent_adds():
    visited = VisitedSet()
    urls = ['https://en.wikipedia.org/wiki/{}'.format(i) for i in range(1000)]
    added = []
    lock = threading.Lock()

    def worker():
        n = 0
        for url in urls:
            if visited.add(url):
                n += 1

        with lock:
            added.append(n)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # Every URL was new to exactly one thread
    assert sum(added) == 1000
    assert visited.snapshot() == set(urls)
