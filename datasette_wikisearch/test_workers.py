import threading
from .workers import Counter, split_pages

def test_split_pages():
    assert split_pages(10, 3) == [4, 3, 3]
    assert split_pages(2, 4) == [1, 1, 0, 0]
    assert split_pages(0, 2) == [0, 0]
    assert sum(split_pages(200000, 7)) == 200000

def test_counter():
    counter = Counter()

    def add():
        for _ in range(1000):
            counter.add(1)

    threads = [threading.Thread(target=add) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counter.value == 4000
