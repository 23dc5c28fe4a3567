from collections import namedtuple
from .analysis import analyze_phrase
from .errors import QueryError
from .highlight import highlight, make_snippet, SNIPPET_LENGTH
from .index_store import DOC_ID_KEY
from .query import parse_query, highlight_words
from .ranking import rank, METHODS, MAPREDUCE

MAX_HITS = 1000
MAX_PAGES = 100

RankedPage = namedtuple('RankedPage', ['title', 'snippet', 'categories', 'last_modify'])

def ranked_page_to_json(page):
    return {
        'title': page.title,
        'snippet': page.snippet,
        'categories': list(page.categories),
        'lastModify': page.last_modify,
    }

class Searcher:
    """Answers queries against an IndexStore, materializing pages from a PageStore."""

    def __init__(self, index_store, page_store, snippet_length=SNIPPET_LENGTH):
        self.index_store = index_store
        self.page_store = page_store
        self.snippet_length = snippet_length

    def titles(self, doc_ids):
        rv = []
        for doc_id in doc_ids:
            title = self.index_store.get_text(DOC_ID_KEY.format(doc_id))

            if title is None:
                print('Searcher: no title stored for doc {}.'.format(doc_id))
                continue

            rv.append(title)

        return rv

    def search(self, raw_query, method=MAPREDUCE):
        """Return {'hits': int, 'pages': [RankedPage]}, best first."""
        if not method in METHODS:
            raise QueryError('Invalid parameter `method`. Available methods are `lucene` and `mapreduce`.')

        keyword, category = parse_query(raw_query)

        phrase = analyze_phrase(keyword)
        terms = [term for _, term in phrase]

        ranked = rank(self.index_store, method, phrase, analyze_phrase(category) if category else None)
        hits = min(len(ranked), MAX_HITS)

        titles = self.titles([doc_id for doc_id, _ in ranked[:MAX_PAGES]])
        by_title = {page.title: page for page in self.page_store.select_by_titles(titles)}

        words = highlight_words(keyword)
        category_words = words + [w for w in highlight_words(category) if not w in words]

        pages = []
        for title in titles:
            page = by_title.get(title)
            if page is None:
                print('Searcher: page {!r} is in the index but not in the store.'.format(title))
                continue

            snippet = make_snippet(page.content, terms, self.snippet_length)

            pages.append(RankedPage(
                highlight(page.title, words),
                highlight(snippet, words),
                [highlight(c, category_words) for c in page.categories],
                page.last_modify,
            ))

        return {'hits': hits, 'pages': pages}
