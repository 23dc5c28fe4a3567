import re
import string
import threading
import snowballstemmer

TITLE = 0
CONTENT = 1
CATEGORIES = 2

FIELDS = (TITLE, CONTENT, CATEGORIES)
FIELD_NAMES = ('title', 'content', 'categories')

STOP_WORDS = frozenset([
    'a', 'an', 'and', 'are', 'as', 'at', 'be', 'but', 'by',
    'for', 'if', 'in', 'into', 'is', 'it',
    'no', 'not', 'of', 'on', 'or', 'such',
    'that', 'the', 'their', 'then', 'there', 'these',
    'they', 'this', 'to', 'was', 'will', 'with',
])

_alnum = re.compile('^[A-Za-z0-9]+$')

# Snowball stemmers keep state between calls, so each thread gets its own.
_local = threading.local()

def stem(token):
    stemmer = getattr(_local, 'stemmer', None)
    if stemmer is None:
        stemmer = _local.stemmer = snowballstemmer.stemmer('english')

    return stemmer.stemWord(token)

def normalize(token):
    """Strip surrounding punctuation and lowercase; None if the result isn't an indexable word."""
    token = token.strip(string.punctuation).strip().lower()

    if not _alnum.match(token):
        return None

    if token in STOP_WORDS:
        return None

    return stem(token)

def analyze(text):
    """Yield (position, term) for each indexable token.

    Positions count every whitespace-separated token, including the ones that are
    dropped, so they line up with plain whitespace document lengths.
    """
    for position, token in enumerate(text.split()):
        term = normalize(token)
        if term:
            yield position, term

def analyze_query(text):
    """The stemmed terms of a query, in order, skipping anything that wouldn't be indexed."""
    return [term for _, term in analyze(text)]

def analyze_phrase(text):
    """[(position, term)] for a query phrase, positions counting the dropped stop words."""
    return list(analyze(text))

def field_length(text):
    return len(text.split())

def document_fields(doc):
    """The (title, content, categories) text of an exported document, lowercased."""
    return (
        doc['title'].lower(),
        doc['content'].lower(),
        ' '.join(str(c) for c in doc.get('categories') or []).lower(),
    )
