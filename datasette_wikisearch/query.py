import string
from .analysis import STOP_WORDS

CATEGORY_IDENTIFIER = 'category:'

def parse_query(raw):
    """Split a raw query into (keyword, category), both trimmed and lowercased.

    Only the first `category:` splits; anything after it belongs to the category.
    """
    raw = raw or ''

    keyword, sep, category = raw.partition(CATEGORY_IDENTIFIER)

    if not sep:
        category = ''

    return keyword.strip().lower(), category.strip().lower()

def highlight_words(text):
    """The plain words of a query, as they'd appear in page text."""
    rv = []
    for token in text.split():
        word = token.strip(string.punctuation).lower()

        if not word or word in STOP_WORDS or not word.isalnum():
            continue

        if not word in rv:
            rv.append(word)

    return rv
