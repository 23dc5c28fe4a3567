import re
from .analysis import analyze_query

OPEN = '<b>'
CLOSE = '</b>'

SNIPPET_LENGTH = 200
MAX_FRAGMENTS = 3
FRAGMENT_SEPARATOR = ' ... '

_bold = re.compile(r'<b>.*?</b>', re.DOTALL)
_tag = re.compile(r'</?[A-Za-z][^<>]*>')
_sentence_end = re.compile(r'(?<=[.!?])\s+')

def lower_shadow(text):
    """text lowercased, one character per character of text, so offsets line up."""
    rv = []
    for c in text:
        lower = c.lower()
        rv.append(lower if len(lower) == 1 else c)

    return ''.join(rv)

def highlight(text, words):
    """Wrap every case-insensitive occurrence of any of words in <b></b>.

    Tags, and text that's already bold, are copied through untouched, so
    highlighting twice is the same as highlighting once.
    """
    words = sorted({w.lower() for w in words if w and not '<' in w and not '>' in w}, key=lambda w: (-len(w), w))

    if not text or not words:
        return text

    shadow = lower_shadow(text)
    rv = []
    i = 0
    n = len(text)

    while i < n:
        if text[i] == '<':
            m = _bold.match(text, i) or _tag.match(text, i)
            if m:
                rv.append(m.group(0))
                i = m.end()
                continue

        for word in words:
            if shadow.startswith(word, i):
                rv.append(OPEN)
                rv.append(text[i:i + len(word)])
                rv.append(CLOSE)
                i += len(word)
                break
        else:
            rv.append(text[i])
            i += 1

    return ''.join(rv)

def split_words(text, length):
    """Break text into pieces of at most length characters, on whitespace where possible."""
    rv = []
    current = ''

    for word in text.split():
        if len(word) > length:
            word = word[:length]

        if not current:
            current = word
        elif len(current) + 1 + len(word) <= length:
            current = current + ' ' + word
        else:
            rv.append(current)
            current = word

    if current:
        rv.append(current)

    return rv

def fragments(content, length=SNIPPET_LENGTH):
    rv = []
    for sentence in _sentence_end.split(content):
        sentence = sentence.strip()
        if not sentence:
            continue

        if len(sentence) <= length:
            rv.append(sentence)
        else:
            rv.extend(split_words(sentence, length))

    return rv

def make_snippet(content, terms, length=SNIPPET_LENGTH):
    """The best (up to 3) fragments of content for the stemmed terms, in document order.

    Falls back to the start of the content when no fragment has a term.
    """
    content = content or ''
    terms = set(terms)

    scored = []
    if terms:
        for i, fragment in enumerate(fragments(content, length)):
            score = len(terms.intersection(analyze_query(fragment.lower())))
            if score:
                scored.append((score, i, fragment))

    if not scored:
        return content[:length]

    best = sorted(scored, key=lambda x: (-x[0], x[1]))[:MAX_FRAGMENTS]
    best.sort(key=lambda x: x[1])

    return FRAGMENT_SEPARATOR.join(fragment for _, _, fragment in best)
