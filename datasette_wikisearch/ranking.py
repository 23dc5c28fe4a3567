"""
Rank documents against a query using the stored positional postings.

Two methods share the same index:

* `mapreduce` combines phrase, all-terms and any-term signals per field:

      title    = 20*phrase + 5*all + 1*(any and not phrase)
      content  = 0.5 * (2*phrase + 1.05*all + 1*(any and not phrase))

  A document must match at least one title term and at least one content term.

* `lucene` scores in-order sloppy phrases (up to SLOP positions of total
  displacement from the query's own spacing), 2x in the title, 1x in the
  content. A document needs at least one of the two unless a category is given.

In both methods a non-empty category is an exact phrase that must occur in the
categories field. Ties are broken by ascending doc id, so results are
deterministic.

Phrases keep the positions their terms have in the query, so dropped stop words
still count: "lord of the rings" matches "the lord of the rings" exactly.
"""
import bisect
from .analysis import TITLE, CONTENT, CATEGORIES

MAPREDUCE = 'mapreduce'
LUCENE = 'lucene'
METHODS = (LUCENE, MAPREDUCE)

SLOP = 10
TITLE_BOOST = 2.0

def load_postings(index, terms):
    """{term: {doc_id: Posting}} for each distinct term."""
    rv = {}
    for term in terms:
        if term in rv:
            continue

        rv[term] = {p.doc_id: p for p in index.get_postings(term)}

    return rv

def field_positions(postings, terms, doc_id, field):
    """Positions of each term in one field of one document; None if any term is absent."""
    rv = []
    for term in terms:
        posting = postings[term].get(doc_id)
        if posting is None or not posting.freq[field]:
            return None

        rv.append(posting.positions[field])

    return rv

def phrase_offsets(phrase):
    """Split [(offset, term)] into parallel term and offset lists."""
    return [term for _, term in phrase], [offset for offset, _ in phrase]

def default_offsets(positions, offsets):
    if offsets is None:
        return list(range(len(positions)))

    return offsets

def phrase_match(positions, offsets=None):
    """True if the terms occur in order, as far apart as they are in the query."""
    if not positions:
        return False

    offsets = default_offsets(positions, offsets)
    rest = [set(p) for p in positions[1:]]
    for start in positions[0]:
        if all(start + offsets[i + 1] - offsets[0] in s for i, s in enumerate(rest)):
            return True

    return False

def sloppy_gap(positions, offsets=None, slop=SLOP):
    """Smallest total displacement of an in-order match from the query's spacing, or None if it exceeds slop."""
    if not positions:
        return None

    offsets = default_offsets(positions, offsets)
    best = None
    for start in positions[0]:
        current = start
        gap = 0
        for i, p in enumerate(positions[1:]):
            target = current + offsets[i + 1] - offsets[i]
            j = bisect.bisect_left(p, target)

            # The nearest position to target that still comes after current.
            options = []
            if j < len(p):
                options.append(p[j])
            if j > 0 and p[j - 1] > current:
                options.append(p[j - 1])

            if not options:
                gap = None
                break

            current = min(options, key=lambda x: abs(x - target))
            gap += abs(current - target)

        if gap is not None and (best is None or gap < best):
            best = gap

    if best is None or best > slop:
        return None

    return best

def any_term(postings, terms, doc_id, field):
    for term in terms:
        posting = postings[term].get(doc_id)
        if posting is not None and posting.freq[field]:
            return True

    return False

def all_terms(postings, terms, doc_id, field):
    return field_positions(postings, terms, doc_id, field) is not None

def candidates(postings):
    rv = set()
    for docs in postings.values():
        rv.update(docs.keys())

    return rv

def category_filter(index, category):
    """The doc ids whose categories contain the exact phrase; None means no filter."""
    if category is None:
        return None

    if not category:
        return set()

    terms, offsets = phrase_offsets(category)
    postings = load_postings(index, terms)
    rv = set()
    for doc_id in candidates(postings):
        if phrase_match(field_positions(postings, terms, doc_id, CATEGORIES), offsets):
            rv.add(doc_id)

    return rv

def score_mapreduce(postings, terms, offsets, doc_id):
    """The combined field score, or None if the document doesn't match."""
    if not any_term(postings, terms, doc_id, TITLE) or not any_term(postings, terms, doc_id, CONTENT):
        return None

    title_phrase = phrase_match(field_positions(postings, terms, doc_id, TITLE), offsets)
    content_phrase = phrase_match(field_positions(postings, terms, doc_id, CONTENT), offsets)

    title = 20 * title_phrase + 5 * all_terms(postings, terms, doc_id, TITLE) + 1 * (not title_phrase)
    content = 0.5 * (2 * content_phrase + 1.05 * all_terms(postings, terms, doc_id, CONTENT) + 1 * (not content_phrase))

    return title + content

def score_lucene(postings, terms, offsets, doc_id, required):
    score = 0.0
    matched = False

    title_gap = sloppy_gap(field_positions(postings, terms, doc_id, TITLE), offsets)
    if title_gap is not None:
        score += TITLE_BOOST / (1 + title_gap)
        matched = True

    content_gap = sloppy_gap(field_positions(postings, terms, doc_id, CONTENT), offsets)
    if content_gap is not None:
        score += 1.0 / (1 + content_gap)
        matched = True

    if required:
        # The category clause matched, and counts towards the score.
        return score + 1.0

    if not matched:
        return None

    return score

def rank(index, method, phrase, category=None):
    """Return [(doc_id, score)] best first.

    phrase and category are [(offset, term)] lists, as analyze_phrase returns them.
    """
    terms, offsets = phrase_offsets(phrase)
    allowed = category_filter(index, category)
    postings = load_postings(index, terms)

    if method == LUCENE and allowed is not None:
        # With a required category clause, the phrase clauses are optional.
        docs = allowed
    else:
        docs = candidates(postings)
        if allowed is not None:
            docs = docs & allowed

    if not terms and method != LUCENE:
        return []

    rv = []
    for doc_id in docs:
        if method == LUCENE:
            score = score_lucene(postings, terms, offsets, doc_id, allowed is not None)
        else:
            score = score_mapreduce(postings, terms, offsets, doc_id)

        if score is not None:
            rv.append((doc_id, score))

    rv.sort(key=lambda x: (-x[1], x[0]))
    return rv
