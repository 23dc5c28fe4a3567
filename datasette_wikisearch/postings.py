from collections import namedtuple
from .analysis import FIELDS
from .errors import ParseError

# freq and positions are indexed by field id; len(positions[f]) == freq[f].
Posting = namedtuple('Posting', ['doc_id', 'freq', 'positions'])

def make_posting(doc_id, positions):
    positions = tuple(tuple(p) for p in positions)
    return Posting(doc_id, tuple(len(p) for p in positions), positions)

def format_posting(posting):
    """docId:f0,f1,f2|p0_0,p0_1,...,p1_0,...,p2_0,..."""
    return '{}:{}|{}'.format(
        posting.doc_id,
        ','.join(str(f) for f in posting.freq),
        ','.join(str(p) for positions in posting.positions for p in positions),
    )

def parse_posting(value):
    try:
        doc_id, rest = value.split(':', 1)
        freq, positions = rest.split('|', 1)

        freq = [int(f) for f in freq.split(',')]
        positions = [int(p) for p in positions.split(',')] if positions else []
        doc_id = int(doc_id)
    except ValueError as e:
        raise ParseError('malformed posting: {!r}'.format(value)) from e

    if len(freq) != len(FIELDS) or sum(freq) != len(positions):
        raise ParseError('malformed posting: {!r}'.format(value))

    # Field i takes the next freq[i] positions.
    rv = []
    offset = 0
    for f in freq:
        rv.append(tuple(positions[offset:offset + f]))
        offset += f

    return Posting(doc_id, tuple(freq), tuple(rv))

def format_postings(postings):
    return ';'.join(format_posting(p) for p in postings)

def parse_postings(value):
    if not value:
        return []

    return [parse_posting(p) for p in value.split(';')]

def format_term_record(term, postings):
    return '{}\t{}'.format(term, format_postings(postings))

def parse_term_record(line):
    """Parse one `term<TAB>postings` line into (term, [Posting])."""
    line = line.rstrip('\n')

    if not '\t' in line:
        raise ParseError('malformed term record: {!r}'.format(line))

    term, postings = line.split('\t', 1)
    return term, parse_postings(postings)
