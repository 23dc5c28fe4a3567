from .analysis import stem, normalize, analyze, analyze_query, analyze_phrase, field_length, document_fields

def test_normalize():
    assert normalize('Hello,') == stem('hello')
    assert normalize('WORLD!') == stem('world')
    assert normalize('jumps') == 'jump'

    # Stop words, punctuation and non-ASCII tokens aren't indexed
    assert normalize('The') == None
    assert normalize('--') == None
    assert normalize('e.g.') == None
    assert normalize('café') == None

def test_analyze_keeps_positions_of_dropped_tokens():
    assert list(analyze('the quick brown fox')) == [
        (1, stem('quick')),
        (2, stem('brown')),
        (3, stem('fox')),
    ]

def test_analyze_query():
    assert analyze_query('the Quick, brown fox') == [stem('quick'), stem('brown'), stem('fox')]
    assert analyze_query('') == []
    assert analyze_query('a the of') == []

def test_analyze_phrase():
    assert analyze_phrase('lord of the rings') == [(0, stem('lord')), (3, stem('rings'))]
    assert analyze_phrase('of the') == []

def test_field_length():
    assert field_length('the quick  brown fox') == 4
    assert field_length('') == 0

def test_document_fields():
    doc = {'id': 1, 'title': 'Hello', 'content': 'World', 'categories': ['Animals', 'Living Things']}
    assert document_fields(doc) == ('hello', 'world', 'animals living things')

    assert document_fields({'id': 1, 'title': 'A', 'content': 'B'})[2] == ''
