from .document import Document, normalize_space

def test_normalize_space():
    assert normalize_space('  a \n b\t c ') == 'a b c'

def test_document():
    doc = Document('https://en.example.org/wiki/A', '<html><body><p id="x">Hello <b>big</b>\n world<script>var x;</script></p><p>two</p></body></html>')

    assert doc.status_code == 200
    assert len(doc.css('p')) == 2
    assert doc.css_first('b').text() == 'big'
    assert doc.text(doc.get_element_by_id('x')) == 'Hello big world'
    assert doc.text(doc.get_element_by_id('missing')) == ''

    # The document's own tree keeps its scripts
    assert doc.css_first('script') is not None
