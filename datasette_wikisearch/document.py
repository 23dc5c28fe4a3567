from selectolax.parser import HTMLParser

def normalize_space(text):
    return ' '.join(text.split())

class Document:
    """A fetched page: the URL it was finally served from, plus its parsed HTML."""

    def __init__(self, url, html, status_code=200):
        self.url = url
        self.html = html
        self.status_code = status_code
        self._parser = None

    @property
    def parser(self):
        if self._parser is None:
            self._parser = HTMLParser(self.html)

        return self._parser

    def css(self, selector):
        return self.parser.css(selector)

    def css_first(self, selector):
        return self.parser.css_first(selector)

    def get_element_by_id(self, id):
        return self.parser.css_first('#{}'.format(id))

    def text(self, node):
        """Whitespace-normalized visible text of a node, ignoring scripts and styles."""
        if node is None:
            return ''

        # Work on a copy so the document's own tree is left untouched.
        copy = HTMLParser(node.html)
        for el in copy.css('script, style'):
            el.decompose()

        root = copy.body or copy.root
        if root is None:
            return ''

        return normalize_space(root.text(separator=' '))
