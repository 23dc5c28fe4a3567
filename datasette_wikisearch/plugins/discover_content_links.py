from ..hookspecs import hookimpl
from .extract_wiki_page import CONTENT_SELECTOR

@hookimpl
def discover_urls(document):
    el_content = document.css_first(CONTENT_SELECTOR)

    if el_content is None:
        return []

    rv = []
    for a in el_content.css('a'):
        href = a.attributes.get('href')

        if href and href.strip():
            rv.append(href.strip())

    return rv
