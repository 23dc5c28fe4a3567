from ..hookspecs import hookimpl
from ..pages import Page, utc_now
from datetime import datetime, timezone
import json

TITLE_ID = 'firstHeading'
CONTENT_SELECTOR = '#mw-content-text .mw-parser-output'
CATEGORY_ID = 'mw-normal-catlinks'

def parse_timestamp(value):
    try:
        rv = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except (AttributeError, ValueError):
        return None

    if rv.tzinfo is None:
        rv = rv.replace(tzinfo=timezone.utc)

    return rv.astimezone(timezone.utc).replace(microsecond=0).isoformat()

def extract_last_modify(document):
    # MediaWiki embeds schema.org metadata, including dateModified, as JSON-LD.
    for script in document.css('script'):
        attrs = script.attributes
        if attrs.get('type') != 'application/ld+json':
            continue

        try:
            obj = json.loads(script.text())
        except ValueError:
            continue

        if isinstance(obj, dict) and 'dateModified' in obj:
            rv = parse_timestamp(obj['dateModified'])
            if rv:
                return rv

    return None

@hookimpl(trylast=True)
def extract_page(url, document):
    title = document.text(document.get_element_by_id(TITLE_ID)).strip()
    el_content = document.css_first(CONTENT_SELECTOR)

    if not title or el_content is None:
        return None

    content = document.text(el_content).strip()
    if not content:
        return None

    # Category could be missing entirely.
    categories = []
    el_category = document.get_element_by_id(CATEGORY_ID)
    if el_category is not None:
        for li in el_category.css('ul > li'):
            category = document.text(li).strip()
            if category:
                categories.append(category)

    return Page(title, content, categories, extract_last_modify(document) or utc_now())
