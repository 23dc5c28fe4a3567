from urllib.parse import urljoin, urlsplit
from .errors import FetchError

def canonicalize(url):
    """scheme://netloc/path?query, with the anchor removed."""
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise FetchError(FetchError.MALFORMED, url, str(e)) from e

    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise FetchError(FetchError.MALFORMED, url, 'not an absolute http(s) url')

    rv = '{}://{}{}'.format(parsed.scheme, parsed.netloc, parsed.path)
    if parsed.query:
        rv += '?' + parsed.query

    return rv

def absolutize_url(base_url, new_url):
    """Resolve new_url against base_url and canonicalize it; None if that isn't possible."""
    try:
        return canonicalize(urljoin(base_url, new_url))
    except (ValueError, FetchError):
        return None

def host_and_path(url):
    parsed = urlsplit(url)
    return (parsed.hostname or '', parsed.path)
