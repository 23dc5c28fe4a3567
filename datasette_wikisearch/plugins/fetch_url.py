from ..hookspecs import hookimpl
from ..document import Document
from ..errors import FetchError
import threading
import httpx

FETCH_TIMEOUT = 'fetch-timeout'

USER_AGENT = 'datasette-wikisearch/0.1'

_clients = {}
_lock = threading.Lock()

def get_client(timeout):
    with _lock:
        if timeout not in _clients:
            _clients[timeout] = httpx.Client(
                timeout=httpx.Timeout(timeout),
                follow_redirects=True,
                headers={'user-agent': USER_AGENT},
            )

        return _clients[timeout]

@hookimpl(trylast=True)
def fetch_url(config, url):
    client = get_client(config.get(FETCH_TIMEOUT, 30.0))

    try:
        response = client.get(url)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
        raise FetchError(FetchError.MALFORMED, url, str(e)) from e
    except httpx.HTTPError as e:
        raise FetchError(FetchError.IO, url, repr(e)) from e

    if response.status_code == 404:
        raise FetchError(FetchError.NOT_FOUND, url)

    if response.status_code >= 400:
        raise FetchError(FetchError.IO, url, 'HTTP {}'.format(response.status_code))

    # Special:Random redirects, so the document lives at the final URL.
    return Document(str(response.url), response.text, response.status_code)

@hookimpl
def config_schema():
    from ..config import ConfigSchema
    return ConfigSchema(
        schema = {
            'type': 'number',
            'title': 'Per-request timeout (seconds)',
        },
        key = FETCH_TIMEOUT,
    )

@hookimpl
def config_default_value():
    return 30.0
