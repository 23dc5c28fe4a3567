from ..hookspecs import hookimpl
from ..urls import host_and_path
import re

HOST_REGEX = 'host-regex'
PATH_REGEX = 'path-regex'

_re = {}

def compiled(regex):
    if regex in _re:
        return _re[regex]

    rv = re.compile(regex)
    _re[regex] = rv
    return rv

@hookimpl
def canonicalize_url(config, to_url):
    host, path = host_and_path(to_url)

    if config.get(HOST_REGEX) and not compiled(config[HOST_REGEX]).fullmatch(host):
        return False

    if config.get(PATH_REGEX) and not compiled(config[PATH_REGEX]).fullmatch(path):
        return False

@hookimpl
def config_schema():
    from ..config import ConfigSchema
    return [
        ConfigSchema(
            schema = {
                'type': 'string',
                'title': 'Only crawl hosts matching this regex',
            },
            key = HOST_REGEX,
        ),
        ConfigSchema(
            schema = {
                'type': 'string',
                'title': 'Only crawl paths matching this regex',
            },
            key = PATH_REGEX,
        ),
    ]

@hookimpl
def config_default_value():
    return {
        HOST_REGEX: '^en.wikipedia.org$',
        # Special pages (such as Help:Category) are not crawled
        PATH_REGEX: '^/wiki/[^:]*$',
    }
