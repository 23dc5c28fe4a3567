class WikiSearchError(Exception):
    pass

class ConfigError(WikiSearchError):
    pass

class FetchError(WikiSearchError):
    MALFORMED = 'malformed'
    IO = 'io'
    NOT_FOUND = 'notFound'

    def __init__(self, kind, url, message=None):
        super().__init__('{} ({}): {}'.format(kind, url, message or kind))
        self.kind = kind
        self.url = url

class ParseError(WikiSearchError):
    pass

class StoreError(WikiSearchError):
    pass

class IndexStoreError(WikiSearchError):
    pass

class QueryError(WikiSearchError):
    pass

class WriterFailed(WikiSearchError):
    pass

class Interrupted(WikiSearchError):
    """Cooperative shutdown; never reported as a failure."""
