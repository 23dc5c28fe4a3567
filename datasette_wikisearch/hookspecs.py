from pluggy import HookimplMarker
from pluggy import HookspecMarker

hookspec = HookspecMarker("datasette_wikisearch")
hookimpl = HookimplMarker("datasette_wikisearch")

@hookspec
def config_schema():
    """Returns a ConfigSchema describing the config key this plugin owns."""

@hookspec
def config_default_value():
    """Returns a reasonable default value that conforms to config_schema."""

@hookspec
def get_seed_urls(config):
    """Get list of URLs to start (and restart) crawling from."""

@hookspec(firstresult=True)
def fetch_url(config, url):
    """Fetch a URL and return a Document; raise FetchError on failure."""

@hookspec(firstresult=True)
def extract_page(config, url, document):
    """Extract a Page from a fetched Document, or None if it isn't one."""

@hookspec()
def discover_urls(config, url, document):
    """Discover new URLs to crawl, in order of appearance."""

@hookspec()
def canonicalize_url(config, from_url, to_url, to_url_depth):
    """Return False to reject a URL."""
