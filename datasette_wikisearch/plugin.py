import importlib
import pluggy
import sys
from . import hookspecs

DEFAULT_PLUGINS = (
    "datasette_wikisearch.plugins.fetch_url",
    "datasette_wikisearch.plugins.seed_entry_url",
    "datasette_wikisearch.plugins.extract_wiki_page",
    "datasette_wikisearch.plugins.discover_content_links",
    "datasette_wikisearch.plugins.discover_allow",
    "datasette_wikisearch.plugins.max_depth",
)

pm = pluggy.PluginManager("datasette_wikisearch")
pm.add_hookspecs(hookspecs)

if not hasattr(sys, "_called_from_test"):
    # Only load plugins if not running tests
    pm.load_setuptools_entrypoints("datasette_wikisearch")

# Load default plugins
for plugin in DEFAULT_PLUGINS:
    mod = importlib.import_module(plugin)
    pm.register(mod, plugin)
