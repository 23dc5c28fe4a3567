from ..hookspecs import hookimpl

ENTRY_URL = 'entry-url'

@hookimpl
def get_seed_urls(config):
    if ENTRY_URL in config and config[ENTRY_URL]:
        return [config[ENTRY_URL]]

    return []

@hookimpl
def config_schema():
    from ..config import ConfigSchema
    return ConfigSchema(
        schema = {
            'type': 'string',
            'pattern': '^https?://.+'
        },
        key = ENTRY_URL,
    )

@hookimpl
def config_default_value():
    return 'https://en.wikipedia.org/wiki/Special:Random'
