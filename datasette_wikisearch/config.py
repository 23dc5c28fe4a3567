from collections import namedtuple
import re
from .errors import ConfigError, StoreError
from .schema import current_schema_version

ConfigSchema = namedtuple('ConfigSchema', ['schema', 'key'])

_plugin_name = 'datasette-wikisearch'

THREADS = 'threads'
MAX_PAGES = 'max-pages'
INTERVAL = 'interval'

# Keys consumed by the crawl loop itself, rather than by a plugin.
CORE_CONFIG = (
    (ConfigSchema(schema={'type': 'integer', 'minimum': 1}, key=THREADS), 10),
    (ConfigSchema(schema={'type': 'integer', 'minimum': 0}, key=MAX_PAGES), 200000),
    # milliseconds
    (ConfigSchema(schema={'type': 'integer', 'minimum': 0}, key=INTERVAL), 500),
)

_json_types = {
    'integer': (int,),
    'number': (int, float),
    'string': (str,),
    'boolean': (bool,),
    'array': (list, tuple),
    'object': (dict,),
}

def _as_list(x):
    if isinstance(x, (list, tuple)) and not isinstance(x, ConfigSchema):
        return list(x)

    return [x]

def config_schemas():
    from .plugin import pm

    rv = {}
    for schema, default in CORE_CONFIG:
        rv[schema.key] = schema.schema

    for result in pm.hook.config_schema():
        for schema in _as_list(result):
            rv[schema.key] = schema.schema

    return rv

def default_config():
    from .plugin import pm

    rv = {}
    for schema, default in CORE_CONFIG:
        rv[schema.key] = default

    for plugin in pm.get_plugins():
        if not 'config_schema' in dir(plugin) or not 'config_default_value' in dir(plugin):
            continue

        schemas = _as_list(plugin.config_schema())
        value = plugin.config_default_value()

        if len(schemas) == 1:
            rv[schemas[0].key] = value
        else:
            for schema in schemas:
                rv[schema.key] = value[schema.key]

    return rv

def validate_config(config):
    schemas = config_schemas()

    for key, value in config.items():
        if not key in schemas:
            raise ConfigError('unknown config key: {}'.format(key))

        schema = schemas[key]
        expected = _json_types[schema['type']]

        # bool is an int in Python, but not in JSON-schema.
        if isinstance(value, bool) and schema['type'] != 'boolean':
            raise ConfigError('{} must be of type {}, got {!r}'.format(key, schema['type'], value))

        if not isinstance(value, expected):
            raise ConfigError('{} must be of type {}, got {!r}'.format(key, schema['type'], value))

        if 'minimum' in schema and value < schema['minimum']:
            raise ConfigError('{} must be at least {}, got {!r}'.format(key, schema['minimum'], value))

        if 'pattern' in schema and not re.search(schema['pattern'], value):
            raise ConfigError('{} must match {}, got {!r}'.format(key, schema['pattern'], value))

    return config

def crawl_config(**overrides):
    """The default crawl config, with any non-None overrides applied and validated."""
    config = default_config()

    for k, v in overrides.items():
        if v is not None:
            config[k] = v

    return validate_config(config)

def plugin_config(datasette):
    return datasette.plugin_config(_plugin_name) or {}

def get_database(datasette):
    config = plugin_config(datasette)

    if 'database' in config:
        if not config['database'] in datasette.databases:
            raise ConfigError('unknown database: {}'.format(config['database']))

        return datasette.databases[config['database']]

    for db in datasette.databases.values():
        if db.is_memory or not db.is_mutable or db.name.startswith('_'):
            continue

        return db

    return None

async def ensure_schema(db):
    def ensure_schema_internal(conn):
        from .pages import PageStore

        PageStore(conn).init_schema()

    await db.execute_write_fn(ensure_schema_internal, block=True)

    rv = await db.execute('pragma user_version')
    version = rv.first()[0]

    if version != current_schema_version:
        raise StoreError('unable to ensure schema in database {} (version={}; desired={}); please check that the database is mutable'.format(db.name, version, current_schema_version))
