from ..hookspecs import hookimpl

MAX_DEPTH = 'max-depth'

@hookimpl
def canonicalize_url(config, to_url_depth):
    if MAX_DEPTH in config:
        max_depth = config[MAX_DEPTH]

        if to_url_depth > max_depth:
            return False

@hookimpl
def config_schema():
    from ..config import ConfigSchema
    return ConfigSchema(
        schema = {
          'type': 'integer',
          'minimum': 0,
        },
        key = MAX_DEPTH,
    )

@hookimpl
def config_default_value():
    return 10
