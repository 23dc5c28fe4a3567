import datasette
from .config import get_database, ensure_schema
from .routes import get_routes

@datasette.hookimpl
def startup(datasette):
    async def inner():
        db = get_database(datasette)

        if db is not None:
            await ensure_schema(db)

    return inner

@datasette.hookimpl
def register_routes(datasette):
    return get_routes(datasette)
