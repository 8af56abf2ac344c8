from fastapi import FastAPI
import logging
from pathlib import Path
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.db.init_db import create_tables, seed_admin
from app.db.session import Database

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

ENDPOINTS = [
    ("POST", "/api/register", "Register new user"),
    ("POST", "/api/login", "User login"),
    ("GET", "/api/profile", "Get user profile"),
    ("PUT", "/api/profile", "Update user profile"),
    ("POST", "/api/logout", "User logout"),
    ("GET", "/api/health", "Health check"),
]

def _run_migrations_if_needed():
    """Apply Alembic migrations automatically in production if enabled.

    Controlled by AUTO_APPLY_MIGRATIONS (default: on). Safe to run repeatedly.
    """
    if settings.env.lower() != "prod":
        return
    if not settings.auto_apply_migrations:
        return
    from alembic import command
    from alembic.config import Config
    alembic_ini = Path(__file__).resolve().parents[1] / "alembic.ini"
    if not alembic_ini.exists():
        logger.warning("alembic.ini not found at %s, skipping auto-migrations", alembic_ini)
        return
    cfg = Config(str(alembic_ini))
    # Ensure script_location resolves correctly when launched from arbitrary CWD
    script_location = Path(__file__).resolve().parents[1] / "alembic"
    if script_location.exists():
        cfg.set_main_option("script_location", str(script_location))
    logger.info("Applying Alembic migrations -> head")
    command.upgrade(cfg, "head")
    logger.info("Migrations applied successfully")

app = FastAPI(title=settings.app_name, version="1.0.0")

origins = settings.cors_origins
logger.info("Resolved CORS origins: %s", origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)

@app.on_event("startup")
def startup():
    _run_migrations_if_needed()
    database = Database(
        settings.sqlalchemy_database_url,
        pool_size=settings.db_pool_size,
        pool_timeout=settings.db_pool_timeout,
    )
    try:
        database.connect()
    except Exception:
        logger.exception("Error connecting to database")
        database.dispose()
        raise
    app.state.database = database
    if settings.is_dev or settings.env.lower() == "test":
        create_tables(database)
    if settings.is_dev:
        seed_admin(database)
    logger.info("%s ready, available endpoints:", settings.app_name)
    for method, path, summary in ENDPOINTS:
        logger.info("  %-4s %s - %s", method, path, summary)

@app.on_event("shutdown")
def shutdown():
    database = getattr(app.state, "database", None)
    if database is not None:
        database.dispose()
