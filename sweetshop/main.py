import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from sweetshop.core import config
from sweetshop.core.errors import register_exception_handlers
from sweetshop.database import Base, engine, ensure_sweet_schema
from sweetshop.models import sweet, user  # noqa: F401
from sweetshop.routes import auth_routes, sweet_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

app = FastAPI(title='Sweet Shop API', version=config.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

register_exception_handlers(app)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_sweet_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'success': True, 'message': 'Sweet Shop API is running', 'version': config.APP_VERSION}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(sweet_routes.router, prefix='/sweets')
