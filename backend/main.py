import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.core import config
from backend.database import Database
from backend.routes import admin_routes, appointment_routes, catalog_routes
from backend.seed import seed_sample_data
from backend.services.errors import ClinicError, InternalError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'success': False, 'error': message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ())[1:])
        messages.append(f"{location}: {error.get('msg')}" if location else error.get('msg'))
    return '; '.join(messages) or 'Invalid request.'


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ClinicError)
    async def clinic_error_handler(request: Request, exc: ClinicError):
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == 'Not Found':
            logger.info('Route not found: %s %s', request.method, request.url.path)
            return _error_response(exc.status_code, 'Route not found.')
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error_response(400, _describe_validation_error(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
        return _error_response(InternalError.status_code, InternalError.default_message)


def create_app(database: Database | None = None, seed: bool | None = None) -> FastAPI:
    logging.basicConfig(level=config.LOG_LEVEL)
    config.validate_runtime_config()

    owns_database = database is None
    database = database or Database(config.DATABASE_URL)
    seed = config.SEED_SAMPLE_DATA if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            database.create_schema()
            if seed:
                with database.session() as db:
                    seed_sample_data(db)
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL.')
        logger.info('Clinic booking API ready')
        try:
            yield
        finally:
            if owns_database:
                database.dispose()
                logger.info('Database connections closed')

    app = FastAPI(title='Clinic Booking API', lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    @app.get('/')
    def root():
        return {'status': 'Clinic Booking API Running'}

    app.include_router(catalog_routes.router, prefix='/api')
    app.include_router(appointment_routes.router, prefix='/api')
    app.include_router(admin_routes.router, prefix='/api/admin')

    return app


app = create_app()
