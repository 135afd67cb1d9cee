import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from academy.core import config
from academy.database import SessionLocal, init_db
from academy.error_handlers import register_error_handlers
from academy.routes import auth_routes, course_routes, enrollment_routes
from academy.seed import seed_courses

app = FastAPI(title='Academy API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

register_error_handlers(app)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_application() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    config.validate_runtime_config()

    try:
        init_db()
        if config.SEED_COURSES:
            db = SessionLocal()
            try:
                seed_courses(db)
            finally:
                db.close()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.get('/')
def root():
    return {'status': 'Academy API Running'}


app.include_router(auth_routes.router, prefix='/api')
app.include_router(course_routes.router, prefix='/api')
app.include_router(enrollment_routes.router, prefix='/api')
