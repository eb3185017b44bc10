from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from supervision_api.api.health import router as health_router
from supervision_api.api.me import router as me_router
from supervision_api.api.root import router as root_router
from supervision_api.api.validation import router as validation_router
from supervision_api.core.config import settings
from supervision_api.core.errors import register_exception_handlers
from supervision_api.core.logging_config import configure_logging
from supervision_api.core.security import DevUserMiddleware

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title=settings.APP_NAME)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(DevUserMiddleware)

register_exception_handlers(app)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(me_router)
app.include_router(validation_router)
