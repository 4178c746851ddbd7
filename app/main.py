from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from app.utils.supabase_client_handlers import create_supabase_client, close_supabase_client
from app.configs.app_settings import settings
from app.routes.admin.admin_revenue_routes import admin_revenue_router
from app.routes.admin.admin_date_curation_routes import admin_date_curation_router
from app.routes.waitlist_routes import waitlist_router
from app.routes.email_routes import email_router
import logging

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # before yield = code to run during startup
    client = await create_supabase_client()
    logger.info("✅ Supabase async client initialized" if client else "✅ Running on mock data sources")

    yield
    # after yield = code to run during shutdown
    await close_supabase_client()
    logger.info("✅ Supabase client closed")


app = FastAPI(title="Datifyy Admin API", version="1.0.0", lifespan=lifespan)


# Catches request validation errors from body, query and path params across every router
@app.exception_handler(RequestValidationError)
async def custom_request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors"""
    logger.info(f"Request validation failed on {request.url.path}")
    return JSONResponse(status_code=400, content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Adjust this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(admin_revenue_router, prefix=settings.API_V1_STR)
app.include_router(admin_date_curation_router, prefix=settings.API_V1_STR)
app.include_router(waitlist_router, prefix=settings.API_V1_STR)
app.include_router(email_router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    return {"message": "Welcome to Datifyy Admin API"}


@app.get("/health")
async def health():
    return {"status": "ok", "mock_data": settings.USE_MOCK_DATA}
