
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from docscan.middleware.ratelimit import RateLimitMiddleware, make_key_func
from docscan.middleware.auth import ui_auth_middleware
from docscan.config import settings
from docscan.db.session import SessionLocal, init_db
from docscan.auth.service import ensure_default_admin
from docscan.auth.routes import router as auth_router
from docscan.users.routes import router as users_router
from docscan.documents.routes import router as documents_router
from docscan.scanner.routes import router as scan_router
from docscan.credits.routes import router as credits_router
from docscan.admin.routes import router as admin_router
from docscan.web.routes_ui import router as ui_router, STATIC_DIR

logger = logging.getLogger("docscan")

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    db = SessionLocal()
    try:
        ensure_default_admin(db)
    finally:
        db.close()
    logger.info("%s started (env=%s)", settings.app_name, settings.app_env)
    yield

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # an unparseable path id cannot name an existing entity
    if any(e.get("loc", ())[:1] == ("path",) for e in errors):
        return JSONResponse(status_code=404, content={"detail": "Not found"})
    fields = [".".join(str(p) for p in e.get("loc", ())[1:]) for e in errors]
    detail = "Invalid or missing fields: " + ", ".join(f for f in fields if f) if any(fields) else "Invalid request"
    return JSONResponse(status_code=400, content={"detail": detail})

def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        window_seconds=settings.rate_limit_window_seconds,
        max_calls=settings.rate_limit_max_calls,
        key_func=make_key_func(settings.secret_key),
        include_path_prefixes=("/scanUpload", "/matches"),
    )
    app.middleware("http")(ui_auth_middleware)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(documents_router)
    app.include_router(scan_router)
    app.include_router(credits_router)
    app.include_router(admin_router)
    app.include_router(ui_router)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.get("/", tags=["root"])
    def root():
        return {"name": settings.app_name, "env": settings.app_env}

    return app

app = create_app()
