import uuid
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import RedirectResponse

from handling_portal.core.config import settings
from handling_portal.core.logging import TRACE_ID_CTX, setup_logging
from handling_portal.api.v1.api import api_router

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title=settings.APP_NAME)

# CORS: use CORS_ORIGINS from env in production; default to localhost for dev
_default_origins = [
    "http://127.0.0.1:5173", "http://localhost:5173",
    "http://127.0.0.1:8080", "http://localhost:8080",
]
_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()] if settings.CORS_ORIGINS else _default_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_trace_id(request: Request, call_next):
    trace_id = request.headers.get("x-trace-id") or str(uuid.uuid4())
    TRACE_ID_CTX.set(trace_id)
    response = await call_next(request)
    response.headers["X-Trace-Id"] = trace_id
    return response


app.include_router(api_router)


@app.get("/health")
def health():
    return {"status": "ok"}


# Serve the agent portal build so one URL = API + UI
_web = Path(__file__).resolve().parent.parent / "web"
if _web.is_dir():
    @app.get("/")
    def _root():
        return RedirectResponse(url="/index.html")

    app.mount("/", StaticFiles(directory=str(_web), html=True), name="web")
