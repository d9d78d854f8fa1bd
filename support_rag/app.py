import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Callable, Optional

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# --- Local Imports ---
from support_rag import config
from support_rag.auth import Authenticator, SharedSecretAuthenticator, require_admin
from support_rag.core.exceptions import ConfigurationError, IngestionError, SupportRagError
from support_rag.rag.knowledge_store import InMemoryKnowledgeStore
from support_rag.services import SupportServices, build_services

logger = logging.getLogger(__name__)

ServicesFactory = Callable[[Optional[str]], SupportServices]


# --- Pydantic Models ---
class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1)


class ApiKeyRequest(BaseModel):
    api_key: str = Field(..., min_length=1)


# --- Startup/Shutdown Lifespan ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup: support assistant %s.",
                "configured" if app.state.services else "waiting for an API key")
    yield
    logger.info("Application shutdown.")


def _configure_services(app: FastAPI, api_key: Optional[str]) -> None:
    try:
        app.state.services = app.state.services_factory(api_key)
    except ConfigurationError as err:
        logger.warning("Assistant not configured: %s", err)
        app.state.services = None


def _require_services(request: Request) -> SupportServices:
    services = request.app.state.services
    if services is None:
        raise HTTPException(status_code=503, detail=config.CONFIG_MISSING_MESSAGE)
    return services


# --- Chat Router ---
chat_router = APIRouter()


@chat_router.get("/health")
async def health(request: Request):
    return {"status": "ok", "configured": request.app.state.services is not None}


@chat_router.post("/chat")
async def chat(body: QueryRequest, request: Request):
    services = request.app.state.services
    if services is None:
        return {"answer": config.CONFIG_MISSING_MESSAGE}

    try:
        answer = await services.pipeline.answer(body.query, request.app.state.store)
    except (SupportRagError, ValueError) as err:
        logger.error("Chat query failed: %s", err)
        return {"answer": config.CHAT_FAILURE_MESSAGE}
    return {"answer": answer}


# --- Protected Admin Router (requires admin credentials) ---
admin_router = APIRouter(
    prefix="/admin",
    dependencies=[Depends(require_admin)],
)


@admin_router.post("/login")
async def login():
    return {"authorized": True}


@admin_router.put("/api-key")
async def set_api_key(body: ApiKeyRequest, request: Request):
    _configure_services(request.app, body.api_key)
    if request.app.state.services is None:
        raise HTTPException(status_code=400, detail="API key rejected.")
    return {"configured": True}


@admin_router.post("/documents")
async def upload_document(request: Request, file: UploadFile = File(...)):
    services = _require_services(request)
    content = await file.read()
    progress: list[str] = []
    try:
        file_info = await services.ingestor.ingest(
            content,
            file.filename or "upload.txt",
            file.content_type or "text/plain",
            request.app.state.store,
            on_progress=progress.append,
        )
    except IngestionError as err:
        raise HTTPException(status_code=400, detail=f"Error: {err.message}")
    except ConfigurationError as err:
        raise HTTPException(status_code=503, detail=err.message)

    return {"file": asdict(file_info), "message": progress[-1], "progress": progress}


@admin_router.get("/knowledge-base")
async def knowledge_base(request: Request):
    return asdict(request.app.state.store.snapshot())


def create_app(
    api_key: Optional[str] = config.OPENAI_API_KEY,
    authenticator: Optional[Authenticator] = None,
    services_factory: ServicesFactory = build_services,
) -> FastAPI:
    app = FastAPI(title="Oriana Support Assistant", lifespan=lifespan)

    # --- CORS Middleware ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = InMemoryKnowledgeStore()
    app.state.authenticator = authenticator or SharedSecretAuthenticator()
    app.state.services_factory = services_factory
    _configure_services(app, api_key)

    app.include_router(chat_router)
    app.include_router(admin_router)
    return app


logging.basicConfig(level=config.LOG_LEVEL, format="[%(levelname)s] %(message)s")
app = create_app()
