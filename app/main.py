from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
import logging

from config.settings import Settings, get_settings
from memos.core.errors import NotFoundError, ValidationError
from memos.core.store import MemoStore
from memos.models import MemoPayload


logging.basicConfig(
    level=get_settings().log_level,
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("memo_api")


def get_store(request: Request) -> MemoStore:
    return request.app.state.store


def _parse_id(raw: str) -> int:
    # Numeric lookups: "1", " 1", "1.0" and "1e0" all name memo 1.
    text = raw.strip()
    try:
        value = float(text) if text and "_" not in text else None
    except ValueError:
        value = None
    if value is None or not value.is_integer():
        raise NotFoundError(raw)
    return int(value)


def _payload(body: Any) -> MemoPayload:
    # Anything other than a JSON object carries no fields at all.
    if isinstance(body, dict):
        return MemoPayload.model_validate(body)
    return MemoPayload()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    store: Optional[MemoStore] = None, settings: Optional[Settings] = None
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Memo API", version="1.0.0")
    app.state.store = store if store is not None else MemoStore()

    # CORS: allow local frontend during development
    if settings.is_dev:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _reject_oversized(request: Request, size: object) -> JSONResponse:
        logger.warning(
            "Rejected %s %s: body of %s bytes exceeds %s",
            request.method,
            request.url.path,
            size,
            settings.max_body_bytes,
        )
        return _error(413, "request body too large")

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length is not None:
            try:
                too_large = int(length) > settings.max_body_bytes
            except ValueError:
                return _error(400, "invalid content-length")
            if too_large:
                return _reject_oversized(request, length)
        # Chunked bodies carry no length header; count what actually arrived.
        body = await request.body()
        if len(body) > settings.max_body_bytes:
            return _reject_oversized(request, len(body))
        return await call_next(request)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Invalid memo on %s %s: %s", request.method, request.url.path, exc.message)
        return _error(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.warning("Memo not found: id=%r", exc.memo_id)
        return _error(404, "memo not found")

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError):
        logger.warning("Rejected body on %s %s: %s", request.method, request.url.path, exc.errors())
        return _error(400, "invalid JSON body")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "internal server error")

    @app.get("/hello", response_class=PlainTextResponse)
    def hello() -> str:
        return "Hello, 자기2!"

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/memos")
    def list_memos(store: MemoStore = Depends(get_store)) -> List[Dict[str, Any]]:
        return [memo.to_dict() for memo in store.list()]

    @app.post("/api/memos", status_code=201)
    def create_memo(
        body: Any = Body(default=None),
        store: MemoStore = Depends(get_store),
    ) -> Dict[str, Any]:
        payload = _payload(body)
        memo = store.create(payload.title, payload.content)
        logger.info("Created memo id=%s title_len=%s", memo.id, len(memo.title))
        return memo.to_dict()

    @app.put("/api/memos/{memo_id}")
    def update_memo(
        memo_id: str,
        body: Any = Body(default=None),
        store: MemoStore = Depends(get_store),
    ) -> Dict[str, Any]:
        payload = _payload(body)
        memo = store.update(_parse_id(memo_id), payload.title, payload.content)
        logger.info("Updated memo id=%s", memo.id)
        return memo.to_dict()

    @app.delete("/api/memos/{memo_id}")
    def delete_memo(memo_id: str, store: MemoStore = Depends(get_store)) -> Dict[str, bool]:
        parsed = _parse_id(memo_id)
        store.delete(parsed)
        logger.info("Deleted memo id=%s", parsed)
        return {"success": True}

    return app


app = create_app()
