from fastapi import FastAPI
from fastapi.requests import Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.concurrency import run_in_threadpool
from sqlmodel import create_engine, SQLModel
from pathlib import Path
from cerebro import config
from cerebro.admin import AdminService, Unauthorized
from cerebro.assistant import AnthropicAssistant, CompletionServiceError, LLMAssistant
from cerebro.chat import ChatProxy, MissingParameter
from cerebro.extractor import ProfileExtractor
from cerebro.store import SessionTracker, SubmissionStore
import logging
import statsd
import time

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
log = logging.getLogger("cerebro")

def make_engine(database_url: str = config.DATABASE_URL):
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args)

async def read_json(req: Request) -> dict:
    try:
        body = await req.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}

def create_app(
    engine=None,
    assistant: LLMAssistant = None,
    extractor: ProfileExtractor = None,
    metrics: statsd.StatsClient = None,
    admin_token: str = config.ADMIN_TOKEN,
    public_dir: str = config.PUBLIC_DIR,
    cors_origins=config.CORS_ORIGINS,
) -> FastAPI:
    if engine is None:
        engine = make_engine()
    if metrics is None:
        metrics = statsd.StatsClient(host=config.GRAPHITE_HOST, port=config.GRAPHITE_HOST_PORT, prefix=config.METRICS_PREFIX)
    if assistant is None:
        assistant = AnthropicAssistant(metrics=metrics)

    public_path = Path(public_dir)
    if not public_path.is_absolute():
        public_path = Path(__file__).parent / public_path
    public_path = public_path.resolve()

    # create all tables
    SQLModel.metadata.create_all(engine)

    app = FastAPI()
    app.state.tracker = SessionTracker(engine)
    app.state.store = SubmissionStore(engine)
    app.state.chat = ChatProxy(assistant=assistant, tracker=app.state.tracker, metrics=metrics, extractor=extractor)
    app.state.admin = AdminService(store=app.state.store, tracker=app.state.tracker, metrics=metrics, admin_token=admin_token)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["GET", "POST", "PATCH"],
        allow_headers=["Content-Type", "x-admin-token"],
    )

    @app.middleware("http")
    async def _limit_body_size(req: Request, call_next):
        content_length = req.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > config.MAX_BODY_BYTES:
            return JSONResponse({"error": "Request body too large"}, status_code=413)
        return await call_next(req)

    @app.exception_handler(Unauthorized)
    async def _unauthorized(req: Request, exc: Unauthorized):
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    @app.on_event("startup")
    def _announce():
        log.info("Cerebro server running on port %s", config.PORT)

    @app.post("/api/chat")
    async def _chat(req: Request):
        # time it starts handling a request
        start_time = time.time()
        body = await read_json(req)

        try:
            # the completion call blocks, keep it off the event loop
            result = await run_in_threadpool(app.state.chat.handle_chat, body.get("sessionId"), body.get("messages"))
        except MissingParameter as e:
            return JSONResponse({"error": e.message}, status_code=400)
        except CompletionServiceError as e:
            log.error("Anthropic error (%s): %s", e.status_code, e.body)
            metrics.incr("errors.chat_upstream")
            return JSONResponse({"error": "AI service error"}, status_code=502)
        except Exception:
            log.exception("Chat error")
            metrics.incr("errors.chat")
            return JSONResponse({"error": "Server error"}, status_code=500)

        metrics.timing("chat.timed", (time.time() - start_time) * 1000)
        return result.to_dict()

    @app.post("/api/submissions")
    async def _create_submission(req: Request):
        body = await read_json(req)

        session_id = body.get("sessionId")
        if not session_id or not isinstance(session_id, str):
            return JSONResponse({"error": "Missing sessionId"}, status_code=400)

        submission_id = app.state.store.create_submission(session_id, body.get("transcript"), body.get("profile"))
        metrics.incr("submissions.create")
        return { "success": True, "id": submission_id }

    @app.get("/api/submissions")
    async def _list_submissions(req: Request, status: str = None):
        submissions, total = app.state.admin.list_submissions(req.headers.get("x-admin-token"), status)
        return { "submissions": submissions, "total": total }

    @app.patch("/api/submissions/{submission_id}")
    async def _update_submission(submission_id: str, req: Request):
        token = req.headers.get("x-admin-token")
        app.state.admin.authorize(token)

        status = (await read_json(req)).get("status")
        if not isinstance(status, str) or not status:
            return JSONResponse({"error": "Missing status"}, status_code=400)

        app.state.admin.update_status(token, submission_id, status)
        return { "success": True }

    @app.get("/api/stats")
    async def _stats(req: Request):
        return app.state.admin.compute_stats(req.headers.get("x-admin-token"))

    @app.get("/{full_path:path}")
    async def _static(full_path: str):
        requested = (public_path / full_path).resolve()
        if full_path and requested.is_relative_to(public_path) and requested.is_file():
            return FileResponse(requested)

        index = public_path / "index.html"
        if not index.is_file():
            return JSONResponse({"error": "Not found"}, status_code=404)
        return FileResponse(index)

    return app

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=config.PORT)
