from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from promptbot.adapters.recording import RecordingTransport
from promptbot.config import Settings, load_settings
from promptbot.domain import Activity
from promptbot.runtime import DialogRuntime


def create_app(settings: Settings | None = None, runtime: DialogRuntime | None = None) -> FastAPI:
    settings = settings or load_settings()
    runtime = runtime or DialogRuntime(settings)

    app = FastAPI(title="PromptBot")
    app.state.runtime = runtime

    # Plain ``def`` endpoints run in FastAPI's thread pool; the runtime
    # serialises turns per conversation.
    @app.post("/api/messages")
    def post_activity(activity: Activity) -> JSONResponse:
        transport = RecordingTransport()
        session = runtime.process(activity, transport)
        body: dict[str, Any] = {
            "session": session.model_dump(mode="json") if session else None,
            "activities": [a.model_dump(mode="json") for a in transport.drain()],
        }
        return JSONResponse(body)

    @app.get("/api/conversations/{conversation_id}")
    def get_conversation(conversation_id: str) -> JSONResponse:
        session = runtime.get_session(conversation_id)
        if session is None:
            raise HTTPException(status_code=404, detail="conversation not found")
        return JSONResponse(session.model_dump(mode="json"))

    @app.delete("/api/conversations/{conversation_id}")
    def end_conversation(conversation_id: str) -> JSONResponse:
        return JSONResponse({"ended": runtime.end_conversation(conversation_id)})

    @app.get("/healthz")
    def healthz() -> JSONResponse:
        return JSONResponse({"ok": True})

    return app


_app: FastAPI | None = None


def __getattr__(name: str) -> Any:
    # ``app`` is built on first attribute access, then reused.
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main() -> None:
    # Allow running via: python -m promptbot.web_server
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "promptbot.web_server:app",
        host=settings.WEB_HOST,
        port=settings.WEB_PORT,
        reload=False,
        access_log=False,
        log_level="warning",
    )


if __name__ == "__main__":
    main()
