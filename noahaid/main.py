from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse

from noahaid.api.chat import router as chat_router

app = FastAPI(title="NoahAid")
CHAT_PAGE = Path(__file__).resolve().parent / "static" / "chat.html"


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/")
def root() -> FileResponse:
    return FileResponse(CHAT_PAGE)


@app.get("/api")
def api_root() -> dict[str, str]:
    return {"service": "NoahAid API", "status": "ok"}


app.include_router(chat_router)
