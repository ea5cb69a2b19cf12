"""Read-only HTTP surface that serves the written artifacts one file per request."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse

from atpdata.config import PipelineSettings
from atpdata.persistence import MATCHES_DIR, METADATA_FILE, PLAYERS_FILE, STATS_FILE


def _artifact_response(path: Path) -> FileResponse:
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"{path.name} not found")
    return FileResponse(path, media_type="application/json")


def create_app(data_dir: Path | str | None = None) -> FastAPI:
    app = FastAPI(title="atpdata artifacts")
    app.state.data_dir = Path(data_dir) if data_dir is not None else PipelineSettings.from_env().out_dir

    def _root(request: Request) -> Path:
        return request.app.state.data_dir

    @app.get("/health")
    async def health(request: Request) -> dict[str, str]:
        status = "ok" if (_root(request) / METADATA_FILE).is_file() else "empty"
        return {"status": status}

    @app.get("/data/metadata.json")
    async def metadata(request: Request):
        return _artifact_response(_root(request) / METADATA_FILE)

    @app.get("/data/stats.json")
    async def stats(request: Request):
        return _artifact_response(_root(request) / STATS_FILE)

    @app.get("/data/players.json")
    async def players(request: Request):
        return _artifact_response(_root(request) / PLAYERS_FILE)

    @app.get("/data/matches/{year}.json")
    async def matches(request: Request, year: int):
        if year <= 0:
            raise HTTPException(status_code=404, detail=f"{year}.json not found")
        return _artifact_response(_root(request) / MATCHES_DIR / f"{year}.json")

    return app


__all__ = ["create_app"]
