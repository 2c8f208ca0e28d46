from collections import OrderedDict
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Header, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from . import __version__
from .config import get_settings
from .datasources.base import DataSource
from .datasources.github_adapter import GitHubAdapter
from .errors import ApiError, NotFound, RateLimited
from .renderers import render_dashboard
from .schemas import DashboardView, SearchRequest, SessionState
from .services.controller import DashboardController, classify_error
from .services.pipeline import load_dashboard

settings = get_settings()
github = GitHubAdapter(settings)
# least recently used first
sessions: "OrderedDict[str, DashboardController]" = OrderedDict()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await github.aclose()


app = FastAPI(title="GitHub Profile Dashboard", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_datasource() -> DataSource:
    return github


def get_controller(
    x_session_id: str = Header(default="default"),
    source: DataSource = Depends(get_datasource),
) -> DashboardController:
    controller = sessions.get(x_session_id)
    if controller is not None:
        sessions.move_to_end(x_session_id)
        return controller

    logger.debug(f"[session] new session {x_session_id}")
    controller = sessions[x_session_id] = DashboardController(source)
    while len(sessions) > settings.max_sessions:
        evicted_id, evicted = sessions.popitem(last=False)
        evicted.close()
        logger.debug(f"[session] evicted session {evicted_id}")
    return controller


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "token_configured": bool(settings.github_token),
    }


@app.get("/api/quick-picks")
async def quick_picks():
    return {"usernames": settings.quick_picks}


@app.get("/api/dashboard", response_model=DashboardView)
async def dashboard(
    username: str = Query(..., min_length=1),
    source: DataSource = Depends(get_datasource),
):
    username = username.strip()
    if not username:
        raise HTTPException(status_code=400, detail="Missing 'username'.")
    try:
        data = await load_dashboard(source, username)
    except ApiError as exc:
        status = 404 if isinstance(exc, NotFound) else 429 if isinstance(exc, RateLimited) else 502
        logger.warning(f"[dashboard] {username}: {exc}")
        raise HTTPException(status_code=status, detail=classify_error(exc, username).model_dump())
    return render_dashboard(data)


@app.get("/api/session", response_model=SessionState)
async def session_state(controller: DashboardController = Depends(get_controller)):
    return controller.state()


@app.post("/api/session/search", response_model=SessionState)
async def session_search(body: SearchRequest, controller: DashboardController = Depends(get_controller)):
    return await controller.submit(body.username)


@app.post("/api/session/quick/{username}", response_model=SessionState)
async def session_quick(username: str, controller: DashboardController = Depends(get_controller)):
    return await controller.quick_select(username)


@app.post("/api/session/retry", response_model=SessionState)
async def session_retry(controller: DashboardController = Depends(get_controller)):
    return await controller.retry()


@app.post("/api/session/back", response_model=SessionState)
async def session_back(controller: DashboardController = Depends(get_controller)):
    return controller.back()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8020)
