"""HTTP API entrypoint for driving a practice session from a web UI."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from engine import EngineConfig, UnknownEntityError
from infra.logger import configure_from_config, get_logger
from infra.paths import CONFIG_PATH
from runtime.runner import SessionRunner

ARENA_SIZE = 550.0


def load_config() -> EngineConfig:
    """Saved config file first, then HC_* environment variables (.env included)."""
    if CONFIG_PATH.exists():
        return EngineConfig.load_json(CONFIG_PATH)
    return EngineConfig.from_env()


config = load_config()
configure_from_config(config)
log = get_logger(__name__)

app = FastAPI(title="High Concept Mechanic Validator")
runner: SessionRunner | None = None


# Allow the browser-based practice board (served from file:// or other origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class ResetRequest(BaseModel):
    seed: int | None = None
    state: dict | None = None


class PositionRequest(BaseModel):
    entity_id: int
    x: float = Field(ge=0, le=ARENA_SIZE)
    y: float = Field(ge=0, le=ARENA_SIZE)


def _require_runner() -> SessionRunner:
    if runner is None:
        raise HTTPException(400, "No active session")
    return runner


@app.post("/reset")
def reset(request: ResetRequest):
    global runner
    session_config = config
    if request.seed is not None:
        session_config = EngineConfig.from_dict({**config.to_dict(), "seed": request.seed})
    try:
        runner = SessionRunner(session_config, state=request.state)
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(422, f"Invalid state: {exc}") from exc
    log.info("Session started via API (seed=%s)", session_config.seed)
    return runner.history[-1].to_dict()


@app.get("/snapshot")
def snapshot():
    return _require_runner().snapshot.to_dict()


@app.post("/position")
def position(request: PositionRequest):
    session = _require_runner()
    try:
        return session.move(request.entity_id, request.x, request.y).to_dict()
    except UnknownEntityError as exc:
        raise HTTPException(404, str(exc)) from exc


@app.post("/check")
def check():
    return _require_runner().check().to_dict()


@app.post("/advance")
def advance():
    return _require_runner().advance().to_dict()


@app.post("/autosolve")
def autosolve():
    return _require_runner().auto_solve().to_dict()


@app.get("/status")
def status():
    if runner is None:
        return {"active": False}
    snap = runner.snapshot
    return {
        "active": True,
        "phase": snap.phase,
        "sub_phase": snap.sub_phase,
        "solved": snap.solved,
        "step": runner.step_count,
        "done": runner.done,
    }
