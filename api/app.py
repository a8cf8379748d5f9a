"""HTTP API entrypoint for driving battles from a web UI or scripts."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from arena import BoostSearch, MapFormatError, Scenario
from game_runner import BattleRunner, run_single_game
from infra.logger import get_logger

logger = get_logger(__name__)

app = FastAPI(title="Grid Skirmish")
runner: BattleRunner | None = None

# Allow the browser-based control panel (served from file:// or other origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class StartRequest(BaseModel):
    scenario: dict


class SimulateRequest(BaseModel):
    map: str
    elf_attack_boost: int = Field(default=0, ge=0)
    max_rounds: int | None = Field(default=None, ge=0)


class BoostRequest(BaseModel):
    map: str
    start: int = Field(default=1, ge=0)
    max_boost: int | None = Field(default=None, ge=0)
    max_rounds: int | None = Field(default=None, ge=0)


def _scenario_or_400(build) -> Scenario:
    try:
        return build()
    except MapFormatError as exc:
        raise HTTPException(400, f"Invalid map: {exc}") from exc
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc


@app.post("/start")
def start(request: StartRequest):
    global runner
    scenario = _scenario_or_400(lambda: Scenario.from_dict(request.scenario))
    runner = BattleRunner(scenario)
    logger.info("Started battle %s", scenario)
    return {"success": True, "frame": runner.get_initial_frame().to_dict()}


@app.post("/step")
def step():
    if runner is None:
        raise HTTPException(400, "No active battle")
    try:
        return runner.step().to_dict()
    except RuntimeError as exc:
        raise HTTPException(400, str(exc)) from exc


@app.get("/status")
def status():
    if runner is None:
        return {"active": False}
    return {"active": True, "round": runner.round, "done": runner.done}


@app.post("/simulate")
def simulate(request: SimulateRequest):
    scenario = _scenario_or_400(lambda: Scenario(
        request.map,
        elf_attack_boost=request.elf_attack_boost,
        max_rounds=request.max_rounds,
    ))
    return run_single_game(scenario).to_dict()


@app.post("/boost")
def boost(request: BoostRequest):
    scenario = _scenario_or_400(lambda: Scenario(request.map, max_rounds=request.max_rounds))
    result = BoostSearch().find_minimal_boost(
        scenario,
        start=request.start,
        max_boost=request.max_boost,
    )
    if result is None:
        return {"found": False}
    return {"found": True, **result.to_dict()}
