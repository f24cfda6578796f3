import json
import logging
import os
import time

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Literal, Optional

from navsim.simulate import samples_for_scenario

# Handlers are left to the server runner; only the package level is set here.
logging.getLogger("navsim").setLevel(os.getenv("NAVSIM_LOG_LEVEL", "WARNING").upper())
logger = logging.getLogger(__name__)

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class BodySpec(BaseModel):
    name: str
    mass: float = 1.0
    position: Optional[List[float]] = None
    velocity: Optional[List[float]] = None
    goal: Optional[List[float]] = None
    maxSpeed: Optional[float] = None
    objectKey: str = "default"
    textureKey: str = "default"
    scale: float = 1.0


class SimulateRequest(BaseModel):
    bodies: List[BodySpec]
    durationSec: float
    dtSec: float = 0.016
    queryMode: Literal["accuracy", "midpoints"] = "accuracy"
    segments: Optional[int] = None
    bounds: Optional[List[List[float]]] = None
    profile: Optional[bool] = False


class TrajectorySample(BaseModel):
    t: float
    positions: List[List[float]]
    states: List[Literal["idle", "planning", "following"]]


class Event(BaseModel):
    t: float
    type: Literal["path_set", "path_unavailable", "waypoint_reached", "arrived", "cleared"]
    body: str
    waypoint: Optional[List[float]] = None


class BodyMetadata(BaseModel):
    name: str
    mass: float
    maxSpeed: float
    objectKey: str
    textureKey: str
    scale: float
    goal: Optional[List[float]] = None


class SimulateResponse(BaseModel):
    bodyMetadata: List[BodyMetadata]
    samples: List[TrajectorySample]
    events: List[Event]
    meta: dict


@app.post("/api/simulate", response_model=SimulateResponse)
def simulate(req: SimulateRequest):
    """
    Run the requested bodies toward their goals and return sampled
    trajectories with the navigation events raised along the way.
    """
    payload = req.dict()
    names = [body.name for body in req.bodies]
    if len(set(names)) != len(names):
        raise HTTPException(status_code=422, detail="body names must be unique")

    physics_start = time.perf_counter()
    try:
        result = samples_for_scenario(payload, req.durationSec, req.dtSec)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    meta = {"dtSec": req.dtSec, "queryMode": req.queryMode}
    if req.profile:
        meta["profile"] = {
            "timingsMs": {
                "samples_for_scenario": (time.perf_counter() - physics_start) * 1000.0
            },
            "serverTimestamp": time.time(),
        }

    if os.getenv("NAVSIM_DEBUG", "false").lower() == "true":
        with open("navigation_events.json", "w") as f:
            json.dump(result["events"], f, indent=2)

    unavailable = [e["body"] for e in result["events"] if e["type"] == "path_unavailable"]
    if unavailable:
        logger.info("No path for bodies: %s", ", ".join(unavailable))

    return {
        "bodyMetadata": result["bodyMetadata"],
        "samples": result["samples"],
        "events": result["events"],
        "meta": meta,
    }
