"""
FastAPI read surface for the FlowSync dashboard.

Analytics are computed on request from the in-memory stores; nothing here
persists derived data. Stores are loaded lazily from the fixture directory
and can be swapped with ``set_stores`` (tests do this).
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

import config
from errors import NotFoundError, UnsupportedOperationError
from insight_engine import InsightService
from sources import FixtureStores, load_fixture_stores

log = logging.getLogger("api")


# ─── App setup ─────────────────────────────────────────────

app = FastAPI(title="FlowSync Insights API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.FRONTEND_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

_stores: Optional[FixtureStores] = None


def get_stores() -> FixtureStores:
    global _stores
    if _stores is None:
        _stores = load_fixture_stores(config.DATA_DIR)
    return _stores


def set_stores(stores: Optional[FixtureStores]) -> None:
    global _stores
    _stores = stores


def _service() -> InsightService:
    s = get_stores()
    return InsightService(s.moods, s.biometrics, s.goals)


class MoodRequest(BaseModel):
    mood: str
    moodScore: int
    note: Optional[str] = None
    timestamp: Optional[datetime] = None


# ─── Routes ────────────────────────────────────────────────

@app.get("/")
def root() -> Dict[str, Any]:
    return {"service": "flowsync-insights-api", "status": "ok"}


@app.get("/api/v1/energy")
def energy(day: Optional[date] = Query(default=None, alias="date")) -> Dict[str, Any]:
    return _service().energy_breakdown(day).to_dict()


@app.get("/api/v1/burnout")
def burnout(day: Optional[date] = Query(default=None, alias="date")) -> Dict[str, Any]:
    return _service().burnout(day).to_dict()


@app.get("/api/v1/goals")
def goals() -> Dict[str, Any]:
    return {"goals": [g.to_json() for g in get_stores().goals.all()]}


@app.get("/api/v1/goals/adjustments")
def goal_adjustments(day: Optional[date] = Query(default=None, alias="date")) -> Dict[str, Any]:
    return _service().goal_adjustments(day).to_dict()


@app.post("/api/v1/goals/{goal_id}/tasks/{task_id}/toggle")
def toggle_task(goal_id: int, task_id: int) -> Dict[str, Any]:
    try:
        goal = get_stores().goals.toggle_task(goal_id, task_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"goal": goal.to_json()}


@app.post("/api/v1/moods", status_code=201)
def log_mood(body: MoodRequest) -> Dict[str, Any]:
    try:
        entry = get_stores().moods.create(body.model_dump(exclude_none=True))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    log.info("Mood logged: %s (%d)", entry.mood_label, entry.mood_score)
    return {"mood": entry.to_json()}


@app.get("/api/v1/summary/weekly")
def weekly_summary(day: Optional[date] = Query(default=None, alias="date")) -> Dict[str, Any]:
    return _service().weekly_summary(day)


@app.get("/api/v1/insights/weekly")
def weekly_insights(day: Optional[date] = Query(default=None, alias="date")) -> Dict[str, Any]:
    items: List[Dict[str, Any]] = [i.to_dict() for i in _service().get_weekly_insights(day)]
    return {"insights": items, "count": len(items)}


@app.get("/api/v1/insights/{insight_id}")
def insight_by_id(
    insight_id: int, day: Optional[date] = Query(default=None, alias="date")
) -> Dict[str, Any]:
    insight = _service().get_by_id(insight_id, day)
    if insight is None:
        raise HTTPException(status_code=404, detail=str(NotFoundError("insight", insight_id)))
    return {"insight": insight.to_dict()}


# Insights are regenerated on every read; mutation is rejected.

@app.post("/api/v1/insights")
def create_insight(body: Dict[str, Any]) -> Dict[str, Any]:
    try:
        _service().create(body)
    except UnsupportedOperationError as e:
        raise HTTPException(status_code=405, detail=str(e))
    return {}


@app.put("/api/v1/insights/{insight_id}")
def update_insight(insight_id: int, body: Dict[str, Any]) -> Dict[str, Any]:
    try:
        _service().update(insight_id, body)
    except UnsupportedOperationError as e:
        raise HTTPException(status_code=405, detail=str(e))
    return {}


@app.delete("/api/v1/insights/{insight_id}")
def delete_insight(insight_id: int) -> Dict[str, Any]:
    try:
        _service().delete(insight_id)
    except UnsupportedOperationError as e:
        raise HTTPException(status_code=405, detail=str(e))
    return {}


def serve() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    serve()
