from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import AsyncIterator, List, Optional, Sequence, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from liftsweep import Building, LiftSweepError, Passenger, ScenarioConfig
from liftsweep.arrivals import ArrivalRecord
from liftsweep.scenario import build_building, default_scenarios, run_scenario

logger = logging.getLogger(__name__)

# Upper bound on a single /run request, and on how far ahead a posted arrival may be.
RUN_TICK_LIMIT = 500_000


class ArrivalRow(BaseModel):
    arrival_time: int = Field(ge=0, le=RUN_TICK_LIMIT)
    origin: int
    destination: int

    def to_record(self, passenger_id: Optional[int] = None) -> ArrivalRecord:
        return ArrivalRecord(self.arrival_time, self.origin, self.destination, passenger_id)


class ScenarioRequest(BaseModel):
    config: ScenarioConfig = Field(default_factory=ScenarioConfig)
    arrivals: List[ArrivalRow] = []


class PassengerRequest(BaseModel):
    origin: int
    destination: int
    delay: int = Field(0, ge=0, le=RUN_TICK_LIMIT)


class StepRequest(BaseModel):
    ticks: int = Field(1, ge=1, le=100_000)


class SimulationManager:
    """Holds the live building and fans its state out to websocket clients."""

    def __init__(
        self,
        config: Optional[ScenarioConfig] = None,
        tick_interval: float = 0.25,
        autostart: bool = True,
        run_tick_limit: int = RUN_TICK_LIMIT,
    ) -> None:
        self.config = config or default_scenarios()[0]
        self.building: Building = build_building(self.config)
        self.tick_interval = tick_interval
        self.autostart = autostart
        self.run_tick_limit = run_tick_limit
        self.clients: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    @contextlib.asynccontextmanager
    async def running(self) -> AsyncIterator["SimulationManager"]:
        """Advance the live building in the background while the context is open."""
        ticker = asyncio.create_task(self._tick_forever()) if self.autostart else None
        try:
            yield self
        finally:
            if ticker is not None:
                ticker.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await ticker

    async def _tick_forever(self) -> None:
        while True:
            state = await self.step(1)
            if self.clients:
                await self.broadcast(state)
            await asyncio.sleep(self.tick_interval)

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        for client in list(self.clients):
            try:
                await client.send_text(message)
            except (WebSocketDisconnect, RuntimeError):
                logger.debug("dropping websocket client after a failed send")
                self.disconnect(client)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_json(self.current_state())

    def disconnect(self, websocket: WebSocket) -> None:
        self.clients.discard(websocket)

    def current_state(self) -> dict:
        building = self.building
        return {
            "scenario": self.config.name,
            "time": building.current_time,
            "complete": building.is_complete(),
            "building": building.snapshot(),
            "metrics": building.metrics.snapshot(building.current_time).to_dict(),
            "passengers": {
                "total": building.total_passengers,
                "delivered": building.delivered_passengers,
            },
        }

    def run_limit(self, config: ScenarioConfig) -> int:
        if config.max_ticks is None:
            return self.run_tick_limit
        return min(config.max_ticks, self.run_tick_limit)

    async def reset(self, request: ScenarioRequest) -> dict:
        building = build_building(request.config, numbered_records(request.arrivals))
        async with self._lock:
            self.config = request.config
            self.building = building
            logger.info("scenario %r loaded with %d passengers", self.config.name, building.total_passengers)
            return self.current_state()

    async def add_passenger(self, request: PassengerRequest) -> dict:
        async with self._lock:
            passenger = Passenger(
                passenger_id=self.building.total_passengers + 1,
                arrival_time=self.building.current_time + request.delay,
                origin=request.origin,
                destination=request.destination,
            )
            self.building.add_arrival(passenger)
            state = self.current_state()
            state["passenger_id"] = passenger.passenger_id
            return state

    async def step(self, ticks: int) -> dict:
        async with self._lock:
            for _ in range(ticks):
                self.building.step()
            return self.current_state()


def numbered_records(rows: Sequence[ArrivalRow]) -> List[ArrivalRecord]:
    """Records numbered from 1 in the order they were posted, sorted by arrival tick."""
    records = [row.to_record(passenger_id) for passenger_id, row in enumerate(rows, start=1)]
    return sorted(records, key=lambda r: r.arrival_time)


def create_app(manager: Optional[SimulationManager] = None, cors_origins: Sequence[str] = ("*",)) -> FastAPI:
    manager = manager or SimulationManager()

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with manager.running():
            yield

    app = FastAPI(title="LiftSweep Simulation API", lifespan=lifespan)
    app.state.manager = manager
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/state")
    async def get_state() -> dict:
        return manager.current_state()

    @app.post("/scenario")
    async def load_scenario(request: ScenarioRequest) -> dict:
        try:
            return await manager.reset(request)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.post("/passengers")
    async def add_passenger(request: PassengerRequest) -> dict:
        try:
            return await manager.add_passenger(request)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.post("/step")
    async def step(request: StepRequest) -> dict:
        return await manager.step(request.ticks)

    @app.post("/run")
    async def run(request: ScenarioRequest) -> dict:
        records = numbered_records(request.arrivals)
        max_ticks = manager.run_limit(request.config)
        try:
            # A whole run is CPU-bound; keep it off the loop that drives the live building.
            return await asyncio.to_thread(run_scenario, request.config, records, False, max_ticks)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except LiftSweepError as exc:
            raise HTTPException(status_code=409, detail=str(exc))

    @app.websocket("/ws/stream")
    async def stream(websocket: WebSocket) -> None:
        await manager.connect(websocket)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            manager.disconnect(websocket)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("liftsweep_server.app:app", host="0.0.0.0", port=8000, reload=False)
