from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import asdict
from typing import Dict, List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from dispatch import Building, ElevatorEvent, ElevatorNotFound, Simulation
from scheduler import Direction

logger = logging.getLogger(__name__)


class AlgorithmSelection(BaseModel):
    name: str
    options: Dict[str, object] = {}


class HallCall(BaseModel):
    floor: int = Field(ge=1)
    direction: Direction


class CabinCall(BaseModel):
    floor: int = Field(ge=1)


class StepRequest(BaseModel):
    count: int = Field(default=1, ge=1, le=1000)


class AvailabilityUpdate(BaseModel):
    available: bool
    reason: Optional[str] = None


class SimulationManager:
    """Serializes API calls onto one Simulation and fans state out to websockets."""

    def __init__(self, name: str = "Office Tower", num_floors: int = 10, elevator_count: int = 2) -> None:
        building = Building(name=name, num_floors=num_floors, elevator_count=elevator_count)
        self.simulation = Simulation(building)
        self.clients: Set[WebSocket] = set()
        self._pending_events: List[ElevatorEvent] = []
        self.simulation.on_event("state", self._pending_events.append)
        self.simulation.on_event("floor", self._pending_events.append)
        self._lock = asyncio.Lock()

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        logger.info(f"Stream client connected ({len(self.clients)} total)")
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        return {
            "step": self.simulation.current_step,
            "building": self.simulation.building.snapshot(),
            "scheduler": self.simulation.building.scheduler,
        }

    def drain_events(self) -> List[dict]:
        events = [asdict(event) for event in self._pending_events]
        self._pending_events.clear()
        return events

    async def set_scheduler(self, name: str, options: Dict[str, object]) -> dict:
        async with self._lock:
            self.simulation.building.set_scheduler(name, **options)
            return self.current_state()

    async def call_elevator(self, elevator_id: int, floor: int, direction: Direction) -> dict:
        async with self._lock:
            self._check_request(elevator_id, floor)
            accepted = self.simulation.request_elevator(elevator_id, floor, direction)
            return self._request_result(accepted)

    async def select_floor(self, elevator_id: int, floor: int) -> dict:
        async with self._lock:
            self._check_request(elevator_id, floor)
            accepted = self.simulation.request_floor(elevator_id, floor)
            return self._request_result(accepted)

    async def step(self, count: int) -> dict:
        async with self._lock:
            self.simulation.run(count)
            state = self.current_state()
            state["events"] = self.drain_events()
        await self.broadcast(state)
        return state

    async def set_availability(self, elevator_id: int, available: bool, reason: Optional[str]) -> dict:
        async with self._lock:
            try:
                self.simulation.controller.elevator(elevator_id)
            except ElevatorNotFound as exc:
                raise HTTPException(status_code=404, detail=str(exc))
            if available:
                changed = self.simulation.restore_elevator(elevator_id)
            else:
                changed = self.simulation.start_maintenance(elevator_id)
            state = self.current_state()
            state["elevator_id"] = elevator_id
            state["available"] = available
            state["changed"] = changed
            state["reason"] = reason
            return state

    def _check_request(self, elevator_id: int, floor: int) -> None:
        try:
            self.simulation.controller.elevator(elevator_id)
        except ElevatorNotFound as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        top_floor = self.simulation.building.num_floors
        if floor > top_floor:
            raise HTTPException(status_code=400, detail=f"Floor {floor} is above the top floor {top_floor}")

    def _request_result(self, accepted: bool) -> dict:
        state = self.current_state()
        state["accepted"] = accepted
        return state


manager = SimulationManager()
app = FastAPI(title="liftdispatch API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/algorithm")
async def set_algorithm(selection: AlgorithmSelection) -> dict:
    try:
        return await manager.set_scheduler(selection.name, selection.options)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/elevators/{elevator_id}/call")
async def call_elevator(elevator_id: int, call: HallCall) -> dict:
    return await manager.call_elevator(elevator_id, call.floor, call.direction)


@app.post("/elevators/{elevator_id}/floor")
async def select_floor(elevator_id: int, call: CabinCall) -> dict:
    return await manager.select_floor(elevator_id, call.floor)


@app.post("/step")
async def step(request: Optional[StepRequest] = None) -> dict:
    return await manager.step((request or StepRequest()).count)


@app.post("/elevators/{elevator_id}/availability")
async def update_availability(elevator_id: int, availability: AvailabilityUpdate) -> dict:
    return await manager.set_availability(elevator_id, availability.available, availability.reason)


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
