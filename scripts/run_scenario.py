"""CLI for running offline liftdispatch scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from collections import defaultdict
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from dispatch import Building, LoggingDisplay, Simulation

logger = logging.getLogger("run_scenario")

DEFAULT_SCENARIO = {
    "name": "office-tower",
    "building": {"name": "Office Tower", "num_floors": 10, "elevator_count": 2},
    "scheduler": {"name": "scan"},
    "requests": [
        {"step": 0, "type": "external", "elevator_id": 0, "floor": 3, "direction": "UP"},
        {"step": 0, "type": "external", "elevator_id": 1, "floor": 7, "direction": "DOWN"},
        {"step": 0, "type": "internal", "elevator_id": 0, "floor": 5},
        {"step": 0, "type": "internal", "elevator_id": 1, "floor": 2},
    ],
    "steps": 8,
}


def build_simulation(config: Dict) -> Simulation:
    building_cfg = config.get("building", {})
    scheduler_cfg = config.get("scheduler", {})
    building = Building(
        name=building_cfg.get("name", "Building"),
        num_floors=building_cfg.get("num_floors", 10),
        elevator_count=building_cfg.get("elevator_count", 2),
        scheduler_name=scheduler_cfg.get("name", "scan"),
        scheduler_options=scheduler_cfg.get("options", {}),
    )
    return Simulation(building)


def _issue_requests(simulation: Simulation, requests: Iterable[Dict]) -> None:
    for request in requests:
        kind = request.get("type", "external")
        elevator_id = request["elevator_id"]
        floor = request["floor"]
        if kind == "internal":
            simulation.request_floor(elevator_id, floor)
        elif kind == "external":
            simulation.request_elevator(elevator_id, floor, request.get("direction", "UP"))
        else:
            logger.warning(f"Skipping request with unknown type '{kind}'")


def run_simulation(simulation: Simulation, config: Dict) -> List[Dict]:
    """Run the scenario and return the recorded elevator events as dicts."""

    by_step: Dict[int, List[Dict]] = defaultdict(list)
    for request in config.get("requests", []):
        by_step[request.get("step", 0)].append(request)

    for step in range(config.get("steps", 10)):
        _issue_requests(simulation, by_step.get(step, []))
        simulation.step()
    return [asdict(event) for event in simulation.events]


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "config",
        type=Path,
        nargs="?",
        help="Path to a JSON scenario configuration file (defaults to the built-in office tower demo)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the event log and final state as JSON",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = json.loads(args.config.read_text()) if args.config else DEFAULT_SCENARIO
    simulation = build_simulation(config)
    simulation.controller.subscribe(LoggingDisplay(config.get("name", "DISPLAY")))
    events = run_simulation(simulation, config)

    results = {
        "scenario": config.get("name", args.config.stem if args.config else "default"),
        "scheduler": simulation.building.scheduler,
        "steps": simulation.current_step,
        "final_state": simulation.building.snapshot(),
        "events": events,
    }
    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    print(f"Scheduler: {results['scheduler']}")
    print(f"Steps: {results['steps']}")
    for elevator in results["final_state"]["elevators"]:
        print(
            f"  Elevator {elevator['id']}: floor {elevator['floor']}, {elevator['state']}, "
            f"{elevator['direction']}, {len(elevator['pending'])} pending"
        )
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
