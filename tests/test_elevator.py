import logging

import pytest

from dispatch import Elevator, ElevatorState, EventRecorder, InvalidFloor
from scheduler import Direction, Request, RequestOrigin


def internal(floor, elevator_id=0):
    return Request(floor=floor, direction=Direction.UP, elevator_id=elevator_id, origin=RequestOrigin.INTERNAL)


def external(floor, direction=Direction.UP, elevator_id=0):
    return Request(floor=floor, direction=direction, elevator_id=elevator_id, origin=RequestOrigin.EXTERNAL)


class ExplodingObserver:
    def on_state_change(self, elevator, new_state):
        raise RuntimeError("display offline")

    def on_floor_change(self, elevator, new_floor):
        raise RuntimeError("display offline")


def test_new_elevator_is_stopped_and_idle():
    elevator = Elevator(3)
    assert elevator.current_floor == 1
    assert elevator.state is ElevatorState.STOPPED
    assert elevator.direction is Direction.IDLE
    assert elevator.pending_requests == ()


def test_elevator_cannot_start_below_ground_floor():
    with pytest.raises(InvalidFloor):
        Elevator(0, current_floor=0)


def test_first_request_starts_the_car_toward_the_floor():
    elevator = Elevator(0)
    recorder = EventRecorder()
    elevator.subscribe(recorder)

    assert elevator.add_request(external(4))
    assert elevator.state is ElevatorState.RUNNING
    assert elevator.direction is Direction.UP
    assert [(e.kind, e.state) for e in recorder.events] == [("state", "RUNNING")]


def test_request_for_current_floor_sets_down():
    elevator = Elevator(0)
    elevator.add_request(internal(1))
    assert elevator.direction is Direction.DOWN
    assert elevator.state is ElevatorState.RUNNING


def test_duplicate_requests_are_queued_once():
    elevator = Elevator(0)
    assert elevator.add_request(external(3, Direction.UP))
    assert not elevator.add_request(external(3, Direction.DOWN))
    assert not elevator.add_request(external(3, Direction.UP))
    assert elevator.add_request(internal(3))
    assert len(elevator.pending_requests) == 2


def test_later_requests_do_not_change_direction_while_running():
    elevator = Elevator(0, current_floor=5)
    elevator.add_request(internal(8))
    elevator.add_request(internal(2))
    assert elevator.direction is Direction.UP
    assert [r.floor for r in elevator.pending_requests] == [8, 2]


def test_move_emits_every_intermediate_floor_in_order():
    elevator = Elevator(0)
    recorder = EventRecorder()
    elevator.subscribe(recorder)
    elevator.add_request(internal(5))

    assert elevator.move_to_next_floor(5)
    assert recorder.floors_visited(0) == [2, 3, 4, 5]
    assert elevator.current_floor == 5
    assert elevator.state is ElevatorState.STOPPED
    assert elevator.direction is Direction.IDLE
    assert not elevator.has_pending_requests()


def test_arrival_keeps_running_when_requests_remain():
    elevator = Elevator(0)
    recorder = EventRecorder()
    elevator.subscribe(recorder)
    elevator.add_request(internal(3))
    elevator.add_request(internal(6))

    elevator.move_to_next_floor(3)
    states = [e.state for e in recorder.events if e.kind == "state"]
    assert states == ["RUNNING", "STOPPED", "RUNNING"]
    assert [r.floor for r in elevator.pending_requests] == [6]
    assert elevator.direction is Direction.UP


def test_arrival_clears_internal_and_external_requests_for_the_floor():
    elevator = Elevator(0)
    elevator.add_request(external(4, Direction.DOWN))
    elevator.add_request(internal(4))
    elevator.add_request(internal(7))

    elevator.move_to_next_floor(4)
    assert [r.floor for r in elevator.pending_requests] == [7]


def test_move_while_stopped_is_a_logged_no_op(caplog):
    elevator = Elevator(0)
    recorder = EventRecorder()
    elevator.subscribe(recorder)

    with caplog.at_level(logging.WARNING, logger="dispatch.elevator"):
        assert not elevator.move_to_next_floor(4)
    assert elevator.current_floor == 1
    assert recorder.events == []
    assert "is not running" in caplog.text


def test_move_below_ground_floor_is_refused(caplog):
    elevator = Elevator(0, current_floor=2)
    elevator.add_request(internal(1))
    recorder = EventRecorder()
    elevator.subscribe(recorder)

    with caplog.at_level(logging.WARNING, logger="dispatch.elevator"):
        assert not elevator.move_to_next_floor(-1)
    assert elevator.current_floor == 2
    assert elevator.state is ElevatorState.RUNNING
    assert recorder.events == []
    assert "cannot move to floor -1" in caplog.text


def test_move_against_current_direction_still_reaches_target():
    elevator = Elevator(0, current_floor=6)
    elevator.add_request(internal(3))
    elevator.apply_direction(Direction.UP)

    elevator.move_to_next_floor(3)
    assert elevator.current_floor == 3
    assert not elevator.has_pending_requests()


def test_failing_observer_does_not_stop_the_car(caplog):
    elevator = Elevator(0)
    recorder = EventRecorder()
    elevator.subscribe(ExplodingObserver())
    elevator.subscribe(recorder)

    with caplog.at_level(logging.ERROR, logger="dispatch.elevator"):
        elevator.add_request(internal(3))
        elevator.move_to_next_floor(3)

    assert elevator.current_floor == 3
    assert recorder.floors_visited(0) == [2, 3]
    assert "failed on floor change" in caplog.text


def test_subscribe_is_idempotent():
    elevator = Elevator(0)
    recorder = EventRecorder()
    elevator.subscribe(recorder)
    elevator.subscribe(recorder)
    elevator.add_request(internal(2))
    assert len(recorder.events) == 1

    elevator.unsubscribe(recorder)
    elevator.move_to_next_floor(2)
    assert len(recorder.events) == 1


def test_idle_direction_is_ignored_while_requests_pending():
    elevator = Elevator(0)
    elevator.add_request(internal(4))
    elevator.apply_direction(Direction.IDLE)
    assert elevator.direction is Direction.UP


class TestMaintenance:
    def test_round_trip_from_stopped(self):
        elevator = Elevator(0)
        recorder = EventRecorder()
        elevator.subscribe(recorder)

        assert elevator.start_maintenance()
        assert elevator.state is ElevatorState.MAINTENANCE
        assert elevator.restore_service()
        assert elevator.state is ElevatorState.STOPPED
        assert [e.state for e in recorder.events] == ["MAINTENANCE", "STOPPED"]

    def test_cannot_enter_while_running(self):
        elevator = Elevator(0)
        elevator.add_request(internal(5))
        assert not elevator.start_maintenance()
        assert elevator.state is ElevatorState.RUNNING

    def test_requests_are_rejected_during_maintenance(self):
        elevator = Elevator(0)
        elevator.start_maintenance()
        assert not elevator.add_request(internal(5))
        assert elevator.pending_requests == ()
        assert not elevator.move_to_next_floor(5)

    def test_restore_is_a_no_op_when_in_service(self):
        assert not Elevator(0).restore_service()

    def test_arrival_does_not_end_maintenance(self, caplog):
        elevator = Elevator(0)
        elevator.start_maintenance()

        with caplog.at_level(logging.WARNING, logger="dispatch.elevator"):
            elevator.complete_arrival()
        assert elevator.state is ElevatorState.MAINTENANCE
        assert not elevator.in_service()
        assert "in maintenance" in caplog.text
