import pytest

from liftsweep import Direction, Floor, InvalidFloorError, Passenger


@pytest.mark.parametrize("number", [-1, 101])
def test_floor_number_range(number):
    with pytest.raises(InvalidFloorError):
        Floor(number)


def test_floor_number_bounds_accepted():
    assert Floor(0).number == 0
    assert Floor(100).number == 100


def test_boarding_keeps_queue_order_and_skips_opposite_direction():
    floor = Floor(5)
    up_a = Passenger(1, 0, 5, 9)
    down = Passenger(2, 1, 5, 1)
    up_b = Passenger(3, 2, 5, 7)
    up_c = Passenger(4, 3, 5, 8)
    for passenger in (up_a, down, up_b, up_c):
        floor.add_waiting(passenger)

    boarded = floor.board_passengers(Direction.UP, 2)

    assert boarded == [up_a, up_b]
    assert list(floor.waiting) == [down, up_c]


def test_no_boarding_without_free_space():
    floor = Floor(2)
    floor.add_waiting(Passenger(1, 0, 2, 3))
    assert floor.board_passengers(Direction.UP, 0) == []
    assert len(floor) == 1


def test_waiting_in_direction():
    floor = Floor(3)
    assert not floor.has_waiting()
    floor.add_waiting(Passenger(1, 0, 3, 1))
    assert floor.has_waiting()
    assert floor.waiting_in_direction(Direction.DOWN)
    assert not floor.waiting_in_direction(Direction.UP)
