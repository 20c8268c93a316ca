import pytest

from gambitbracket.exceptions import InvalidArgumentException
from gambitbracket.models.brackets.progressions import (
    GroupPlacement,
    Progression,
    SinglePlacement,
)


def test_placements_are_progressions():
    assert isinstance(SinglePlacement(1), Progression)
    assert isinstance(GroupPlacement(2), Progression)


def test_single_placement(alpha):
    placement = SinglePlacement(1)

    assert list(placement.positions) == [1]
    assert str(placement) == "place 1"
    assert placement.receive(alpha)
    assert placement.contains(alpha.id)


@pytest.mark.parametrize(
    "size,positions,label",
    [
        (2, [2], "place 2"),
        (4, [3, 4], "places 3-4"),
        (16, list(range(9, 17)), "places 9-16"),
    ],
)
def test_group_placement_positions(size, positions, label):
    placement = GroupPlacement(size)

    assert list(placement.positions) == positions
    assert str(placement) == label


@pytest.mark.parametrize("size", [0, 1, 3, 6, -4, True])
def test_group_placement_requires_power_of_two(size):
    with pytest.raises(InvalidArgumentException):
        GroupPlacement(size)


@pytest.mark.parametrize("position", [0, -1, False])
def test_single_placement_requires_positive_position(position):
    with pytest.raises(InvalidArgumentException):
        SinglePlacement(position)


def test_placement_records_each_team_once(alpha, bravo):
    placement = GroupPlacement(4)

    assert placement.receive(alpha)
    assert placement.receive(bravo)
    assert not placement.receive(alpha)
    assert placement.teams == [alpha, bravo]
