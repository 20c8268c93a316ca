from gambitbracket.models.brackets.progressions import (
    GroupPlacement,
    Series,
    SinglePlacement,
)
from gambitbracket.models.brackets.structures import Finale, Structure


def test_finale_wires_default_placements(make_series, alpha, bravo):
    finale = Finale(make_series(alpha, bravo))

    assert isinstance(finale.winner_placement, SinglePlacement)
    assert finale.winner_placement.position == 1
    assert finale.loser_placement.position == 2
    assert finale.series.winner_progression is finale.winner_placement
    assert finale.series.loser_progression is finale.loser_placement
    assert finale.champion is None

    finale.series.forfeit(bravo.id)

    assert finale.champion == alpha
    assert finale.loser_placement.teams == [bravo]


def test_set_progressions_delegate_to_series(make_series, alpha):
    structure = Structure(make_series(alpha))
    target = Series(structure.series.id)
    eliminated = GroupPlacement(8)

    structure.set_winner_progression(target)
    structure.set_loser_progression(eliminated)

    assert structure.series.winner_progression is target
    assert structure.series.loser_progression is eliminated


def test_find_structure_with_team(make_series, make_teams):
    a, b, c, d = make_teams(4)
    root = Structure(make_series())
    left = Structure(make_series(a, b))
    right = Structure(make_series(c))
    leaf = Structure(make_series(d))
    root.add_child(left)
    root.add_child(right)
    right.add_child(leaf)

    assert root.find_structure_with_team(a.id) is left
    assert root.find_structure_with_team(c.id) is right
    assert root.find_structure_with_team(d.id) is leaf
    assert left.find_structure_with_team(d.id) is None


def test_walk_orders(make_series):
    root = Structure(make_series())
    left = Structure(make_series())
    right = Structure(make_series())
    leaf = Structure(make_series())
    root.add_child(left)
    root.add_child(right)
    left.add_child(leaf)

    assert list(root.walk()) == [root, left, leaf, right]
    assert list(root.walk_bottom_up()) == [leaf, left, right, root]
    assert len(root) == 4
    assert root.depth == 3
    assert right.depth == 1


def test_playable(make_series, make_teams):
    a, b, c, d = make_teams(4)
    root = Structure(make_series())
    ready = Structure(make_series(a, b))
    done = Structure(make_series(c, d))
    root.add_child(ready)
    root.add_child(done)
    done.series.forfeit(c.id)

    assert root.playable() == [ready]
