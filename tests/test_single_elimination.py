import pytest

from gambitbracket.exceptions import (
    BracketStructureException,
    EmptyBracketException,
    InvalidArgumentException,
    InvalidOperationException,
    InvalidSeedException,
)
from gambitbracket.models.brackets.builders import (
    SingleEliminationBuilder,
    build_single_elimination,
)
from gambitbracket.models.brackets.builders.single_elimination import (
    _lowest_open_slot,
)
from gambitbracket.models.brackets.progressions import GroupPlacement
from gambitbracket.models.brackets.structures import Finale
from gambitbracket.models.events import SeriesGame


def names(structure):
    return {team.name for team in structure.series.teams.values()}


def seed_of(name):
    return int(name.split()[1])


def first_round(root):
    pairs = [sorted(names(s), key=seed_of) for s in root.walk() if not s.children]
    return sorted(pairs, key=lambda pair: seed_of(pair[0]))


def team_locations(root):
    locations = {}
    for structure in root.walk():
        for team_id in structure.series.teams:
            locations.setdefault(team_id, []).append(structure)
    return locations


# ========== Algorithm ==========


def test_zero_teams_fails(snowflake_service):
    with pytest.raises(EmptyBracketException):
        build_single_elimination([], 1, snowflake_service)

    with pytest.raises(InvalidOperationException):
        build_single_elimination([], 1, snowflake_service)


def test_one_team_is_byed_to_the_title(make_teams, snowflake_service):
    (team,) = make_teams(1)
    root = build_single_elimination([team], 1, snowflake_service)

    assert isinstance(root, Finale)
    assert root.series.finished
    assert root.series.byed
    assert root.series.winner == team
    assert root.champion == team
    assert root.children == []


def test_two_teams_meet_in_the_final(make_teams, snowflake_service):
    teams = make_teams(2)
    root = build_single_elimination(teams, 3, snowflake_service)

    assert list(root.series.teams.values()) == teams
    assert root.children == []
    assert root.series.best_of == 3
    assert root.playable() == [root]


def test_three_teams_top_seed_waits_in_final(make_teams, snowflake_service):
    teams = make_teams(3)
    root = build_single_elimination(teams, 1, snowflake_service)

    assert names(root) == {"Team 1"}
    assert len(root.children) == 1
    semi = root.children[0]
    assert list(semi.series.teams.values()) == [teams[1], teams[2]]
    assert semi.series.winner_progression is root.series
    assert isinstance(semi.series.loser_progression, GroupPlacement)
    assert semi.series.loser_progression.size == 4
    assert [s for s in root.walk() if len(s.series.teams) == 2] == [semi]


def test_waiting_final_cannot_be_forfeited(new_id, make_teams, snowflake_service):
    teams = make_teams(3)
    root = build_single_elimination(teams, 1, snowflake_service)
    (semi,) = root.children

    assert not root.series.forfeit(teams[0].id)
    assert not root.series.finished

    SeriesGame(new_id(), semi.series, {teams[1].id: 1, teams[2].id: 0}).finish()
    assert semi.series.finish()
    assert list(root.series.teams.values()) == [teams[0], teams[1]]

    assert root.series.forfeit(teams[0].id)
    assert root.champion == teams[1]
    assert root.loser_placement.teams == [teams[0]]


def test_four_teams(make_teams, snowflake_service):
    teams = make_teams(4)
    root = build_single_elimination(teams, 3, snowflake_service)

    assert root.series.teams == {}
    assert len(root.children) == 2
    assert first_round(root) == [["Team 1", "Team 4"], ["Team 2", "Team 3"]]
    for semi in root.children:
        assert len(semi.series.teams) == 2
        assert semi.series.best_of == 3
        assert semi.series.winner_progression is root.series


def test_eight_teams_use_standard_seeding(make_teams, snowflake_service):
    teams = make_teams(8)
    root = build_single_elimination(teams, 1, snowflake_service)

    assert first_round(root) == [
        ["Team 1", "Team 8"],
        ["Team 2", "Team 7"],
        ["Team 3", "Team 6"],
        ["Team 4", "Team 5"],
    ]
    assert root.depth == 3
    assert len(root) == 7
    for structure in root.walk():
        if structure.children:
            assert structure.series.teams == {}


def test_five_teams(make_teams, snowflake_service):
    teams = make_teams(5)
    root = build_single_elimination(teams, 1, snowflake_service)

    assert sorted(sorted(names(s)) for s in root.playable()) == [
        ["Team 2", "Team 3"],
        ["Team 4", "Team 5"],
    ]
    waiting = root.find_structure_with_team(teams[0].id)
    assert names(waiting) == {"Team 1"}
    assert root.find_structure_with_team(teams[3].id).series.winner_progression is (
        waiting.series
    )


@pytest.mark.parametrize("count", list(range(2, 34)))
def test_bracket_shape(make_teams, snowflake_service, count):
    teams = make_teams(count)
    root = build_single_elimination(teams, 1, snowflake_service)

    assert len(root) == count - 1

    locations = team_locations(root)
    assert set(locations) == {team.id for team in teams}
    assert all(len(found) == 1 for found in locations.values())

    for structure in root.walk():
        assert len(structure.children) <= 2
        for child in structure.children:
            assert child.series.winner_progression is structure.series
            assert isinstance(child.series.loser_progression, GroupPlacement)
        if not structure.children:
            assert len(structure.series.teams) == 2


def test_loser_placements_follow_round_size(make_teams, snowflake_service):
    teams = make_teams(8)
    root = build_single_elimination(teams, 1, snowflake_service)

    sizes = sorted(
        s.series.loser_progression.size for s in root.walk() if s is not root
    )
    assert sizes == [4, 4, 8, 8, 8, 8]


def test_lowest_open_slot():
    assert _lowest_open_slot([True, True, False]) == 1

    with pytest.raises(BracketStructureException):
        _lowest_open_slot([False, False])


def test_duplicate_team_rejected(make_teams, snowflake_service):
    a, b = make_teams(2)

    with pytest.raises(InvalidArgumentException):
        build_single_elimination([a, b, a], 1, snowflake_service)


def test_invalid_best_of_rejected(make_teams, snowflake_service):
    with pytest.raises(InvalidArgumentException):
        build_single_elimination(make_teams(4), 0, snowflake_service)


# ========== Bye Placeholders ==========


def test_placeholder_opponent_advances(
    make_teams, make_placeholder, snowflake_service
):
    teams = make_teams(3)
    placeholder = make_placeholder()
    root = build_single_elimination(teams + [placeholder], 1, snowflake_service)

    assert names(root) == {"Team 1"}
    assert placeholder.id not in team_locations(root)

    byed = [s for s in root.walk() if s.series.byed]
    assert len(byed) == 1
    assert byed[0].series.winner == teams[0]
    assert byed[0].series.loser_progression.teams == []
    assert [names(s) for s in root.playable()] == [{"Team 2", "Team 3"}]


def test_placeholders_only_series_rejected(
    make_teams, make_placeholder, snowflake_service
):
    (team,) = make_teams(1)

    with pytest.raises(InvalidArgumentException):
        build_single_elimination(
            [team, make_placeholder(), make_placeholder()], 1, snowflake_service
        )


def test_placeholder_in_final_gives_the_title(
    make_teams, make_placeholder, snowflake_service
):
    (team,) = make_teams(1)
    root = build_single_elimination([team, make_placeholder()], 1, snowflake_service)

    assert root.series.byed
    assert root.champion == team


# ========== Builder ==========


@pytest.fixture
def builder(new_id, snowflake_service):
    return SingleEliminationBuilder(new_id(), snowflake_service, best_of=3)


def test_builder_orders_seeded_then_joined(
    new_id, snowflake_service, make_teams, make_placeholder
):
    a, b, c, d = make_teams(4)
    placeholder = make_placeholder()
    builder = SingleEliminationBuilder(
        new_id(),
        snowflake_service,
        teams={t.id: t for t in (placeholder, a, b, c, d)},
        seeds={c.id: 1, a.id: 2},
    )

    assert builder.get_ordered_teams() == [c, a, b, d, placeholder]


def test_builder_generates_with_seeds(builder, make_teams):
    a, b, c, d = make_teams(4)
    for team in (a, b, c, d):
        assert builder.add_team(team)
    assert builder.set_seed(d.id, 1)
    assert builder.set_seed(c.id, 2)

    root = builder.generate()

    assert builder.generated
    assert first_round(root) == [["Team 1", "Team 3"], ["Team 2", "Team 4"]]
    assert all(s.series.best_of == 3 for s in root.walk())


def test_builder_without_teams_fails(builder):
    with pytest.raises(EmptyBracketException):
        builder.generate()

    assert not builder.generated


def test_builder_never_regenerates(builder, make_teams):
    for team in make_teams(4):
        builder.add_team(team)

    root = builder.generate()

    assert builder.generate() is root
    assert not builder.add_team(make_teams(1)[0])
    assert not builder.remove_team(next(iter(builder.teams)))
    assert not builder.set_best_of(5)


def test_builder_resumes_existing_root(new_id, snowflake_service, make_teams):
    teams = make_teams(2)
    root = build_single_elimination(teams, 1, snowflake_service)
    builder = SingleEliminationBuilder(
        new_id(), snowflake_service, teams={t.id: t for t in teams}, root=root
    )

    assert builder.generated
    assert builder.generate() is root


def test_builder_team_management(builder, make_teams):
    a, b = make_teams(2)

    assert builder.add_team(a)
    assert not builder.add_team(a)
    assert builder.set_seed(a.id, 1)
    assert not builder.set_seed(b.id, 2)

    assert builder.remove_team(a.id)
    assert a.id not in builder.seeds
    assert not builder.remove_team(a.id)


def test_builder_seed_rules(builder, make_teams):
    a, b = make_teams(2)
    builder.add_team(a)
    builder.add_team(b)

    assert builder.set_seed(a.id, 1)
    assert not builder.set_seed(b.id, 1)
    assert not builder.set_seed(b.id, 0)
    assert builder.set_seed(a.id, 1)
    assert builder.set_seed(b.id, 5)


def test_builder_best_of(builder):
    assert builder.best_of == 3
    assert not builder.set_best_of(0)
    assert builder.set_best_of(5)
    assert builder.config.best_of == 5


def test_private_builder_requires_invite(new_id, snowflake_service, make_teams):
    a, b = make_teams(2)
    builder = SingleEliminationBuilder(new_id(), snowflake_service, private=True)

    assert builder.private
    assert not builder.add_team(a)

    invite = builder.invite_team(a.id)
    assert invite.team_id == a.id
    assert builder.invite_team(a.id) is invite

    assert builder.add_team(a)
    assert a.id not in builder.invites
    assert builder.invite_team(a.id) is None
    assert not builder.add_team(b)


def test_invite_rejects_invalid_team_id(builder):
    assert builder.invite_team("not-a-snowflake") is None


def test_builder_rejects_invalid_construction(new_id, snowflake_service, make_teams):
    a, b = make_teams(2)
    teams = {a.id: a, b.id: b}

    with pytest.raises(InvalidArgumentException):
        SingleEliminationBuilder("", snowflake_service)

    with pytest.raises(InvalidArgumentException):
        SingleEliminationBuilder(new_id(), snowflake_service, best_of=0)

    with pytest.raises(InvalidArgumentException):
        SingleEliminationBuilder(new_id(), snowflake_service, teams={b.id: a})

    with pytest.raises(InvalidSeedException):
        SingleEliminationBuilder(
            new_id(), snowflake_service, teams=teams, seeds={a.id: 1, b.id: 1}
        )

    with pytest.raises(InvalidSeedException):
        SingleEliminationBuilder(
            new_id(), snowflake_service, teams=teams, seeds={new_id(): 1}
        )

    with pytest.raises(InvalidSeedException):
        SingleEliminationBuilder(
            new_id(), snowflake_service, teams=teams, seeds={a.id: 0}
        )


def test_builder_config_round_trip(builder):
    data = builder.config.to_dict()

    assert data == {
        "best_of": 3,
        "private": False,
        "bracket_type": "single_elimination",
    }
    assert type(builder.config).from_dict(data) == builder.config
