import pytest

from gambitbracket.models.brackets.progressions import Series
from gambitbracket.models.team import ByeTeam, Team
from gambitbracket.utils.snowflake import SnowflakeService


@pytest.fixture
def snowflake_service():
    return SnowflakeService(worker_id=1)


@pytest.fixture
def new_id(snowflake_service):
    def _new_id():
        return str(snowflake_service.generate())

    return _new_id


@pytest.fixture
def make_teams(new_id):
    def _make_teams(count):
        return [Team(new_id(), f"Team {i + 1}") for i in range(count)]

    return _make_teams


@pytest.fixture
def make_placeholder(new_id):
    def _make_placeholder():
        return ByeTeam(new_id())

    return _make_placeholder


@pytest.fixture
def alpha(new_id):
    return Team(new_id(), "Alpha")


@pytest.fixture
def bravo(new_id):
    return Team(new_id(), "Bravo")


@pytest.fixture
def charlie(new_id):
    return Team(new_id(), "Charlie")


@pytest.fixture
def make_series(new_id):
    def _make_series(*teams, best_of=1):
        return Series(new_id(), {team.id: team for team in teams}, best_of)

    return _make_series


@pytest.fixture
def series(make_series, alpha, bravo):
    return make_series(alpha, bravo, best_of=3)
