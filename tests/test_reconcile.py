from movie_helper.schemas import Movie, Pick
from movie_helper.services.reconcile import reconcile


def test_matches_titles_case_insensitively(candidates):
    [pick] = reconcile([Pick(title="aRRIVAL", why="Smart.")], candidates)
    assert pick.title == "aRRIVAL"
    assert pick.why == "Smart."
    assert pick.year == "2016"
    assert pick.poster == "https://image.tmdb.org/t/p/w500/arrival.jpg"
    assert pick.genres == ["drama", "sci-fi"]
    assert pick.overview == "Aliens."


def test_first_match_wins():
    candidates = [
        Movie(title="Dune", year="2021", genres=["sci-fi"]),
        Movie(title="Dune", year="1984", genres=["adventure"]),
    ]
    [pick] = reconcile([Pick(title="dune", why="Sand.")], candidates)
    assert pick.year == "2021"


def test_unmatched_picks_are_kept_bare(candidates):
    picks = [Pick(title="Made Up Movie", why="?"), Pick(title="", why="blank"), Pick(title="Incep", why="partial")]
    result = reconcile(picks, candidates)

    assert len(result) == len(picks)
    for pick in result:
        assert pick.poster is None
        assert pick.year is None
        assert pick.genres == []
        assert pick.overview == ""


def test_empty_candidate_year_becomes_null(candidates):
    [pick] = reconcile([Pick(title="Prisoners", why="Grim.")], candidates)
    assert pick.year is None
    assert pick.genres == ["drama", "thriller"]


def test_never_drops_picks():
    picks = [Pick(title=f"Movie {i}", why="") for i in range(4)]
    assert len(reconcile(picks, [])) == 4
