from tests.conftest import activity_form, evidence_files


def test_profile_shows_level_progress(client, make_user, auth_headers):
    user = make_user(points=750, level=2)

    profile = client.get("/api/users/me", headers=auth_headers(user)).json()

    assert profile["level"] == 2
    assert profile["points_to_next_level"] == 250
    assert profile["level_progress"] == 50.0
    assert profile["badges"] == []


def test_profile_for_deleted_user(client, make_user, auth_headers, session_factory):
    from api.user.user_model import User

    user = make_user()
    headers = auth_headers(user)
    with session_factory() as s:
        s.delete(s.get(User, user.id))
        s.commit()

    assert client.get("/api/users/me", headers=headers).status_code == 404


def test_leaderboard_orders_by_points(client, make_user):
    make_user(name="Low", points=5)
    make_user(name="High", points=900, level=2)
    make_user(name="Mid", points=120)

    board = client.get("/api/users/leaderboard?limit=2").json()

    assert [entry["name"] for entry in board] == ["High", "Mid"]
    assert board[0]["level"] == 2


def test_badge_catalog_listing(client):
    badges = client.get("/api/achievements/badges").json()
    assert {b["id"] for b in badges} == {
        "FIRST_ACTIVITY_BADGE",
        "RECYCLER_BRONZE_BADGE",
        "LEVEL_5_REACHED_BADGE",
        "TREE_PLANTER_BADGE",
        "POINTS_MASTER_100_BADGE",
    }


def test_my_badges(client, make_user, auth_headers):
    user = make_user()
    assert client.get("/api/achievements/me/badges", headers=auth_headers(user)).json() == []

    client.post("/api/activities", data=activity_form(), files=evidence_files(1), headers=auth_headers(user))

    mine = client.get("/api/achievements/me/badges", headers=auth_headers(user)).json()
    assert [ub["badge"]["id"] for ub in mine] == ["FIRST_ACTIVITY_BADGE"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_single_badge(client):
    body = client.get("/api/achievements/badges/TREE_PLANTER_BADGE").json()
    assert body["criteria"] == "SPECIFIC_ACTIVITY_TYPE_COUNT:5:TREE_PLANTING"
    assert client.get("/api/achievements/badges/NOPE").status_code == 404
