from sqlalchemy import text

from api.activities.activities_schema import ActivityCreate
from api.activities.activities_service import EvidenceUpload, create_activity
from api.badges.badges_model import Badge
from api.badges.badges_service import BadgeEvaluator, BadgeService, user_has_badge
from api.badges.user_badges_model import UserBadge
from api.user.user_model import User
from config.badges_config import ALL_BADGES, BadgeCriteria, BadgeDefinition
from config.points_config import ActivityType

from tests.conftest import PNG_BYTES

FIRST_ACTIVITY = ALL_BADGES[0]


def _definition(badge_id, criteria_type, threshold, activity_type=None, name=None):
    return BadgeDefinition(
        id=badge_id,
        name=name or badge_id.title(),
        description="Test badge",
        image_url="https://example.com/badge.png",
        criteria_type=criteria_type,
        criteria_threshold=threshold,
        criteria_activity_type=activity_type,
    )


def test_first_activity_badge(db, make_user, make_activity):
    user = make_user(points=10)
    make_activity(user, points=10)

    evaluation = BadgeEvaluator().evaluate(db, user.id)
    db.commit()

    assert evaluation.granted == ["FIRST_ACTIVITY_BADGE"]
    assert evaluation.warnings == []
    assert user_has_badge(db, user.id, "FIRST_ACTIVITY_BADGE")


def test_no_activities_no_badges(db, make_user):
    user = make_user()
    evaluation = BadgeEvaluator().evaluate(db, user.id)
    assert evaluation.granted == []


def test_unknown_user_is_a_no_op(db):
    evaluation = BadgeEvaluator().evaluate(db, 9999)
    assert evaluation.granted == []
    assert evaluation.warnings == []


def test_thresholds_are_inclusive(db, make_user, make_activity):
    user = make_user(points=2000, level=5)
    make_activity(user, points=50, activity_type=ActivityType.RECYCLING, quantity=10)

    evaluation = BadgeEvaluator().evaluate(db, user.id)

    # catalog order
    assert evaluation.granted == [
        "FIRST_ACTIVITY_BADGE",
        "RECYCLER_BRONZE_BADGE",
        "LEVEL_5_REACHED_BADGE",
        "POINTS_MASTER_100_BADGE",
    ]


def test_just_below_thresholds(db, make_user, make_activity):
    user = make_user(points=99, level=4)
    make_activity(user, points=47, activity_type=ActivityType.RECYCLING, quantity=9.5)
    make_activity(user, points=20, activity_type=ActivityType.TREE_PLANTING, quantity=4)

    evaluation = BadgeEvaluator().evaluate(db, user.id)

    assert evaluation.granted == ["FIRST_ACTIVITY_BADGE"]


def test_type_specific_badge_sums_quantities_across_activities(db, make_user, make_activity):
    user = make_user(points=50)
    make_activity(user, points=30, activity_type=ActivityType.RECYCLING, quantity=6)
    make_activity(user, points=20, activity_type=ActivityType.RECYCLING, quantity=4)
    make_activity(user, points=4, activity_type=ActivityType.WATER_SAVING, quantity=2)

    evaluation = BadgeEvaluator().evaluate(db, user.id)

    assert "RECYCLER_BRONZE_BADGE" in evaluation.granted
    assert "TREE_PLANTER_BADGE" not in evaluation.granted


def test_evaluation_is_idempotent(db, make_user, make_activity):
    user = make_user(points=10)
    make_activity(user, points=10)
    evaluator = BadgeEvaluator()

    first = evaluator.evaluate(db, user.id)
    db.commit()
    second = evaluator.evaluate(db, user.id)
    db.commit()

    assert first.granted == ["FIRST_ACTIVITY_BADGE"]
    assert second.granted == []
    assert db.query(UserBadge).filter_by(user_id=user.id).count() == 1


def test_broken_catalog_entry_does_not_stop_the_rest(db, make_user, make_activity):
    user = make_user(points=10)
    make_activity(user, points=10)
    catalog = (
        _definition("NO_TARGET_TYPE", BadgeCriteria.SPECIFIC_ACTIVITY_TYPE_COUNT, 1),
        _definition("UNKNOWN_RULE", "STREAK_DAYS", 3),
        FIRST_ACTIVITY,
    )

    evaluation = BadgeEvaluator(catalog).evaluate(db, user.id)

    assert evaluation.granted == ["FIRST_ACTIVITY_BADGE"]
    assert len(evaluation.warnings) == 2
    assert evaluation.warnings[0].startswith("NO_TARGET_TYPE")
    assert evaluation.warnings[1].startswith("UNKNOWN_RULE")


def test_alternate_catalog_creates_missing_badge_rows(db, make_user, make_activity):
    user = make_user(points=5)
    make_activity(user, points=5, activity_type=ActivityType.COMPOSTING, quantity=1)
    composter = _definition("COMPOSTER_BADGE", BadgeCriteria.SPECIFIC_ACTIVITY_TYPE_COUNT, 1, ActivityType.COMPOSTING)

    evaluation = BadgeEvaluator((composter,)).evaluate(db, user.id)
    db.commit()

    assert evaluation.granted == ["COMPOSTER_BADGE"]
    badge = db.get(Badge, "COMPOSTER_BADGE")
    assert badge.criteria == "SPECIFIC_ACTIVITY_TYPE_COUNT:1:COMPOSTING"
    # the default catalog was not consulted
    assert not user_has_badge(db, user.id, "FIRST_ACTIVITY_BADGE")


def test_failed_grant_does_not_roll_back_the_activity(db, make_user, storage):
    user = make_user()
    # same name as the seeded Eco-Starter badge, so inserting it violates the unique constraint
    clash = _definition("CLASHING_BADGE", BadgeCriteria.ACTIVITY_COUNT, 1, name=FIRST_ACTIVITY.name)
    data = ActivityCreate(
        title="Recycled glass bottles",
        description="Dropped a crate at the bottle bank",
        type=ActivityType.RECYCLING,
        quantity=2,
        unit="kg",
        date="2026-10-01T10:00:00Z",
    )
    files = [EvidenceUpload(file_name="bottles.png", content_type="image/png", data=PNG_BYTES)]

    activity, evaluation = create_activity(db, user.id, data, files, storage, BadgeEvaluator((clash,)))

    assert evaluation.granted == []
    assert evaluation.warnings and evaluation.warnings[0].startswith("grant")
    db.expire_all()
    stored_user = db.get(User, user.id)
    assert stored_user.points == 10
    assert len(stored_user.activities) == 1
    assert db.get(Badge, "CLASHING_BADGE") is None


def test_seed_badges_is_idempotent(db):
    service = BadgeService(db)
    assert service.seed_badges() == 0
    assert len(service.list_badges()) == len(ALL_BADGES)
    assert service.get_badge("POINTS_MASTER_100_BADGE").criteria == "TOTAL_POINTS:100"


class BrokenAggregateEvaluator(BadgeEvaluator):
    def __init__(self):
        super().__init__()
        self.ran_in_savepoint = None

    def load_aggregate(self, db, user_id):
        self.ran_in_savepoint = db.in_nested_transaction()
        db.execute(text("SELECT * FROM no_such_table"))


def test_failed_aggregate_query_does_not_roll_back_the_activity(db, make_user, storage):
    user = make_user()
    data = ActivityCreate(
        title="Planted oak saplings",
        description="Two saplings in the community garden",
        type=ActivityType.TREE_PLANTING,
        quantity=2,
        unit="trees",
        date="2026-10-01T10:00:00Z",
    )
    files = [EvidenceUpload(file_name="oaks.png", content_type="image/png", data=PNG_BYTES)]
    evaluator = BrokenAggregateEvaluator()

    activity, evaluation = create_activity(db, user.id, data, files, storage, evaluator)

    assert evaluator.ran_in_savepoint is True
    assert evaluation.granted == []
    assert evaluation.warnings and evaluation.warnings[0].startswith("aggregate")
    db.expire_all()
    stored_user = db.get(User, user.id)
    assert stored_user.points == 10
    assert [a.id for a in stored_user.activities] == [activity.id]
