import pytest

from src.database.models import Fee, Knowledge, Room, Staff

from src.database.campus_repository import CampusRepository


@pytest.fixture
def repo(seeded_db):
    return CampusRepository(seeded_db)


def test_staff_lookup_requires_every_term_to_match(repo):
    staff = repo.get_staff_info("hod computer")
    assert [s["name"] for s in staff] == ["Dr. Anita Sharma"]


def test_staff_lookup_is_case_insensitive(repo):
    staff = repo.get_staff_info("MECHANICAL")
    assert [s["name"] for s in staff] == ["Prof. Joseph Mathew"]


def test_staff_lookup_excludes_inactive(repo):
    assert repo.get_staff_info("civil") == []


def test_staff_lookup_blank_query(repo):
    assert repo.get_staff_info("   ") == []


def test_fee_lookup_matches_program(repo):
    fees = repo.get_fee_info("mba")
    assert len(fees) == 1
    assert fees[0]["programName"] == "MBA"
    assert fees[0]["amount"] == 120000.0


def test_fee_lookup_matches_academic_year(repo):
    fees = repo.get_fee_info("2024-25")
    assert len(fees) == 6


def test_fee_lookup_uses_whole_query(repo):
    assert repo.get_fee_info("what is the mba fee") == []


def test_room_lookup_prefers_room_code(repo):
    room = repo.get_room_directions("cs-204")
    assert room["roomCode"] == "CS-204"
    assert room["buildingName"] == "Main Block"
    assert "staircase" in room["textDirections"]


def test_room_lookup_falls_back_to_building(repo):
    room = repo.get_room_directions("Electronics Block")
    assert room["roomCode"] == "EC-LAB1"


def test_room_lookup_falls_back_to_floor(repo):
    room = repo.get_room_directions("second floor")
    assert room["roomCode"] == "CS-204"


def test_room_lookup_miss(repo):
    assert repo.get_room_directions("Where is the swimming pool?") is None


def test_knowledge_search_by_name(repo):
    hits = repo.search_knowledge("library timings")
    assert [h["name"] for h in hits] == ["Library timings"]


def test_knowledge_search_by_text(repo):
    hits = repo.search_knowledge("75% attendance")
    assert hits[0]["source"] == "Student Handbook 2024"


def test_knowledge_search_respects_limit(repo):
    assert len(repo.search_knowledge("the", limit=2)) == 2


def test_knowledge_search_blank_query(repo):
    assert repo.search_knowledge("") == []
    assert repo.search_knowledge("   ") == []


# ============================================================
# Literal wildcard characters
# ============================================================

def test_percent_and_underscore_match_literally(repo, seeded_db):
    assert repo.search_knowledge("_") == []
    assert repo.get_staff_info("%") == []
    assert repo.get_fee_info("_") == []
    assert repo.get_room_directions("%") is None

    with seeded_db.get_session() as session:
        session.add(Knowledge(name="Lab codes", source="Lab manual", text="Use the code LAB_2 at the door."))
        session.add(Room(room_code="LAB_2", building_name="Annex", floor="Ground floor"))

    assert [k["name"] for k in repo.search_knowledge("lab_2")] == ["Lab codes"]
    assert repo.get_room_directions("_2")["roomCode"] == "LAB_2"


# ============================================================
# Row limits
# ============================================================

def test_staff_lookup_returns_at_most_five(repo, seeded_db):
    with seeded_db.get_session() as session:
        session.add_all(
            Staff(name=f"Lecturer {i}", department="Physics", designation="Lecturer")
            for i in range(7)
        )

    assert len(repo.get_staff_info("physics")) == 5


def test_fee_lookup_returns_at_most_ten(repo, seeded_db):
    with seeded_db.get_session() as session:
        session.add_all(
            Fee(program_name=f"Diploma {i}", academic_year="2030-31", category="Lab", amount=1000)
            for i in range(12)
        )

    assert len(repo.get_fee_info("2030-31")) == 10


def test_knowledge_search_default_limit(repo, seeded_db):
    with seeded_db.get_session() as session:
        session.add_all(
            Knowledge(name=f"Circular {i}", source="Notice board", text="Hostel circular")
            for i in range(8)
        )

    assert len(repo.search_knowledge("hostel circular")) == 5
