from datetime import timedelta

import pytest

from database import make_session_factory
from services.resources import MAX_ROW_ID, AmbulanceRepository, DoctorRepository
from utils.distance import distance_km
from utils.errors import ValidationError

AMROLI = (21.241956, 72.876412)


def ambulance(**overrides):
    fields = {
        "title": "Test Ambulance",
        "description": "Test Description",
        "location": "Test Location",
        "latitude": 40.7128,
        "longitude": -74.0060,
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def ambulances(db):
    return AmbulanceRepository(db)


@pytest.fixture
def doctors(db):
    return DoctorRepository(db)


@pytest.fixture
def fresh(engine):
    # Separate session so reads come from the database, not the identity map
    session = make_session_factory(engine)()
    yield AmbulanceRepository(session)
    session.close()


def test_create_then_get_returns_same_fields(ambulances, fresh):
    created = ambulances.create(ambulance(phone="123-456-7890", image="http://img/1.png"))
    found = fresh.get_by_id(created.id)

    assert found is not created

    assert found is not None
    assert found.id == created.id
    assert found.title == "Test Ambulance"
    assert found.latitude == 40.7128
    assert found.longitude == -74.0060
    assert found.phone == "123-456-7890"
    assert found.image == "http://img/1.png"
    assert found.created_at == created.created_at
    assert found.updated_at == found.created_at


def test_create_doctor_keeps_specialization(doctors):
    created = doctors.create(ambulance(title="Dr. Test", specialization="Cardiology"))
    assert doctors.get_by_id(created.id).specialization == "Cardiology"


@pytest.mark.parametrize("missing", ["title", "description", "location", "latitude", "longitude"])
def test_create_rejects_missing_required_field(ambulances, missing):
    fields = ambulance()
    del fields[missing]
    with pytest.raises(ValidationError):
        ambulances.create(fields)
    assert ambulances.get_all()["total"] == 0


@pytest.mark.parametrize("overrides", [
    {"latitude": 90.5}, {"latitude": -91}, {"longitude": 180.01}, {"longitude": -200}, {"title": ""},
])
def test_create_rejects_out_of_domain_values(ambulances, overrides):
    with pytest.raises(ValidationError):
        ambulances.create(ambulance(**overrides))
    assert ambulances.get_all()["total"] == 0


def test_create_ignores_unknown_and_server_fields(ambulances):
    created = ambulances.create(ambulance(id=999, createdAt="1999-01-01", colour="red"))
    assert created.id != 999
    assert created.created_at.year != 1999


def test_get_by_id_missing_returns_none(ambulances):
    assert ambulances.get_by_id(999) is None


def test_get_all_paginates(ambulances):
    for i in range(15):
        ambulances.create(ambulance(title=f"Test {i}", latitude=40.7128 + i * 0.01))

    first = ambulances.get_all(page=1, limit=10)
    second = ambulances.get_all(page=2, limit=10)

    assert len(first["data"]) == 10
    assert first["total"] == 15
    assert first["page"] == 1
    assert first["limit"] == 10
    assert first["total_pages"] == 2
    assert len(second["data"]) == 5
    seen = {r.id for r in first["data"]} | {r.id for r in second["data"]}
    assert len(seen) == 15


def test_get_all_orders_newest_first(ambulances):
    ids = [ambulances.create(ambulance(title=f"Test {i}")).id for i in range(3)]
    assert [r.id for r in ambulances.get_all()["data"]] == list(reversed(ids))


def test_get_all_empty_table(ambulances):
    result = ambulances.get_all()
    assert result["data"] == []
    assert result["total"] == 0
    assert result["total_pages"] == 0


@pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5), (2, -3)])
def test_get_all_rejects_non_positive_paging(ambulances, page, limit):
    with pytest.raises(ValidationError):
        ambulances.get_all(page=page, limit=limit)


def test_search_on_phone_matches_single_row(ambulances):
    ambulances.create(ambulance(title="Alpha", phone="+91 261 0000001"))
    target = ambulances.create(ambulance(title="Beta", phone="555-0199"))
    ambulances.create(ambulance(title="Gamma"))

    result = ambulances.get_all(search="555-0199")

    assert [r.id for r in result["data"]] == [target.id]
    assert result["total"] == 1
    assert result["total_pages"] == 1


def test_search_is_case_insensitive_and_trimmed(ambulances):
    ambulances.create(ambulance(title="Rapid Response Ambulance"))
    ambulances.create(ambulance(title="Other", description="nothing here"))
    assert ambulances.get_all(search="  rapid RESPONSE ")["total"] == 1


def test_blank_search_is_ignored(ambulances):
    ambulances.create(ambulance())
    ambulances.create(ambulance())
    assert ambulances.get_all(search="   ")["total"] == 2


def test_search_treats_like_wildcards_literally(ambulances):
    ambulances.create(ambulance(title="100% oxygen support"))
    ambulances.create(ambulance(title="basic_care unit"))
    ambulances.create(ambulance(title="plain"))

    assert ambulances.get_all(search="%")["total"] == 1
    assert ambulances.get_all(search="_")["total"] == 1


def test_search_count_applies_to_all_pages(ambulances):
    for i in range(12):
        ambulances.create(ambulance(title=f"Cardiac unit {i}"))
    for i in range(5):
        ambulances.create(ambulance(title=f"Basic unit {i}"))

    result = ambulances.get_all(page=1, limit=5, search="cardiac")

    assert len(result["data"]) == 5
    assert result["total"] == 12
    assert result["total_pages"] == 3


def test_doctor_search_covers_specialization(doctors):
    doctors.create(ambulance(title="Dr. A", specialization="Neurology"))
    doctors.create(ambulance(title="Dr. B", specialization="Cardiology"))
    result = doctors.get_all(search="neuro")
    assert [r.title for r in result["data"]] == ["Dr. A"]


def test_ambulance_search_does_not_know_specialization(ambulances):
    assert "specialization" not in ambulances.search_fields


def test_radius_filter_keeps_close_rows_sorted(ambulances):
    ambulances.create(ambulance(title="Near", latitude=21.245, longitude=72.878))
    ambulances.create(ambulance(title="Vadodara", latitude=22.3072, longitude=73.1812))
    ambulances.create(ambulance(title="Navsari", latitude=20.95, longitude=72.92))
    ambulances.create(ambulance(title="Adajan", latitude=21.22, longitude=72.85))

    result = ambulances.get_all(latitude=AMROLI[0], longitude=AMROLI[1])

    assert [r.title for r in result["data"]] == ["Near", "Adajan", "Navsari"]
    distances = [distance_km(*AMROLI, r.latitude, r.longitude) for r in result["data"]]
    assert all(d <= 50 for d in distances)
    assert distances == sorted(distances)
    # total ignores the radius filter
    assert result["total"] == 4


def test_radius_filter_uses_explicit_radius(ambulances):
    ambulances.create(ambulance(title="Near", latitude=21.245, longitude=72.878))
    ambulances.create(ambulance(title="Adajan", latitude=21.22, longitude=72.85))

    result = ambulances.get_all(latitude=AMROLI[0], longitude=AMROLI[1], radius=1)

    assert [r.title for r in result["data"]] == ["Near"]


def test_radius_filter_needs_both_coordinates(ambulances):
    ambulances.create(ambulance(latitude=-33.86, longitude=151.2))
    assert len(ambulances.get_all(latitude=AMROLI[0])["data"]) == 1


def test_radius_filter_only_sees_current_page(ambulances):
    # Oldest row is near, the newer ones are far away; page 1 holds only far rows
    ambulances.create(ambulance(title="Near", latitude=21.245, longitude=72.878))
    for i in range(3):
        ambulances.create(ambulance(title=f"Far {i}", latitude=-33.86, longitude=151.2))

    first = ambulances.get_all(page=1, limit=3, latitude=AMROLI[0], longitude=AMROLI[1])
    second = ambulances.get_all(page=2, limit=3, latitude=AMROLI[0], longitude=AMROLI[1])

    assert first["data"] == []
    assert [r.title for r in second["data"]] == ["Near"]
    assert first["total"] == 4
    assert first["total_pages"] == 2


def test_update_changes_only_given_fields(ambulances, db, fresh):
    created = ambulances.create(ambulance(phone="111"))
    created_at = created.created_at
    # Age the row so a refreshed timestamp is always distinguishable
    stale = created_at - timedelta(days=1)
    created.updated_at = stale
    db.commit()

    ambulances.update(created.id, {"title": "Updated Ambulance"})
    stored = fresh.get_by_id(created.id)

    assert stored.title == "Updated Ambulance"
    assert stored.description == "Test Description"
    assert stored.phone == "111"
    assert stored.updated_at > stale
    assert stored.updated_at >= created_at
    assert stored.created_at == created_at


def test_update_with_empty_payload_keeps_stored_timestamp(ambulances, db, fresh):
    created = ambulances.create(ambulance())
    stale = created.created_at - timedelta(days=1)
    created.updated_at = stale
    db.commit()

    ambulances.update(created.id, {})

    assert fresh.get_by_id(created.id).updated_at == stale


def test_update_can_clear_optional_field(ambulances):
    created = ambulances.create(ambulance(phone="111", image="x.png"))
    updated = ambulances.update(created.id, {"image": None})
    assert updated.image is None
    assert updated.phone == "111"


def test_update_with_empty_payload_is_a_no_op(ambulances):
    created = ambulances.create(ambulance())
    before = (created.title, created.updated_at)

    result = ambulances.update(created.id, {})

    assert (result.title, result.updated_at) == before


def test_update_with_only_unknown_fields_is_a_no_op(ambulances):
    created = ambulances.create(ambulance())
    before = created.updated_at
    assert ambulances.update(created.id, {"colour": "red"}).updated_at == before


def test_update_validates_supplied_fields(ambulances):
    created = ambulances.create(ambulance())

    with pytest.raises(ValidationError):
        ambulances.update(created.id, {"latitude": 95})
    with pytest.raises(ValidationError):
        ambulances.update(created.id, {"title": None})
    with pytest.raises(ValidationError):
        ambulances.update(created.id, {"longitude": "east"})

    unchanged = ambulances.get_by_id(created.id)
    assert unchanged.latitude == 40.7128
    assert unchanged.title == "Test Ambulance"


def test_update_missing_returns_none(ambulances):
    assert ambulances.update(999, {"title": "x"}) is None


def test_delete_then_get_and_delete_again(ambulances):
    created = ambulances.create(ambulance())

    assert ambulances.delete(created.id) is True
    assert ambulances.get_by_id(created.id) is None
    assert ambulances.delete(created.id) is False


@pytest.mark.parametrize("resource_id", [2 ** 70, MAX_ROW_ID + 1, -(2 ** 63) - 1])
def test_ids_outside_integer_range_are_simply_missing(ambulances, resource_id):
    ambulances.create(ambulance())

    assert ambulances.get_by_id(resource_id) is None
    assert ambulances.update(resource_id, {"title": "x"}) is None
    assert ambulances.delete(resource_id) is False


def test_get_by_id_at_integer_limit_is_missing(ambulances):
    assert ambulances.get_by_id(MAX_ROW_ID) is None


@pytest.mark.parametrize("page,limit", [(10 ** 18, 10), (2, 2 ** 64), (2 ** 70, 2 ** 70)])
def test_page_past_the_end_is_empty(ambulances, page, limit):
    for i in range(3):
        ambulances.create(ambulance(title=f"Test {i}"))

    result = ambulances.get_all(page=page, limit=limit)

    assert result["data"] == []
    assert result["total"] == 3
    assert result["total_pages"] == 1


def test_huge_limit_on_first_page_returns_everything(ambulances):
    for i in range(3):
        ambulances.create(ambulance(title=f"Test {i}"))

    result = ambulances.get_all(page=1, limit=2 ** 64)

    assert len(result["data"]) == 3
    assert result["total_pages"] == 1
