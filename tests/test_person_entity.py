from datetime import date, datetime, timedelta, timezone

from people_api.models import Person
from people_api.models.people import utc_today
from people_api.schemas import years_before

TODAY = date(2024, 6, 15)


def make(birth_date=date(1990, 5, 15)):
    return Person.create("João", "Silva", "joao@x.com", birth_date, "111")


def test_create_sets_defaults():
    """new person is active, stamped once and never updated"""
    person = make()
    assert person.id is not None
    assert person.active is True
    assert isinstance(person.created_at, datetime)
    assert person.updated_at is None


def test_each_person_gets_a_fresh_id():
    assert make().id != make().id


def test_full_name():
    assert make().full_name == "João Silva"


def test_age_on_exact_anniversary():
    person = make(birth_date=years_before(TODAY, 30))
    assert person.age(today=TODAY) == 30


def test_age_day_before_anniversary():
    person = make(birth_date=date(1994, 6, 16))
    assert person.age(today=TODAY) == 29


def test_age_leap_day_birth():
    person = make(birth_date=date(2000, 2, 29))
    assert person.age(today=date(2023, 2, 28)) == 22
    assert person.age(today=date(2023, 3, 1)) == 23


def test_age_defaults_to_today():
    person = make(birth_date=years_before(utc_today(), 40))
    assert person.age() == 40


def test_update_personal_info_keeps_document_and_active():
    person = make()
    person.deactivate()
    person.update_personal_info("Ana", "Costa", "ana@x.com", date(1991, 1, 1))

    assert person.first_name == "Ana"
    assert person.last_name == "Costa"
    assert person.email == "ana@x.com"
    assert person.birth_date == date(1991, 1, 1)
    assert person.document == "111"
    assert person.active is False
    assert person.updated_at >= person.created_at


def test_activate_and_deactivate_are_idempotent():
    person = make()
    person.deactivate()
    first_update = person.updated_at
    person.deactivate()
    assert person.active is False
    assert person.updated_at >= first_update

    person.activate()
    person.activate()
    assert person.active is True
    assert person.updated_at >= person.created_at


def test_timestamps_are_utc_aware():
    person = make()
    assert person.created_at.utcoffset() == timedelta(0)

    person.activate()
    assert person.updated_at.tzinfo is not None
    assert person.updated_at.utcoffset() == timedelta(0)


def test_mark_updated_handles_naive_created_at():
    """rows read back without tz info still compare against utc now"""
    person = make()
    person.created_at = datetime(2020, 1, 1, 12, 0)
    person.mark_updated()
    assert person.updated_at > datetime(2020, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_age_uses_utc_today():
    person = make(birth_date=years_before(utc_today(), 25))
    assert person.age() == 25
