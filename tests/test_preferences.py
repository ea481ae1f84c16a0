import pytest

from conftest import make_record
from roommates.errors import InvalidPreferences
from roommates.models import GuestPreference, SleepSchedule
from roommates.preferences import PreferenceRecord


def test_string_values_are_coerced_to_enums():
    record = make_record(sleep_schedule="night_owl", guest_preferences="often")
    assert record.sleep_schedule is SleepSchedule.NIGHT_OWL
    assert record.guest_preferences is GuestPreference.OFTEN


def test_interests_are_normalized_and_deduplicated():
    record = make_record(interests=["Yoga", " yoga ", "Board   Games", "  ", "HIKING"])
    assert record.interests == frozenset({"yoga", "board games", "hiking"})


def test_missing_interests_become_empty_set():
    assert make_record(interests=None).interests == frozenset()


def test_interests_must_be_a_list_not_a_string():
    with pytest.raises(InvalidPreferences):
        make_record(interests="yoga")


@pytest.mark.parametrize(
    "field, value",
    [
        ("cleanliness_level", 0),
        ("cleanliness_level", 6),
        ("noise_level", True),
        ("noise_level", "3"),
        ("age_range_min", 17),
        ("age_range_max", 17),
    ],
)
def test_out_of_range_numbers_are_rejected(field, value):
    with pytest.raises(InvalidPreferences):
        make_record(**{field: value})


def test_unknown_enum_value_is_rejected():
    with pytest.raises(InvalidPreferences, match="sleep_schedule") as excinfo:
        make_record(sleep_schedule="sometimes")
    assert excinfo.value.__suppress_context__


def test_inverted_age_range_is_rejected():
    with pytest.raises(InvalidPreferences, match="age_range_min"):
        make_record(age_range_min=40, age_range_max=30)


def test_invalid_preferences_is_a_value_error():
    with pytest.raises(ValueError):
        make_record(diet_preferences="carnivore")


def test_fingerprint_combines_key_fields():
    record = make_record(
        cleanliness_level=5,
        noise_level=1,
        sleep_schedule="early_bird",
        smoking_preferences="outdoors_only",
        pets_preferences="depends",
    )
    assert record.fingerprint == "5-1-early_bird-outdoors_only-depends"


def test_records_are_immutable():
    record = make_record()
    with pytest.raises(AttributeError):
        record.noise_level = 4


def test_to_dict_uses_plain_values():
    data = make_record(interests=["b", "a"], additional_notes="Night shifts").to_dict()
    assert data["sleep_schedule"] == "early_bird"
    assert data["interests"] == ["a", "b"]
    assert data["additional_notes"] == "Night shifts"
    assert data["fingerprint"] == "3-3-early_bird-no-no"


def test_equal_submissions_give_equal_records():
    a = make_record(interests=["hiking", "cooking"])
    b = make_record(interests=["Cooking", "hiking", "hiking"])
    assert a == b
    assert isinstance(a, PreferenceRecord)
