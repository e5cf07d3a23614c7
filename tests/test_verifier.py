import pytest

from schemacompat.codec import CodecPolicy, MissingFieldError, schema_label
from schemacompat.schemas import RECORD_NAMES, sample, schema_for, v0, v1
from schemacompat.verifier import (
    CompatibilityAssertionError,
    CompatibilityMode,
    SchemaDiff,
    assert_compatibility,
    audit,
    check_compatibility,
    expected_compatibility,
    structural_diff,
)


def test_structural_diff_added_field():
    diff = structural_diff(v0.GreetingRequest, v1.GreetingRequest)
    assert diff == SchemaDiff(added=["favorite_song"], removed=[], added_required=["favorite_song"], removed_required=[])


def test_structural_diff_removed_field():
    diff = structural_diff(v0.Greeting, v1.Greeting)
    assert diff.added == []
    assert diff.removed == ["name"]
    assert diff.removed_required == ["name"]


def test_structural_diff_rename_by_removal():
    diff = structural_diff(v0.Profile, v1.Profile)
    assert diff.added == ["favorite_band"]
    assert diff.removed == ["favorite_thing"]
    assert not diff.is_empty


def test_structural_diff_optional_addition():
    diff = structural_diff(v0.HelloRequest, v1.HelloRequest)
    assert diff.added == ["locale"]
    assert diff.added_required == []
    assert structural_diff(v0.Hello, v0.Hello).is_empty


def test_new_schema_cannot_read_data_missing_an_added_field(strict_codec):
    # v1 added favorite_song: old data lacks it
    res = check_compatibility(sample(v0.GreetingRequest), v1.GreetingRequest, strict_codec)
    assert not res.compatible
    assert isinstance(res.error, MissingFieldError)
    assert res.error.field_name == "favorite_song"
    assert res.writer == "v0.GreetingRequest" and res.reader == "v1.GreetingRequest"


def test_old_schema_reads_data_with_an_added_field(strict_codec):
    res = check_compatibility(sample(v1.GreetingRequest), v0.GreetingRequest, strict_codec)
    assert res.compatible
    assert res.error is None
    assert res.decoded == v0.GreetingRequest(name="Greg")


def test_removed_field_breaks_old_readers_only(strict_codec):
    # new code reads old data: the surplus name field is ignored
    assert check_compatibility(sample(v0.Greeting), v1.Greeting, strict_codec)
    # old code reads new data: name is gone
    res = check_compatibility(sample(v1.Greeting), v0.Greeting, strict_codec)
    assert not res
    assert res.error.field_name == "name"


def test_checks_are_deterministic(strict_codec):
    value = sample(v0.Profile)
    first = check_compatibility(value, v1.Profile, strict_codec)
    for _ in range(3):
        assert check_compatibility(value, v1.Profile, strict_codec) == first


def test_audit_runs_both_directions(strict_codec):
    report = audit(sample(v0.Greeting), sample(v1.Greeting), strict_codec)
    assert report.backward.compatible is True
    assert report.forward.compatible is False
    assert report.mode is CompatibilityMode.BACKWARD
    assert report.diff.removed == ["name"]


@pytest.mark.parametrize("record,mode", [
    ("GreetingRequest", CompatibilityMode.FORWARD),
    ("Greeting", CompatibilityMode.BACKWARD),
    ("Profile", CompatibilityMode.NONE),
    ("HelloRequest", CompatibilityMode.FULL),
    ("Hello", CompatibilityMode.FORWARD),
])
def test_fixture_modes_under_strict_codec(strict_codec, record, mode):
    report = audit(sample(schema_for(record, "v0")), sample(schema_for(record, "v1")), strict_codec)
    assert report.mode is mode


def test_defaulting_codec_makes_every_fixture_fully_compatible(defaulting_codec):
    for record in RECORD_NAMES:
        report = audit(sample(schema_for(record, "v0")), sample(schema_for(record, "v1")), defaulting_codec)
        assert report.mode is CompatibilityMode.FULL, record


@pytest.mark.parametrize("codec_fixture", ["strict_codec", "defaulting_codec"])
def test_truth_table_predicts_observed_outcomes(request, codec_fixture):
    codec = request.getfixturevalue(codec_fixture)
    for record in RECORD_NAMES:
        old_schema, new_schema = schema_for(record, "v0"), schema_for(record, "v1")
        report = audit(sample(old_schema), sample(new_schema), codec)
        predicted = expected_compatibility(structural_diff(old_schema, new_schema), codec.policy)
        assert predicted == (report.backward.compatible, report.forward.compatible), record


def test_truth_table_by_policy():
    added = SchemaDiff(added=["x"], added_required=["x"])
    removed = SchemaDiff(removed=["y"], removed_required=["y"])
    assert expected_compatibility(added, CodecPolicy.STRICT) == (False, True)
    assert expected_compatibility(removed, CodecPolicy.STRICT) == (True, False)
    assert expected_compatibility(SchemaDiff(), "strict") == (True, True)
    assert expected_compatibility(added, CodecPolicy.DEFAULTING) == (True, True)


def test_assert_compatibility(strict_codec):
    res = assert_compatibility(sample(v1.GreetingRequest), v0.GreetingRequest, True, strict_codec)
    assert res.compatible
    assert_compatibility(sample(v0.GreetingRequest), v1.GreetingRequest, False, strict_codec)

    with pytest.raises(CompatibilityAssertionError) as exc:
        assert_compatibility(sample(v0.GreetingRequest), v1.GreetingRequest, True, strict_codec)
    assert exc.value.expected is True
    assert "favorite_song" in str(exc.value)
    # it is an AssertionError so plain test code can let it fail the test
    assert isinstance(exc.value, AssertionError)


def test_result_labels_match_codec_error_schema(strict_codec):
    res = check_compatibility(sample(v0.Greeting), v1.Hello, strict_codec)
    assert res.reader == schema_label(v1.Hello) == "v1.Hello"
    assert res.error.schema == res.reader
    assert res.writer == schema_label(v0.Greeting)
