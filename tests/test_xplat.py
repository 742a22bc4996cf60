from supertd.project import TdProject
from supertd.xplat import unpack_project_metadata

JOB_METADATA = [
    ("fbandroid.test_selection_config", '{"test.abc": "1", "test.def": "2"}'),
    ("foo", "bar"),
    ("fbobjc.test_selection_config", '{"test.xyz": "1"}'),
]


def test_unpack_project_metadata_fbandroid():
    result = unpack_project_metadata(TdProject.FBANDROID, JOB_METADATA)
    assert sorted(result) == sorted(
        [("test.abc", "1"), ("test.def", "2")] + JOB_METADATA
    )


def test_unpack_project_metadata_fbobjc():
    result = unpack_project_metadata(TdProject.FBOBJC, JOB_METADATA)
    assert sorted(result) == sorted([("test.xyz", "1")] + JOB_METADATA)


def test_other_project_unchanged():
    assert unpack_project_metadata(TdProject.FBCODE, JOB_METADATA) == JOB_METADATA


def test_invalid_json_is_ignored():
    metadata = [("fbandroid.test_selection_config", "not json"), ("foo", "bar")]
    assert unpack_project_metadata(TdProject.FBANDROID, metadata) == metadata


def test_non_string_values_are_ignored():
    metadata = [("fbobjc.test_selection_config", '{"a": 1}')]
    assert unpack_project_metadata(TdProject.FBOBJC, metadata) == metadata


def test_missing_config_key():
    metadata = [("foo", "bar")]
    assert unpack_project_metadata(TdProject.FBANDROID, metadata) == metadata