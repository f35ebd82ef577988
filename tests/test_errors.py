from oceanapi.errors import ArgError


def test_message_names_argument_and_reason():
    err = ArgError("foo", "bar")
    assert str(err) == "foo is invalid because bar"


def test_attributes_are_kept():
    err = ArgError("dropletID", "cannot be less than 1")
    assert err.arg == "dropletID"
    assert err.reason == "cannot be less than 1"


def test_is_a_value_error_with_message():
    err = ArgError("tag", "cannot be empty")
    assert isinstance(err, ValueError)
    assert str(err) == "tag is invalid because cannot be empty"