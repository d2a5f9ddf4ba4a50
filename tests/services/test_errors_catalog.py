import pytest

from devdb.errors_catalog import actionable_error


def test_actionable_error_formats_message_with_suggested_action():
    message = actionable_error("container_exists", name="devdb_mysql")

    assert "A container named devdb_mysql already exists." in message
    assert "Suggested action:" in message
    assert "--force" in message


def test_actionable_error_rejects_unknown_code():
    with pytest.raises(KeyError):
        actionable_error("not_a_real_code")
