"""Tests for EntryQuery filtering and projection."""

from statstore.domain.value_objects.entry_query import EntryField, EntryQuery
from statstore.domain.value_objects.scope import Scope


def _row(name="views", entity_type="node", entity_id=1, user_id=0, value=3, changed=10):
    return {
        "entity_type": entity_type,
        "entity_id": entity_id,
        "user_id": user_id,
        "name": name,
        "value": value,
        "changed": changed,
    }


def test_full_projection_by_default():
    assert EntryQuery().projected_fields() == tuple(EntryField)


def test_reduced_projection():
    q = EntryQuery(fields=(EntryField.NAME, EntryField.VALUE))
    assert q.project(_row()) == {"name": "views", "value": 3}


def test_scope_must_match_exactly():
    q = EntryQuery(scope=Scope("node", 1))
    assert q.matches(_row())
    assert not q.matches(_row(entity_id=2))
    assert not q.matches(_row(user_id=5))
    assert not q.matches(_row(entity_type="comment"))


def test_single_name_filter():
    q = EntryQuery(scope=Scope("node", 1), names=("views",))
    assert q.matches(_row(name="views"))
    assert not q.matches(_row(name="downloads"))


def test_multiple_names_filter():
    q = EntryQuery(scope=Scope("node", 1), names=("views", "downloads"))
    assert q.matches(_row(name="views"))
    assert q.matches(_row(name="downloads"))
    assert not q.matches(_row(name="likes"))


def test_no_names_matches_whole_scope():
    q = EntryQuery(scope=Scope("node", 1))
    assert q.matches(_row(name="anything"))


def test_entry_field_values_are_column_names():
    assert EntryField.ENTITY_TYPE == "entity_type"
    assert EntryField.CHANGED.value == "changed"
