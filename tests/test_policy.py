import pytest

from pizzastore.policy import (
    SELF_SERVICE_FIELDS,
    ProfileField,
    can_mutate,
    editable_fields,
    refresh_role,
    resolve_role,
)
from pizzastore.session import Role, Session

NON_MANAGERS = [Role.CUSTOMER, Role.DRIVER]


@pytest.mark.parametrize("role", NON_MANAGERS)
@pytest.mark.parametrize("field", sorted(SELF_SERVICE_FIELDS, key=lambda f: f.name))
def test_non_manager_may_edit_own_contact_fields(role, field):
    assert can_mutate(role, field, target_is_self=True)


@pytest.mark.parametrize("role", NON_MANAGERS)
@pytest.mark.parametrize("field", [ProfileField.LOGIN, ProfileField.ROLE])
def test_non_manager_may_not_edit_own_login_or_role(role, field):
    assert not can_mutate(role, field, target_is_self=True)


@pytest.mark.parametrize("role", NON_MANAGERS)
@pytest.mark.parametrize("field", list(ProfileField))
def test_non_manager_may_not_touch_other_users(role, field):
    assert not can_mutate(role, field, target_is_self=False)


@pytest.mark.parametrize("target_is_self", [True, False])
@pytest.mark.parametrize("field", list(ProfileField))
def test_manager_may_edit_anything(field, target_is_self):
    assert can_mutate(Role.MANAGER, field, target_is_self)


def test_editable_fields_follow_menu_order():
    assert editable_fields(Role.CUSTOMER) == [
        ProfileField.PHONE_NUMBER, ProfileField.PASSWORD, ProfileField.FAVORITE_ITEMS,
    ]
    assert editable_fields(Role.MANAGER)[-2:] == [ProfileField.LOGIN, ProfileField.ROLE]


@pytest.mark.parametrize("raw,expected", [
    ("manager", Role.MANAGER),
    ("  MANAGER ", Role.MANAGER),
    ("Manager", Role.MANAGER),
    (" Driver ", Role.DRIVER),
    ("customer", Role.CUSTOMER),
    ("supervisor", Role.CUSTOMER),
    ("", Role.CUSTOMER),
    (None, Role.CUSTOMER),
])
def test_stored_role_is_trimmed_and_case_insensitive(raw, expected):
    assert Role.from_stored(raw) is expected


def test_resolve_role_reads_storage(db):
    assert resolve_role(db, "carol") is Role.MANAGER
    assert resolve_role(db, "dave") is Role.DRIVER
    assert resolve_role(db, "nobody") is None


def test_refresh_role_updates_stale_session(db):
    session = Session("alice", Role.CUSTOMER)
    db.conn.execute("UPDATE users SET role = 'manager' WHERE login = 'alice';")
    assert refresh_role(db, session) is Role.MANAGER
    assert session.role is Role.MANAGER
