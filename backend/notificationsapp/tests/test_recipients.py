from notificationsapp.recipients import resolve_recipients
from notificationsapp.records import UserRecord

OWNER = UserRecord(id="o1", role="owner")
EMP1 = UserRecord(id="e1", role="employee")
EMP2 = UserRecord(id="e2", role="employee")
USERS = [OWNER, EMP1, EMP2]


def ids(users):
    return [u.id for u in users]


def test_all_wins_over_other_tokens():
    assert ids(resolve_recipients(["owner", "all", "e1"], USERS)) == ["o1", "e1", "e2"]


def test_owner_and_employees_returns_each_user_once():
    assert sorted(ids(resolve_recipients(["owner", "employees"], USERS))) == ["e1", "e2", "o1"]


def test_explicit_ids_union_with_roles():
    assert ids(resolve_recipients(["owner", "e2"], USERS)) == ["o1", "e2"]


def test_unknown_ids_resolve_to_nobody():
    assert resolve_recipients(["ghost"], USERS) == []
    assert resolve_recipients([], USERS) == []


def test_dedup_is_by_user_id_not_object():
    twin = UserRecord(id="e1", role="employee", email="other@example.com")
    out = resolve_recipients(["employees", "e1"], [OWNER, EMP1, twin])
    assert ids(out) == ["e1"]
