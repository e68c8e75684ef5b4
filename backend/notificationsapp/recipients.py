from typing import Iterable, List, Sequence, TypeVar

from .triggers import RESERVED_RECIPIENTS

U = TypeVar("U")


def _user_key(user) -> str:
    return str(getattr(user, "id", None) or getattr(user, "pk"))


def _role(user) -> str:
    return getattr(user, "role", "")


def resolve_recipients(specifiers: Iterable[str], active_users: Sequence[U]) -> List[U]:
    """
    Map recipient specifiers to concrete users.

    - "all" anywhere in the list wins: every active user is returned.
    - otherwise the union of owners ("owner"), employees ("employees") and users
      whose id matches one of the remaining tokens.

    Works on ``identity.User`` rows and ``UserRecord`` snapshots alike. The result
    is de-duplicated on the user id, keeping first-seen order.
    """
    tokens = [str(s) for s in (specifiers or [])]
    if "all" in tokens:
        candidates = list(active_users)
    else:
        explicit_ids = {t for t in tokens if t not in RESERVED_RECIPIENTS}
        candidates = []
        if "owner" in tokens:
            candidates.extend(u for u in active_users if _role(u) == "owner")
        if "employees" in tokens:
            candidates.extend(u for u in active_users if _role(u) == "employee")
        if explicit_ids:
            candidates.extend(u for u in active_users if _user_key(u) in explicit_ids)

    seen = set()
    resolved = []
    for user in candidates:
        key = _user_key(user)
        if key in seen:
            continue
        seen.add(key)
        resolved.append(user)
    return resolved
