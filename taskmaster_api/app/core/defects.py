"""
Catalogue of the intentional defects shipped with the tutorial.

TaskMaster Pro exists to practise a hotfix workflow, so a handful of
bugs are part of its documented behaviour and are asserted by the test
suite.  Each one is named here and referenced from the code path that
implements it, which makes ``grep KNOWN_DEFECT_`` a complete list of
places a hotfix has to touch.

Every defect is active by default.  Switching on the matching
``hotfix_*`` setting (or ``HOTFIX_*`` environment variable) replaces it
with the corrected behaviour:

* ``KNOWN_DEFECT_LOGIN_COMPARISON`` – login compares stored
  credentials against the literal ``"wrong_password"`` rather than the
  password that was sent, so every login is rejected.
* ``KNOWN_DEFECT_COMPLETE_DELETES_TASK`` – updating a task with
  ``completed=true`` removes it instead of marking it complete.
* ``KNOWN_DEFECT_AUTH_BYPASS`` – the credential resolver ignores the
  ``Authorization`` header and treats every caller as user 1.
* ``KNOWN_DEFECT_UNAUTHENTICATED_TASKS`` – the task routes require no
  identity at all and every task belongs to user 1.
"""

from typing import Dict, List

from .config import Settings


KNOWN_DEFECT_LOGIN_COMPARISON = "KNOWN_DEFECT_LOGIN_COMPARISON"
KNOWN_DEFECT_COMPLETE_DELETES_TASK = "KNOWN_DEFECT_COMPLETE_DELETES_TASK"
KNOWN_DEFECT_AUTH_BYPASS = "KNOWN_DEFECT_AUTH_BYPASS"
KNOWN_DEFECT_UNAUTHENTICATED_TASKS = "KNOWN_DEFECT_UNAUTHENTICATED_TASKS"

# The password the broken login comparison checks against.
WRONG_PASSWORD_LITERAL = "wrong_password"

# Stable user id injected by the bypassed resolver and stamped on tasks.
DEFAULT_USER_ID = 1

DESCRIPTIONS: Dict[str, str] = {
    KNOWN_DEFECT_LOGIN_COMPARISON: "Login always fails due to password validation bug",
    KNOWN_DEFECT_COMPLETE_DELETES_TASK: "Completing tasks deletes them instead of marking complete",
    KNOWN_DEFECT_AUTH_BYPASS: "Profile authentication is bypassed, every caller is user 1",
    KNOWN_DEFECT_UNAUTHENTICATED_TASKS: "No authentication on task endpoints",
}

_HOTFIX_FIELDS: Dict[str, str] = {
    KNOWN_DEFECT_LOGIN_COMPARISON: "hotfix_login_comparison",
    KNOWN_DEFECT_COMPLETE_DELETES_TASK: "hotfix_complete_deletes_task",
    KNOWN_DEFECT_AUTH_BYPASS: "hotfix_auth_bypass",
    KNOWN_DEFECT_UNAUTHENTICATED_TASKS: "hotfix_unauthenticated_tasks",
}


def is_active(defect: str, settings: Settings) -> bool:
    """Return True while ``defect`` has not been hotfixed in ``settings``."""
    return not getattr(settings, _HOTFIX_FIELDS[defect])


def active_defects(settings: Settings) -> List[str]:
    """Names of the defects still active under ``settings``, in catalogue order."""
    return [name for name in _HOTFIX_FIELDS if is_active(name, settings)]
