"""
security/auth.py
-----------------
Password comparison for member logins.

The login service treats this as an opaque check: any callable with the
``PasswordChecker`` signature can be injected instead (e.g. a hash verifier
once credentials stop being stored in plain text).
"""

import hmac
from typing import Callable, Optional

PasswordChecker = Callable[[str, Optional[str]], bool]


def check_password(supplied: str, stored: Optional[str]) -> bool:
    """
    Compare a supplied password against the stored credential.

    Behavior:
        - A member without a stored credential can never log in.
        - Comparison is constant-time to avoid leaking prefix matches.
    """
    if stored is None or supplied is None:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), stored.encode("utf-8"))
