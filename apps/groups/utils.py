"""
Utility functions for the Groups app.
"""
import re
import secrets
import string

INVITE_CODE_LENGTH = 6
INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 10


def generate_invite_code(length=INVITE_CODE_LENGTH, max_attempts=MAX_CODE_ATTEMPTS):
    """
    Generate a unique, uppercase alphanumeric invite code.

    Args:
        length: Length of the code (default 6).
        max_attempts: How many collisions to tolerate before giving up.

    Returns:
        A random uppercase alphanumeric string, or ``None`` if every
        candidate collided with an existing code.
    """
    from apps.groups.models import InviteCode

    for _ in range(max_attempts):
        code = ''.join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))
        if not InviteCode.objects.filter(code=code).exists():
            return code
    return None


def normalize_invite_code(raw):
    """Uppercase *raw* and drop everything that is not A-Z or 0-9."""
    return re.sub(r'[^A-Z0-9]', '', (raw or '').strip().upper())
