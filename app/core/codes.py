"""Random access-code generation for admin, member and share codes."""
import secrets

# Ambiguous characters are excluded: I, O, 0, 1 (and i, l, o in the lowercase set)
ADMIN_CODE_CHARS = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
MEMBER_CODE_CHARS = "abcdefghjkmnpqrstuvwxyz23456789"
SHARE_CODE_CHARS = ADMIN_CODE_CHARS

ADMIN_CODE_LENGTH = 8
MEMBER_CODE_LENGTH = 6
SHARE_CODE_LENGTH = 8


def generate_code(alphabet: str, length: int) -> str:
    """Return `length` characters drawn uniformly, with replacement, from `alphabet`."""
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_admin_code() -> str:
    return generate_code(ADMIN_CODE_CHARS, ADMIN_CODE_LENGTH)


def generate_member_code() -> str:
    return generate_code(MEMBER_CODE_CHARS, MEMBER_CODE_LENGTH)


def generate_share_code() -> str:
    return generate_code(SHARE_CODE_CHARS, SHARE_CODE_LENGTH)


def codes_match(expected: str, supplied: str) -> bool:
    """Case-insensitive comparison used for every access-code check."""
    if not expected or not supplied:
        return False
    return expected.casefold() == supplied.casefold()
