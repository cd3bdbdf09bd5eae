import secrets

import bcrypt

# bcrypt only looks at the first 72 bytes; newer releases refuse anything longer
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with a random bcrypt salt."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the table
        return False


def generate_password() -> str:
    """Generate an initial password for a newly registered patient."""
    return secrets.token_urlsafe(9)
