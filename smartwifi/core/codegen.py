"""
SmartWiFi Portal - Random code generation

Used for both voucher codes and installation tokens.
"""
import secrets

# no 0/O or 1/I
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def generate(alphabet: str = CODE_ALPHABET, length: int = 10) -> str:
    """
    Draw ``length`` characters uniformly, with replacement, from ``alphabet``.

    Uses the ``secrets`` CSPRNG so codes cannot be predicted from earlier ones.
    """
    if not alphabet:
        raise ValueError("alphabet must not be empty")
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(alphabet) for _ in range(length))
