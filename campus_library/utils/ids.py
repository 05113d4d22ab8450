import secrets
import time


def new_txn_id() -> str:
    """Loan id: ``TX`` + epoch milliseconds + random suffix.

    The suffix keeps two loans issued within the same millisecond apart.
    """
    return f"TX{int(time.time() * 1000)}{secrets.token_hex(3).upper()}"
