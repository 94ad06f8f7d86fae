"""Utilities for resolving accounts and users given on the command line."""

from typing import Iterable

from cuentatrack.domain.entities import Account, User
from cuentatrack.domain.errors import NotFoundError


def resolve_account(accounts: Iterable[Account], account: str | int) -> Account:
    """Resolve an account id or correo to a loaded account.

    Args:
        accounts: Loaded accounts
        account: Account correo (str) or ID (int or string representation of int)

    Returns:
        The matching account

    Raises:
        NotFoundError: If account is not found
    """
    accounts = list(accounts)

    # Try to parse as integer (handles string IDs like "1")
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        for acc in accounts:
            if acc.id == account_id:
                return acc
        raise NotFoundError(f"Account ID {account_id} not found")

    # Correo match is case-insensitive
    needle = str(account).strip().lower()
    for acc in accounts:
        if acc.correo.lower() == needle:
            return acc

    raise NotFoundError(f"Account '{account}' not found")


def resolve_user(users: Iterable[User], user: str | int | None) -> User:
    """Resolve the acting user by id or nombre.

    Raises:
        NotFoundError: If no user is given or it does not exist
    """
    if user is None or user == "":
        raise NotFoundError("No acting user given (use --user or CUENTATRACK_USER)")

    users = list(users)
    try:
        user_id = int(user)
    except (ValueError, TypeError):
        user_id = None

    for u in users:
        if (user_id is not None and u.id == user_id) or u.nombre == user:
            return u
    raise NotFoundError(f"User '{user}' not found")
