"""
Bank Registry Module

Owns users and authenticates credentials. A Bank is constructed explicitly
and passed to whoever needs it; it starts empty.
"""

from typing import Dict, List, Optional, Tuple
import threading

from .accounts import SavingsAccount
from .exceptions import AuthenticationError, DuplicateUsernameError, UserNotFoundError
from .users import User
from .logging_config import get_logger, log_action


logger = get_logger("ledger.bank")


class Bank:
    """Username -> User registry"""

    def __init__(self, name: str):
        self.name = name
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def add_user(self, user: User) -> User:
        """
        Insert a user

        Raises:
            DuplicateUsernameError: If the username is taken
        """
        with self._lock:
            if user.username in self._users:
                raise DuplicateUsernameError(user.username)
            self._users[user.username] = user
        return user

    def register(self, username: str, password: str,
                 name: Optional[str] = None) -> Tuple[User, SavingsAccount]:
        """
        Register a user and open their default savings account

        The existence check and the insert happen under one lock, so two
        concurrent registrations of the same username cannot both succeed.

        Returns:
            The new user and their default savings account

        Raises:
            ValueError: If username or password is empty
            DuplicateUsernameError: If the username is taken
        """
        if not username or not password:
            raise ValueError("username & password required")

        user = User(username, password, name or username)
        # The user is only published once the default account exists
        savings = user.open_savings()
        try:
            self.add_user(user)
        except DuplicateUsernameError:
            log_action(logger, "warning", "Registration rejected", user_id=username,
                       action="register_rejected", resource="bank")
            raise

        log_action(logger, "info", "User registered", user_id=username,
                   action="register", resource=savings.account_number)
        return user, savings

    def find_user(self, username: str) -> Optional[User]:
        with self._lock:
            return self._users.get(username)

    def get_user(self, username: str) -> User:
        """
        Raises:
            UserNotFoundError: If no such user is registered
        """
        user = self.find_user(username)
        if user is None:
            raise UserNotFoundError(username)
        return user

    def has_user(self, username: str) -> bool:
        return self.find_user(username) is not None

    def list_users(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def authenticate(self, username: str, password: str) -> User:
        """
        Exact-match credential check

        Unknown usernames and wrong passwords raise the same error so callers
        cannot discover which usernames exist.

        Raises:
            AuthenticationError: If the credentials do not match
        """
        user = self.find_user(username)
        if user is None or not user.check_password(password):
            log_action(logger, "warning", "Authentication failed",
                       action="login_failed", resource="bank",
                       extra={"username": username})
            raise AuthenticationError()
        log_action(logger, "info", "User authenticated", user_id=username,
                   action="login", resource="bank")
        return user

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)


def seed_demo_data(bank: Bank) -> None:
    """
    Populate a bank with the demo users

    alice gets a savings account (5000 opening + 1500 deposit), a fixed
    deposit, a loan and a credit card; bob gets nothing.
    """
    alice = bank.add_user(User("alice", "alice123", "Alice Wonderland"))
    savings = alice.open_savings("5000.00")
    savings.deposit("1500.00")
    alice.open_fixed_deposit("10000.00", 12, "5.5")
    alice.apply_loan("20000.00", "7.5", 24)
    alice.issue_credit_card("5000.00")

    bank.add_user(User("bob", "bob123", "Bob Builder"))
    log_action(logger, "info", "Demo data seeded", action="seed", resource="bank",
               extra={"users": len(bank)})
