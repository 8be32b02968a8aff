"""
Domain errors raised by the ledger core.

Insufficient funds and over-limit charges are NOT exceptions: those
operations return False. Everything here is recoverable and reported to the
immediate caller.
"""


class LedgerError(Exception):
    """Base class for all ledger errors"""

    def __init__(self, detail: str = "Ledger error"):
        self.detail = detail
        super().__init__(detail)


class NotFoundError(LedgerError, LookupError):
    """A user or account could not be resolved"""


class UserNotFoundError(NotFoundError):

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User '{username}' not found")


class AccountNotFoundError(NotFoundError):

    def __init__(self, account_number: str):
        self.account_number = account_number
        super().__init__(f"Account '{account_number}' not found")


class AccountKindMismatchError(AccountNotFoundError):
    """The account exists but is the wrong variant for the operation"""

    def __init__(self, account_number: str, expected: str):
        self.expected = expected
        super().__init__(account_number)
        self.detail = f"Account '{account_number}' is not a {expected}"
        self.args = (self.detail,)


class LinkedAccountNotFoundError(AccountNotFoundError):
    """A debit card's linked savings account can no longer be resolved"""

    def __init__(self, card_number: str, linked_number: str):
        self.card_number = card_number
        super().__init__(linked_number)
        self.detail = f"Linked account '{linked_number}' of card '{card_number}' not found"
        self.args = (self.detail,)


class AuthenticationError(LedgerError):
    """Unknown username or wrong password; the two are not distinguished"""

    def __init__(self):
        super().__init__("Invalid credentials")


class DuplicateUsernameError(LedgerError):

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' already exists")
