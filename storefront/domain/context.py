# storefront/domain/context.py
from dataclasses import dataclass


@dataclass(frozen=True)
class CustomerContext:
    """Zalogowany klient, przekazywany jawnie do serwisow."""

    user_id: str
    email: str


@dataclass(frozen=True)
class AdminContext:
    admin_id: str
    username: str


@dataclass(frozen=True)
class CartOwner:
    """Koszyk nalezy albo do uzytkownika albo do sesji goscia, nigdy do obu."""

    user_id: str | None = None
    session_id: str | None = None

    def __post_init__(self):
        if (self.user_id is None) == (self.session_id is None):
            raise ValueError("CartOwner needs exactly one of user_id / session_id")

    @classmethod
    def resolve(cls, customer: CustomerContext | None, session_id: str | None) -> "CartOwner | None":
        # zalogowany uzytkownik ma pierwszenstwo przed session_id
        if customer is not None:
            return cls(user_id=customer.user_id)
        if session_id:
            return cls(session_id=session_id)
        return None
