from dataclasses import dataclass

ROLE_CUSTOMER = 'customer'
ROLE_VENDOR = 'vendor'
ROLE_ADMIN = 'admin'

ROLES = (ROLE_CUSTOMER, ROLE_VENDOR, ROLE_ADMIN)


@dataclass(frozen=True)
class ChatSession:
    """
    Identity of the caller, built once per request or websocket connection
    and passed explicitly to the chat services.

    DRF treats it as ``request.user``, hence the ``is_authenticated`` flag.
    """
    user_id: str
    role: str = ROLE_CUSTOMER

    is_authenticated = True
    is_anonymous = False

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_vendor(self) -> bool:
        return self.role == ROLE_VENDOR

    @classmethod
    def from_claims(cls, claims: dict) -> 'ChatSession':
        user_id = claims.get('sub') or claims.get('user_id')
        if not user_id:
            raise ValueError('Token has no subject')
        role = claims.get('role', ROLE_CUSTOMER)
        if role not in ROLES:
            role = ROLE_CUSTOMER
        return cls(user_id=str(user_id), role=role)

    def __str__(self):
        return f"{self.user_id} ({self.role})"
