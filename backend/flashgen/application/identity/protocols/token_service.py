from typing import Protocol

from flashgen.infrastructure.identity.services.token_service import AccessToken


class TokenServiceProtocol(Protocol):
    def create_access_token(self, user_id: int) -> AccessToken: ...

    def verify_access_token(self, token: str) -> int | None: ...
