__all__ = ["StsClient"]

from typing import Any

from ._errors import translate_client_errors


class StsClient:
    _client: Any

    def __init__(
        self,
        session: Any,
        nparams: dict[str, Any] | None = None,
        client: Any | None = None,
    ):
        self._client = client or session.client("sts", **(nparams or dict()))

    def get_account_id(self) -> str:
        with translate_client_errors():
            return self._client.get_caller_identity()["Account"]
