"""Remote vault settings access"""

from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..config import settings
from ..exceptions import RemoteCallError
from ..schemas.settings import SettingQueryResponse, SettingRecordModel
from .connection_directory import ConnectionDirectory
from .log_service import log_service

FIELD_NAME = "name__v"
FIELD_JSON = "json__c"


def _error_message(errors: Optional[List[Dict[str, Any]]]) -> str:
    """Flatten a vault "errors" list into one line"""
    if not errors:
        return "no error details"
    parts = []
    for error in errors:
        if isinstance(error, dict):
            parts.append(f"{error.get('type', 'ERROR')}: {error.get('message', '')}")
        else:
            parts.append(str(error))
    return "; ".join(parts)


class RemoteSettingStore:
    """
    Read and write settings records on a remote vault.

    Failures never propagate: they are logged and reported as None, so a
    caller cannot tell "not found" from "request failed".
    """

    def __init__(
        self,
        directory: ConnectionDirectory,
        client: Optional[httpx.AsyncClient] = None,
        api_version: Optional[str] = None,
        setting_object: Optional[str] = None,
    ):
        self.directory = directory
        self.api_version = api_version or settings.API_VERSION
        self.setting_object = setting_object or settings.SETTING_OBJECT
        self.client = client or httpx.AsyncClient(timeout=settings.REMOTE_TIMEOUT)

    def build_query(self, name: str) -> str:
        """VQL selecting the JSON of the record named name"""
        escaped = name.replace("\\", "\\\\").replace("'", "\\'")
        return (
            f"SELECT LONGTEXT({FIELD_JSON})"
            f" FROM {self.setting_object}"
            f" WHERE {FIELD_NAME} = '{escaped}'"
        )

    async def _send(self, connection_name: str, path: str, **kwargs) -> Dict:
        """POST to the remote vault API and return the parsed SUCCESS body"""
        endpoint = await self.directory.get_endpoint(connection_name)
        if endpoint is None:
            raise RemoteCallError(f"Unknown connection '{connection_name}'")

        url = f"{endpoint.base_url}/api/{self.api_version}{path}"
        headers = {"Accept": "application/json"}
        if endpoint.auth_token:
            headers["Authorization"] = f"Bearer {endpoint.auth_token}"

        try:
            response = await self.client.post(url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteCallError(
                "Remote vault returned an error status",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteCallError(f"Request failed: {e!r}", url=url) from e

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteCallError(
                "Response is not valid JSON", url=url, status_code=response.status_code
            ) from e

        if not isinstance(body, dict):
            raise RemoteCallError("Response is not a JSON object", url=url)

        if body.get("responseStatus") != "SUCCESS":
            raise RemoteCallError(
                f"{body.get('responseStatus', 'NO STATUS')}: {_error_message(body.get('errors'))}",
                url=url,
                status_code=response.status_code,
            )

        return body

    async def find(
        self, name: str, connection_name: str
    ) -> Optional[SettingRecordModel]:
        """Query the remote vault for the record named name"""
        try:
            body = await self._send(
                connection_name, "/query", data={"q": self.build_query(name)}
            )
            response = SettingQueryResponse.model_validate(body)
        except ValidationError as e:
            log_service.error(
                f"Malformed settings query response for {name} via {connection_name}: {e}"
            )
            return None
        except RemoteCallError as e:
            log_service.error(
                f"Settings query for {name} via {connection_name} failed: {e}"
            )
            return None

        # One record per name is expected; the first one carrying JSON wins
        for record in response.data:
            if record.json_value is not None:
                return record

        return None

    async def upsert(
        self, name: str, json: str, connection_name: str
    ) -> Optional[SettingRecordModel]:
        """
        Create or update the record named name on the remote vault.

        Returns the record that was sent, or None if the write failed.
        """
        record = SettingRecordModel(name=name, json_value=json)
        try:
            body = await self._send(
                connection_name,
                f"/vobjects/{self.setting_object}",
                params={"idParam": FIELD_NAME},
                json=[record.model_dump(by_alias=True)],
            )
            for result in body.get("data") or []:
                if isinstance(result, dict) and result.get("responseStatus") == "FAILURE":
                    raise RemoteCallError(
                        f"Record rejected: {_error_message(result.get('errors'))}"
                    )
        except RemoteCallError as e:
            log_service.error(
                f"Saving setting {name} via {connection_name} failed: {e}"
            )
            return None

        log_service.info(f"Saved setting {name} via {connection_name}: {body}")
        return record

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
