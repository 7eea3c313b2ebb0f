"""neofeeder.client

``FeederClient`` talks to a single NeoFeeder web-service endpoint.

Every operation fetches a fresh token (``act = "GetToken"``) and then POSTs
one JSON payload whose ``act`` field selects the remote operation. Whatever
happens, the caller gets an :class:`~neofeeder.envelope.Envelope` back, or,
with ``raise_errors=True``, the plain ``data`` value and a
:class:`~neofeeder.exceptions.FeederError` on failure.

Example Usage:
    from neofeeder import FeederClient, FeederSettings

    client = FeederClient(FeederSettings(url="http://localhost:3003/ws/live2.php",
                                         username="user", password="secret"))
    res = client.get_mhs_by_nim("2021010001")
    if res.ok:
        print(res.data)
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests
from pydantic import ValidationError

from . import __version__
from .config import FeederSettings
from .envelope import EMPTY_DATA, Envelope, disconnected, empty_data, failure, success
from .exceptions import raise_for_envelope
from .queries import QUERIES, NamedQuery, get_query
from .utils import field_name, strict_token

__all__ = ["FeederClient", "dumps"]

logger = logging.getLogger(__name__)

_MASKED_KEYS = ("password", "token")


def _masked(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of *payload* safe to write to logs."""
    return {k: ("***" if k in _MASKED_KEYS and v else v) for k, v in payload.items()}


class FeederClient:
    """Client for the NeoFeeder web service.

    Named queries from :data:`neofeeder.queries.QUERIES` are available both
    through :meth:`query` and as attributes, e.g. ``client.get_dosen_by_nidn("0012")``.
    """

    def __init__(
        self,
        settings: FeederSettings,
        session: Any = None,
        raise_errors: bool = False,
    ) -> None:
        self.settings = settings
        self.raise_errors = raise_errors
        self._http = session if session is not None else requests
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": f"neofeeder-python/{__version__}",
        }

    # ── transport ──────────────────────────────────────────────────

    def _post_json(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """POST *payload*; return the decoded JSON object or ``None`` on any failure."""
        act = payload.get("act")
        logger.debug(f"POST {self.settings.url} act={act}")
        try:
            r = self._http.post(
                self.settings.url,
                json=payload,
                headers=self.headers,
                timeout=self.settings.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"NeoFeeder HTTP error for act={act}: {e} payload={_masked(payload)}")
            return None

        if not 200 <= r.status_code < 300:
            logger.error(
                f"NeoFeeder non-success response for act={act}: "
                f"status={r.status_code} body={r.text!r} payload={_masked(payload)}"
            )
            return None

        try:
            body = r.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            logger.error(
                f"NeoFeeder invalid json for act={act}: body={r.text!r} payload={_masked(payload)}"
            )
            return None
        return body

    def _finish(self, envelope: Envelope) -> Any:
        if self.raise_errors:
            return raise_for_envelope(envelope)
        return envelope

    # ── token ──────────────────────────────────────────────────────

    def _get_token(self) -> Envelope:
        payload = {
            "act": "GetToken",
            "username": self.settings.username,
            "password": self.settings.password,
        }
        body = self._post_json(payload)
        if body is None:
            return disconnected()

        data = body.get("data")
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            logger.warning(f"NeoFeeder returned no token for user {self.settings.username!r}")
            return empty_data()
        return success(data)

    def _token_or_error(self) -> Tuple[Optional[str], Optional[Envelope]]:
        """Return ``(token, None)`` or ``(None, failing_envelope)``."""
        token_resp = self._get_token()
        if not token_resp.ok:
            return None, token_resp
        token = (token_resp.data or {}).get("token")
        if not token:
            return None, disconnected()
        return token, None

    def get_token(self) -> Any:
        """Fetch a fresh token; ``data`` is the feeder's raw ``data`` object."""
        return self._finish(self._get_token())

    # ── generic query ──────────────────────────────────────────────

    def _run_ws(
        self,
        act: str,
        filter: str = "",
        limit: Any = "",
        offset: Any = "",
        order: str = "",
    ) -> Envelope:
        token, error = self._token_or_error()
        if error is not None:
            return error

        payload = {
            "act": act,
            "token": token,
            "filter": filter,
            "limit": limit,
            "offset": offset,
            "order": order,
        }
        body = self._post_json(payload)
        if body is None:
            return disconnected()

        if not body.get("data"):
            logger.warning(f"NeoFeeder empty data for act={act} filter={filter!r}")
            return empty_data()
        return success(body["data"])

    def run_ws(
        self,
        act: str,
        filter: str = "",
        limit: Any = "",
        offset: Any = "",
        order: str = "",
    ) -> Any:
        """Run feeder action *act* with a raw filter string.

        Empty strings mean "not given" to the feeder. Empty results come back
        as error 204, transport problems as 404.
        """
        return self._finish(self._run_ws(act, filter, limit, offset, order))

    # ── mutations ──────────────────────────────────────────────────

    def _mutate(self, payload: Dict[str, Any]) -> Envelope:
        token, error = self._token_or_error()
        if error is not None:
            return error

        payload = {"act": payload.pop("act"), "token": token, **payload}
        body = self._post_json(payload)
        if body is None:
            return disconnected()

        # The feeder reports mutation outcomes itself.
        if body.get("error_code") is not None:
            if body.get("error_code"):
                logger.warning(
                    f"NeoFeeder rejected act={payload['act']}: "
                    f"[{body.get('error_code')}] {body.get('error_desc')}"
                )
            return self._remote_envelope(body)
        data = body.get("data")
        return success(data if data is not None else body)

    def _remote_envelope(self, body: Dict[str, Any]) -> Envelope:
        """Envelope carrying the feeder's own fields; malformed ones count as 404."""
        desc = body.get("error_desc")
        if desc is not None and not isinstance(desc, str):
            body = {**body, "error_desc": json.dumps(desc, ensure_ascii=False)}
        try:
            return Envelope.model_validate(body)
        except ValidationError as e:
            logger.error(f"NeoFeeder malformed mutation response: {e.errors()} body={body!r}")
            return disconnected()

    def insert_ws(self, act: str, record: Dict[str, Any]) -> Any:
        """Insert *record*, e.g. ``insert_ws("InsertBiodataMahasiswa", {...})``."""
        return self._finish(self._mutate({"act": act, "record": record}))

    def update_ws(self, act: str, key: Any, record: Dict[str, Any]) -> Any:
        """Update the record identified by *key*."""
        return self._finish(self._mutate({"act": act, "key": key, "record": record}))

    def delete_ws(self, act: str, key: Any) -> Any:
        """Delete the record identified by *key*."""
        return self._finish(self._mutate({"act": act, "key": key}))

    def diktio(self, act: str, fungsi: Any) -> Any:
        """Dictionary call: sends ``fungsi`` instead of a filter."""
        return self._finish(self._mutate({"act": act, "fungsi": fungsi}))

    # ── generic helpers ────────────────────────────────────────────

    def det_ws(self, act: str, field: str, value: Any) -> Any:
        """``act`` filtered by ``field = '<value>'``."""
        return self.detlim_ws(act, field, value, "")

    def detlim_ws(self, act: str, field: str, value: Any, limit: Any) -> Any:
        filter = f"{field_name(field)} = '{strict_token(value)}'"
        return self.run_ws(act, filter, limit, "", "")

    def detlim_fitur(self, act: str, limit: Any) -> Any:
        return self.run_ws(act, "", limit, "", "")

    def all_get(self, act: str) -> Any:
        return self.run_ws(act, "", "", "", "")

    def all_get_order(self, act: str, field: str, direction: str = "ASC") -> Any:
        column = field_name(field)
        if not column:
            raise ValueError(f"order field {field!r} has no usable characters")
        direction = direction.strip().upper()
        if direction not in ("ASC", "DESC"):
            raise ValueError(f"order direction must be ASC or DESC, not {direction!r}")
        order = f"{column} {direction}"
        return self.run_ws(act, "", "", "", order)

    # ── named queries ──────────────────────────────────────────────

    def _query(self, named: NamedQuery, *args: Any, **kwargs: Any) -> Envelope:
        act, filter, limit, offset, order = named.build(*args, **kwargs)
        return self._run_ws(act, filter, limit, offset, order)

    def query(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Run the named query *name* with its arguments."""
        return self._finish(self._query(get_query(name), *args, **kwargs))

    def __getattr__(self, name: str):
        # Only reached for attributes not found normally.
        named = QUERIES.get(name)
        if named is None:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

        def call(*args: Any, **kwargs: Any) -> Any:
            return self._finish(self._query(named, *args, **kwargs))

        call.__name__ = name
        call.__doc__ = named.doc or f"Run feeder action {named.act}."
        return call

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(QUERIES))

    # ── composites ─────────────────────────────────────────────────

    def _get_all_prodi(self) -> Envelope:
        profil_resp = self._query(QUERIES["get_profil_pt"])
        if not profil_resp.ok:
            return profil_resp

        rows = profil_resp.data
        profil = rows[0] if isinstance(rows, list) and rows else None
        if not isinstance(profil, dict):
            return failure(EMPTY_DATA, "institution profile not found")

        id_pt = profil.get("id_perguruan_tinggi")
        if not id_pt:
            return failure(EMPTY_DATA, "id_perguruan_tinggi not available")

        filter = f"id_perguruan_tinggi = '{strict_token(id_pt)}'"
        return self._run_ws("GetAllProdi", filter, "", "", "id_jenjang_pendidikan ASC")

    def get_all_prodi(self) -> Any:
        """All study programs (prodi) of the institution this feeder belongs to."""
        return self._finish(self._get_all_prodi())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.settings.url!r}, user={self.settings.username!r})"


def dumps(result: Any) -> str:
    """Render an envelope (or plain data) as indented JSON."""
    if isinstance(result, Envelope):
        result = result.to_dict()
    return json.dumps(result, ensure_ascii=False, indent=2)
