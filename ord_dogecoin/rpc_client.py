"""RPC client for interacting with a Dogecoin Core node."""

from __future__ import annotations

"""Typed JSON-RPC client for Dogecoin Core nodes.

ord only needs a handful of read paths from the node: chain identity, the node
version, and the wallet listing calls used during wallet preflight. The
:class:`NodeRPC` protocol names exactly those calls so option handling can be
exercised against stub nodes. No consensus logic is implemented here; the client
simply forwards well-typed requests and surfaces errors clearly.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import requests
from requests import RequestException, Response

logger = logging.getLogger(__name__)

RPC_TIMEOUT_SECONDS = 30


class RPCError(RuntimeError):
    """Raised when the Dogecoin node responds with an RPC error."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message


class RPCConnectionError(RuntimeError):
    """Raised when the node cannot be reached or authenticated against.

    ``endpoint`` and ``cookie_file`` are kept for diagnostics; the cookie
    contents never are.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        cookie_file: Path | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.cookie_file = cookie_file
        self.status_code = status_code


def format_rpc_hint(error_obj: RPCError | None) -> str | None:
    """Return a human-friendly hint for common wallet JSON-RPC errors."""

    if error_obj is None:
        return None

    code = error_obj.code
    message = error_obj.message

    if code == -18 or "not found" in message.lower():
        return "The wallet does not exist on this node. Create it with `ord wallet create`."
    if code == -4 and "wallet file verification failed" in message.lower():
        return (
            "Dogecoin Core could not open the wallet file. Check that no other process "
            "holds it and that --chain matches the node."
        )
    if code == -32601:
        return (
            "The node does not support this call. Upgrade Dogecoin Core and make sure "
            "the wallet is a descriptor wallet."
        )
    return None


def read_cookie_file(cookie_file: str | Path) -> tuple[str, str]:
    """Read a ``username:password`` cookie file written by Dogecoin Core."""

    path = Path(cookie_file)
    try:
        content = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise RPCConnectionError(
            f"failed to read Dogecoin Core cookie file {path}: {exc.strerror or exc}",
            cookie_file=path,
        ) from exc
    except UnicodeDecodeError as exc:
        raise RPCConnectionError(
            f"Dogecoin Core cookie file {path} is not valid UTF-8", cookie_file=path
        ) from exc
    user, separator, password = content.partition(":")
    if not separator or not user:
        raise RPCConnectionError(
            f"invalid Dogecoin Core cookie file format: {path}", cookie_file=path
        )
    return user, password


class NodeRPC(Protocol):
    """Node calls required to validate a connection and a wallet."""

    def getblockchaininfo(self) -> Dict[str, Any]: ...

    def getblockcount(self) -> int: ...

    def version(self) -> int: ...

    def listwallets(self) -> list[str]: ...

    def loadwallet(self, wallet: str) -> Dict[str, Any]: ...

    def listdescriptors(self) -> list[Dict[str, Any]]: ...


class DogecoinRPCClient:
    """Typed JSON-RPC client for Dogecoin Core compatible nodes.

    The client is intentionally thin: each helper maps directly to an RPC
    method exposed by the node and returns the parsed JSON response. URLs given
    without a scheme (``127.0.0.1:22555/wallet/ord``) are reached over plain
    HTTP.
    """

    def __init__(
        self,
        url: str,
        user: str,
        password: str,
        *,
        cookie_file: Path | None = None,
    ) -> None:
        self.url = url if "://" in url else f"http://{url}"
        self.cookie_file = cookie_file
        self._auth = (user, password)
        self._session = requests.Session()

    @classmethod
    def from_cookie_file(cls, url: str, cookie_file: Path) -> "DogecoinRPCClient":
        """Instantiate a client authenticated by a Dogecoin Core cookie file."""

        try:
            user, password = read_cookie_file(cookie_file)
        except RPCConnectionError as exc:
            raise RPCConnectionError(
                f"failed to connect to Dogecoin Core RPC at {url} using cookie file "
                f"{cookie_file}: {exc}",
                endpoint=url,
                cookie_file=Path(cookie_file),
            ) from exc
        return cls(url, user, password, cookie_file=Path(cookie_file))

    def _transport_error(self, message: str, status_code: int | None = None) -> RPCConnectionError:
        location = f"Dogecoin Core RPC at {self.url}"
        if self.cookie_file is not None:
            location += f" using cookie file {self.cookie_file}"
        return RPCConnectionError(
            f"{message} ({location})",
            endpoint=self.url,
            cookie_file=self.cookie_file,
            status_code=status_code,
        )

    def call(self, method: str, params: Optional[list[Any]] = None) -> Any:
        """Perform a JSON-RPC request."""

        payload = {
            "jsonrpc": "1.0",
            "id": str(uuid.uuid4()),
            "method": method,
            "params": params or [],
        }
        logger.debug("RPC call %s params=%s", method, params)
        try:
            response = self._session.post(
                self.url,
                data=json.dumps(payload),
                headers={"content-type": "application/json"},
                auth=self._auth,
                timeout=RPC_TIMEOUT_SECONDS,
            )
        except RequestException as exc:
            logger.error(
                "RPC connection failed: %s",
                exc,
                exc_info=logger.isEnabledFor(logging.DEBUG),
            )
            raise self._transport_error(
                "RPC connection failed. Ensure Dogecoin Core is running and --rpc-url points to it"
            ) from exc
        result = self._parse_response(response)
        if result.get("error"):
            error = result["error"]
            raise RPCError(error.get("code", -1), error.get("message", "unknown"))
        return result.get("result")

    def _parse_response(self, response: Response) -> Dict[str, Any]:
        # Dogecoin Core reports JSON-RPC errors with HTTP 500 and a JSON body,
        # so the body is checked before the status code.
        if response.status_code == 401:
            logger.error("RPC HTTP error 401 from %s", response.url)
            raise self._transport_error(
                "Unauthorized (401). The cookie file does not match the running node",
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except ValueError as exc:
            logger.debug("RPC JSON parse error: %s", response.text, exc_info=True)
            if not response.ok:
                raise self._transport_error(
                    f"RPC server returned HTTP {response.status_code}",
                    status_code=response.status_code,
                ) from exc
            raise self._transport_error("RPC server returned malformed JSON") from exc
        if not isinstance(body, dict):
            raise self._transport_error("RPC server returned malformed JSON")
        if not response.ok and not body.get("error"):
            logger.error("RPC HTTP error %s from %s", response.status_code, response.url)
            raise self._transport_error(
                f"RPC server returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return body

    # Convenience wrappers -------------------------------------------------

    def getblockchaininfo(self) -> Dict[str, Any]:
        return self.call("getblockchaininfo")

    def getblockcount(self) -> int:
        return int(self.call("getblockcount"))

    def getnetworkinfo(self) -> Dict[str, Any]:
        return self.call("getnetworkinfo")

    def version(self) -> int:
        """Return the node's integer version as reported by ``getnetworkinfo``."""

        return int(self.getnetworkinfo()["version"])

    def listwallets(self) -> list[str]:
        return self.call("listwallets")

    def loadwallet(self, wallet: str) -> Dict[str, Any]:
        return self.call("loadwallet", [wallet])

    def listdescriptors(self) -> list[Dict[str, Any]]:
        """Return the descriptor entries of the wallet selected by the URL."""

        result = self.call("listdescriptors")
        return list(result.get("descriptors", []))
