# artcert/dispatcher.py
"""
Transaction dispatcher.

Routes named ledger functions to registry operations. Arguments arrive
as strings, the way a chaincode invocation delivers them:

    InitLedger
    CreateAsset    id, photoURI, title, artist (JSON), owner, yearOfProduction
    ReadAsset      id
    UpdateAsset    id, photoURI, title, artist (JSON), owner, yearOfProduction
    DeleteAsset    id
    TransferAsset  id, newOwner
    AssetExists    id
    GetAllAssets

Each call is one unit of work and gets back a Response.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .certificate import Artist
from .errors import RegistryError
from .registry import AssetRegistry
from .worldstate import WorldState

logger = logging.getLogger(__name__)

OK = 200
BAD_REQUEST = 400
ERROR = 500

Operation = Callable[[AssetRegistry, WorldState, List[str]], Any]

# Global operation table
_OPERATIONS: Dict[str, Operation] = {}


class InvalidArgumentError(ValueError):
    """An invocation argument is missing or malformed."""


@dataclass
class Response:
    """Outcome of one invocation."""
    status: int
    message: str = ""
    payload: Any = None

    @property
    def ok(self) -> bool:
        return self.status == OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "payload": self.payload,
        }


def register_operation(name: str, arity: int) -> Callable:
    """
    Decorator to register a ledger function.

    Usage:
        @register_operation("ReadAsset", arity=1)
        def read_asset(registry, state, args):
            ...
    """
    def decorator(fn: Operation) -> Operation:
        if name in _OPERATIONS:
            logger.warning(f"Overwriting operation {name}")
        fn.arity = arity
        _OPERATIONS[name] = fn
        return fn
    return decorator


def list_operations() -> List[str]:
    """Names of all registered ledger functions."""
    return sorted(_OPERATIONS)


def _asset_id(value: str) -> str:
    if not value:
        raise InvalidArgumentError("asset id must not be empty")
    return value


def _artist(value: str) -> Artist:
    try:
        artist = Artist.from_dict(json.loads(value))
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise InvalidArgumentError(f"invalid artist {value!r}: {e}") from e
    for name, field_value in artist.to_dict().items():
        if not isinstance(field_value, str):
            raise InvalidArgumentError(f"invalid artist {value!r}: {name!r} must be a string")
    return artist


def _year(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise InvalidArgumentError(f"invalid year of production {value!r}") from e


@register_operation("InitLedger", arity=0)
def init_ledger(registry: AssetRegistry, state: WorldState, args: List[str]):
    registry.initialize(state)
    return None


@register_operation("CreateAsset", arity=6)
def create_asset(registry: AssetRegistry, state: WorldState, args: List[str]):
    asset_id, photo_uri, title, artist, owner, year = args
    registry.create(
        state, _asset_id(asset_id), photo_uri, title, _artist(artist), owner, _year(year)
    )
    return None


@register_operation("ReadAsset", arity=1)
def read_asset(registry: AssetRegistry, state: WorldState, args: List[str]):
    return registry.read(state, _asset_id(args[0])).to_dict()


@register_operation("UpdateAsset", arity=6)
def update_asset(registry: AssetRegistry, state: WorldState, args: List[str]):
    asset_id, photo_uri, title, artist, owner, year = args
    registry.update(
        state, _asset_id(asset_id), photo_uri, title, _artist(artist), owner, _year(year)
    )
    return None


@register_operation("DeleteAsset", arity=1)
def delete_asset(registry: AssetRegistry, state: WorldState, args: List[str]):
    registry.delete(state, _asset_id(args[0]))
    return None


@register_operation("TransferAsset", arity=2)
def transfer_asset(registry: AssetRegistry, state: WorldState, args: List[str]):
    asset_id, new_owner = args
    registry.transfer(state, _asset_id(asset_id), new_owner)
    return None


@register_operation("AssetExists", arity=1)
def asset_exists(registry: AssetRegistry, state: WorldState, args: List[str]):
    return registry.exists(state, _asset_id(args[0]))


@register_operation("GetAllAssets", arity=0)
def get_all_assets(registry: AssetRegistry, state: WorldState, args: List[str]):
    return [cert.to_dict() for cert in registry.list_all(state)]


class Dispatcher:
    """
    Invokes ledger functions against a world state.

    Usage:
        dispatcher = Dispatcher()
        response = dispatcher.invoke(state, "ReadAsset", ["8989s1gjJJHJKHJSGHJDJSAD871238S"])
        if response.ok:
            print(response.payload["owner"])
    """

    def __init__(self, registry: Optional[AssetRegistry] = None):
        self.registry = registry or AssetRegistry()

    def invoke(self, state: WorldState, function: str, args: List[str] = None) -> Response:
        """
        Run one ledger function.

        Returns:
            Response with status 200 and the result as payload, 400 for an
            unknown function or bad arguments, 500 when the registry fails
        """
        args = list(args or [])
        operation = _OPERATIONS.get(function)
        if operation is None:
            logger.warning(f"Unknown function {function}")
            return Response(BAD_REQUEST, f"Function {function} not found")
        if len(args) != operation.arity:
            return Response(
                BAD_REQUEST,
                f"Function {function} expects {operation.arity} arguments, got {len(args)}",
            )

        logger.debug(f"Invoking {function} with {len(args)} args")
        try:
            payload = operation(self.registry, state, args)
        except InvalidArgumentError as e:
            logger.warning(f"{function} rejected: {e}")
            return Response(BAD_REQUEST, str(e))
        except RegistryError as e:
            logger.warning(f"{function} failed: {e}")
            return Response(ERROR, str(e))

        return Response(OK, payload=payload)
