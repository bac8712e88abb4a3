"""
mint_vm.runtime.engine — deterministic, single-writer contract host.

Design goals
------------
- One serialization point: a single re-entrant lock orders every call
  (mutating or read-only) into one global total order. No call observes the
  partial effects of another.
- All-or-nothing calls: each call writes into a fresh `Journal` over the
  injected `StorageBackend`. A `Revert` (application or native code) discards
  the journal and the call's staged events; success commits both.
- Typed surface: arguments are validated against the contract's declared ABI
  before the contract is entered.
- Deterministic: no wall-clock, no randomness. Block height only moves through
  `advance()`.

Contracts
---------
A contract is a Python module exposing plain functions plus a module-level
`ABI` mapping:

    ABI = {
        "init":     {"args": ["uint"]},
        "transfer": {"args": ["uint", "principal", "principal", "optional<buffer34>"],
                     "returns": "bool"},
        "get_name": {"args": [], "returns": "ascii32", "read_only": True},
    }

Contracts never import this module; they use `mint_vm.stdlib`, which binds to
the frame the engine installs for the call.

Usage
-----
    eng = Engine()
    token = eng.deploy("mint_contracts.token_template.contract", deployer,
                       "My Token", "MTK", 6, None, 1_000_000)
    res = eng.call(token, "transfer", 10, deployer, alice, None, caller=deployer)
    assert res.ok and res.value is True
"""

from __future__ import annotations

import importlib
import logging
import threading
from dataclasses import dataclass
from hashlib import sha3_256
from types import ModuleType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from mint_vm.abi.types import coerce_principal, parse_type, validate_args
from mint_vm.config import VMConfig, load_config
from mint_vm.errors import InvalidAccess, Revert

from . import treasury_api as _treasury
from .context import BlockEnv, Frame, enter_frame, to_hex
from .error import VmError
from .events_api import Event, EventSink, events_for_receipt
from .journal import Journal
from .result import CallResult
from .storage_api import MemoryBackend, StorageBackend, check_backend

log = logging.getLogger(__name__)

CONTRACT_DOMAIN = b"stacksmint/contract"


@dataclass(frozen=True)
class DeployedContract:
    address: bytes
    module: ModuleType
    abi: Mapping[str, Mapping[str, Any]]
    deployer: bytes
    name: str


def contract_address(deployer: bytes, nonce: int) -> bytes:
    """Deterministic address: sha3_256(domain || deployer || nonce_be64)."""
    return sha3_256(CONTRACT_DOMAIN + bytes(deployer) + int(nonce).to_bytes(8, "big")).digest()


def _load_module(module: Union[str, ModuleType]) -> ModuleType:
    if isinstance(module, ModuleType):
        return module
    if isinstance(module, str):
        return importlib.import_module(module)
    raise VmError(
        "contract must be a module or dotted module path",
        code="bad_contract",
        context={"py_type": type(module).__name__},
    )


def _check_abi(mod: ModuleType) -> Mapping[str, Mapping[str, Any]]:
    abi = getattr(mod, "ABI", None)
    if not isinstance(abi, Mapping) or not abi:
        raise VmError("contract module has no ABI mapping", code="bad_contract",
                      context={"module": mod.__name__})
    for fn, entry in abi.items():
        if not callable(getattr(mod, fn, None)):
            raise VmError(f"ABI names missing function {fn!r}", code="bad_contract",
                          context={"module": mod.__name__})
        for spec in entry.get("args", ()):
            parse_type(spec)
    return abi


class Engine:
    """Journaled, lock-serialized executor for contract calls."""

    def __init__(
        self,
        *,
        backend: Optional[StorageBackend] = None,
        config: Optional[VMConfig] = None,
        height: int = 1,
    ) -> None:
        self.config = config or load_config()
        self._backend: StorageBackend = (
            check_backend(backend) if backend is not None else MemoryBackend()
        )
        self._block = BlockEnv(height=height, chain_id=self.config.chain_id)
        self._lock = threading.RLock()
        self._contracts: Dict[bytes, DeployedContract] = {}
        self._nonce = 0
        self._logs: List[Event] = []

    # ---------- state & environment ---------- #

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def block(self) -> BlockEnv:
        return self._block

    @property
    def block_height(self) -> int:
        return self._block.height

    @property
    def logs(self) -> Tuple[Event, ...]:
        """Every event committed so far, in commit order."""
        with self._lock:
            return tuple(self._logs)

    def receipts(self) -> List[Any]:
        """Committed events in canonical receipt form."""
        return events_for_receipt(self.logs)

    def advance(self, blocks: int = 1) -> int:
        """Move the block height forward; returns the new height."""
        with self._lock:
            self._block = self._block.advanced(blocks)
            return self._block.height

    def contract(self, address: bytes) -> DeployedContract:
        try:
            return self._contracts[bytes(address)]
        except KeyError:
            raise VmError(
                "no contract at address",
                code="unknown_contract",
                context={"address": to_hex(address)},
            ) from None

    # ---------- deployment ---------- #

    def deploy(
        self,
        module: Union[str, ModuleType],
        deployer: bytes,
        *init_args: Any,
        name: Optional[str] = None,
    ) -> bytes:
        """
        Bind a contract module to a fresh address and run its `init` (if any)
        with `deployer` as the caller. A failing init leaves no trace.
        """
        mod = _load_module(module)
        abi = _check_abi(mod)
        deployer = coerce_principal(deployer)
        with self._lock:
            addr = contract_address(deployer, self._nonce)
            c = DeployedContract(addr, mod, abi, deployer, name or mod.__name__)
            self._contracts[addr] = c
            if "init" in abi:
                try:
                    res = self.call(addr, "init", *init_args, caller=deployer)
                except Exception:
                    del self._contracts[addr]
                    raise
                if not res.ok:
                    del self._contracts[addr]
                    raise VmError(
                        "contract init failed",
                        code="deploy_failed",
                        context={"contract": c.name, "error": res.error, "origin": res.origin},
                    )
            else:
                self._nonce += 1
        log.info("deployed %s at %s (deployer %s)", c.name, to_hex(addr), to_hex(deployer))
        return addr

    # ---------- calls ---------- #

    def call(
        self, address: bytes, function: str, *args: Any, caller: bytes
    ) -> CallResult:
        """Execute `function` as `caller`; committed only if it succeeds."""
        return self._dispatch(address, function, args, caller, require_read_only=False)

    def read(
        self, address: bytes, function: str, *args: Any, caller: Optional[bytes] = None
    ) -> CallResult:
        """Execute a read-only accessor; nothing it does is ever committed."""
        return self._dispatch(address, function, args, caller, require_read_only=True)

    def _dispatch(
        self,
        address: bytes,
        function: str,
        args: Tuple[Any, ...],
        caller: Optional[bytes],
        *,
        require_read_only: bool,
    ) -> CallResult:
        with self._lock:
            c = self.contract(address)
            entry = c.abi.get(function)
            if entry is None:
                raise VmError(
                    f"unknown function {function!r}",
                    code="unknown_function",
                    context={"contract": c.name},
                )
            read_only = bool(entry.get("read_only", False))
            if require_read_only and not read_only:
                raise VmError(
                    f"{function!r} is not a read-only function",
                    code="not_read_only",
                    context={"contract": c.name},
                )
            values = validate_args(function, entry.get("args", ()), args)
            sender = coerce_principal(caller) if caller is not None else c.address
            return self._execute(c, function, values, sender, read_only=read_only)

    def _execute(
        self,
        c: DeployedContract,
        function: str,
        values: List[Any],
        caller: bytes,
        *,
        read_only: bool,
    ) -> CallResult:
        self._nonce += 1
        journal = Journal(self._backend)
        sink = EventSink(self.config.max_logs_per_call)
        frame = Frame(c.address, caller, journal, sink, self._block, read_only,
                      config=self.config)
        fn = getattr(c.module, function)

        try:
            with enter_frame(frame):
                value = fn(*values)
        except Revert as exc:
            journal.revert()
            log.debug("%s.%s by %s -> err u%d (%s)", c.name, function, to_hex(caller),
                      exc.err, exc.origin)
            return CallResult.from_revert(exc)
        except (VmError, InvalidAccess) as exc:
            journal.revert()
            log.warning("host fault in %s.%s: %s", c.name, function, exc)
            raise

        if read_only:
            journal.revert()
            log.debug("%s.%s (read-only) -> ok", c.name, function)
            return CallResult.success(value)

        journal.commit()
        committed = tuple(sink.iter_events())
        self._logs.extend(committed)
        log.debug("%s.%s by %s -> ok (%d event(s))", c.name, function, to_hex(caller),
                  len(committed))
        return CallResult.success(value, committed)

    # ---------- native coin (host side) ---------- #

    def _system_frame(self, *, read_only: bool) -> Frame:
        self._nonce += 1
        addr = _treasury.TREASURY_ADDRESS
        return Frame(addr, addr, Journal(self._backend), EventSink(1), self._block,
                     read_only, config=self.config)

    def fund(self, address: bytes, amount: int) -> int:
        """Credit native coins to `address` (genesis/faucet helper)."""
        address = coerce_principal(address)
        with self._lock:
            frame = self._system_frame(read_only=False)
            with enter_frame(frame):
                _treasury.credit(address, amount)
                new_balance = _treasury.balance_of(address)
            frame.journal.commit()
        log.debug("funded %s with %d", to_hex(address), amount)
        return new_balance

    def coin_balance(self, address: bytes) -> int:
        """Committed native balance of `address`."""
        with self._lock:
            frame = self._system_frame(read_only=True)
            with enter_frame(frame):
                return _treasury.balance_of(coerce_principal(address))


__all__ = ["Engine", "DeployedContract", "contract_address"]
