"""Connection to a CoppeliaSim scene and object-handle lookup."""

from __future__ import annotations

import sys
import threading
import warnings
from typing import Any, Callable, Dict, Iterable, List, Optional

from .names import standard_name, starts_with_slash

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 23000
DEFAULT_TIMEOUT_IN_MILLISECONDS = 300
LEGACY_PORTS = frozenset({19997, 19998, 19999, 20000})

ClientFactory = Callable[[str, int, int, int], Any]


class CoppeliaSimError(RuntimeError):
    """Raised when the simulator cannot be reached or a request fails."""


def _err(*lines: object) -> None:
    for line in lines:
        print(line, file=sys.stderr)


def legacy_port_to_zmq(port: int) -> int:
    """Replace an old remote-API port number with the default ZMQ port number.

    Any other port number is returned unchanged.
    """
    if port in LEGACY_PORTS:
        _err(
            f"The port {port} is commonly used in the legacy API. "
            "However it is not compatible with the ZMQ Remote API.",
            f"I changed the port to {DEFAULT_PORT}",
        )
        return DEFAULT_PORT
    return port


class CoppeliaSimConnection:
    """A client session with a CoppeliaSim scene.

    ``client_factory(host, rpc_port, cnt_port, verbose)`` opens the remote
    session and returns the object exposing the simulator's API.
    """

    def __init__(self, client_factory: ClientFactory):
        self._client_factory = client_factory
        self._sim: Any = None
        self._client_created = False
        self.host: str = DEFAULT_HOST
        self.rpc_port: int = DEFAULT_PORT
        self.cnt_port: int = -1
        self.verbose: int = -1
        self.timeout_in_milliseconds: int = DEFAULT_TIMEOUT_IN_MILLISECONDS
        # Accept names without a leading slash by adding one.
        self.enable_deprecated_name_compatibility: bool = True
        self._handles: Dict[str, int] = {}

    @property
    def connected(self) -> bool:
        """Whether a client session has been established."""
        return self._client_created

    # ------------------------------------------------------------ connecting

    def connect(
        self,
        host: Any = DEFAULT_HOST,
        port: Optional[int] = None,
        timeout_in_milliseconds: Optional[int] = None,
        max_try_count: Optional[int] = None,
    ) -> bool:
        """Connect to the simulator; return whether the session was established.

        Passing ``max_try_count``, or a port number in place of the host, selects
        the deprecated signatures, which also map legacy ports to the ZMQ one.
        Raises ``CoppeliaSimError`` if the client is not created within the timeout.
        """
        if isinstance(host, int) and not isinstance(host, bool):
            host, port, timeout_in_milliseconds, max_try_count = (
                DEFAULT_HOST,
                host,
                port,
                timeout_in_milliseconds,
            )
            legacy = True
        else:
            legacy = max_try_count is not None
        if port is None:
            port = DEFAULT_PORT
        if timeout_in_milliseconds is None:
            timeout_in_milliseconds = DEFAULT_TIMEOUT_IN_MILLISECONDS
        if legacy:
            warnings.warn(
                "The signature with max_try_count is not required with the ZeroMQ "
                f"remote API. Legacy ports are changed to {DEFAULT_PORT}.",
                DeprecationWarning,
                stacklevel=2,
            )
            port = legacy_port_to_zmq(port)
        return self._connect(host, port, timeout_in_milliseconds, -1, -1)

    def _connect(
        self, host: str, rpc_port: int, timeout_in_milliseconds: int, cnt_port: int, verbose: int
    ) -> bool:
        self.host = host
        self.rpc_port = rpc_port
        self.cnt_port = cnt_port
        self.verbose = verbose
        self.timeout_in_milliseconds = timeout_in_milliseconds

        outcome: Dict[str, Any] = {}

        def create() -> None:
            try:
                outcome["sim"] = self._client_factory(host, rpc_port, cnt_port, verbose)
            except BaseException as exc:  # handed back to the caller below
                outcome["error"] = exc

        worker = threading.Thread(target=create, daemon=True)
        worker.start()
        worker.join(timeout_in_milliseconds / 1000.0)
        if worker.is_alive():
            self._client_created = False
            self._report_unestablished_connection()
            raise CoppeliaSimError("Unestablished connection.")

        try:
            if "error" in outcome:
                raise outcome["error"]
            self._sim = outcome["sim"]
            self._client_created = self._sim is not None
            self._set_status_bar_message("       ")
            self._log(
                f"Established a connection on port {rpc_port}",
                self._sim.verbosity_warnings,
            )
        except (RuntimeError, OSError) as exc:
            _err(f"Runtime error in connect. {exc}")
        return self._client_created

    def _report_unestablished_connection(self) -> None:
        port = self.rpc_port
        _err(
            f'Unestablished connection at "{self.host}" in port {port}',
            f"You used a timeout of {self.timeout_in_milliseconds}ms. "
            "Is enough time for your system?",
        )
        if port != DEFAULT_PORT:
            _err(
                "",
                f"is CoppeliaSim running with the port {port} enabled?",
                "",
                "Example: using the terminal, open CoppeliaSim with arguments:",
                "----------------------------------------",
                f"coppeliasim -GzmqRemoteApi.rpcPort={port}",
                "----------------------------------------",
            )
            if port < DEFAULT_PORT:
                if port == 19997:
                    _err(
                        f"The port {port} is commonly used in the legacy API. "
                        "However it is not compatible with the ZMQ Remote API."
                    )
                _err(f"The ZMQ Remote API uses the port {DEFAULT_PORT} by default.")
        _err("")

    # ------------------------------------------------------------ internals

    def _check_client(self) -> None:
        if not self._client_created:
            raise CoppeliaSimError("Unestablished connection. Did you use connect()?")

    def _throw_runtime_error(self, message: str) -> None:
        self.stop_simulation()
        _err("Something went wrong. I stopped the simulation!")
        raise CoppeliaSimError(message)

    def _log(self, message: str, verbosity: int) -> None:
        self._sim.addLog(verbosity, message)

    def _set_status_bar_message(self, message: str) -> None:
        self._check_client()
        self._log(message, self._sim.verbosity_undecorated)

    def _update_map(self, objectname: str, handle: int, remove: bool = False) -> None:
        if remove:
            self._handles.pop(objectname, None)
        else:
            self._handles.setdefault(objectname, handle)

    def _get_handle_from_map(self, objectname: str) -> int:
        handle = self._handles.get(objectname)
        if handle is not None:
            return handle
        return self.get_object_handle(objectname)

    def _standard_name(self, name: str) -> str:
        return standard_name(name, self.enable_deprecated_name_compatibility)

    # ------------------------------------------------------------ simulation

    def start_simulation(self) -> None:
        """Start the simulation."""
        self._check_client()
        self._sim.startSimulation()

    def stop_simulation(self) -> None:
        """Stop the simulation."""
        self._check_client()
        self._sim.stopSimulation()

    def set_stepping_mode(self, flag: bool) -> None:
        """Enable or disable the stepping (formerly synchronous) mode."""
        self._check_client()
        self._sim.setStepping(flag)

    def trigger_next_simulation_step(self) -> None:
        """Advance the simulation by one step in stepping mode."""
        self._check_client()
        self._sim.step()

    # ------------------------------------------------------------ objects

    def get_object_handle(self, objectname: str) -> int:
        """The handle of the named object; raises ``CoppeliaSimError`` if missing."""
        hint = ""
        if not starts_with_slash(objectname) and not self.enable_deprecated_name_compatibility:
            hint = f'Did you mean "/{objectname}"? \n'
        try:
            self._check_client()
            name = self._standard_name(objectname)
            handle = self._sim.getObject(name)
            self._update_map(name, handle)
        except Exception as exc:
            self._throw_runtime_error(
                f"{exc} \n"
                f'The object "{objectname}" does not exist in the current scene '
                f"in CoppeliaSim. \n{hint}"
            )
        return handle

    def get_object_handles(self, objectnames: Iterable[str]) -> List[int]:
        """The handles of the named objects, in order."""
        return [self.get_object_handle(name) for name in objectnames]

    def get_object_name(self, handle: int) -> str:
        """The full name of the object with the given handle."""
        self._check_client()
        objectname = self._sim.getObjectAlias(handle, 1)
        self._update_map(objectname, handle)
        return objectname

    def get_object_names(self, handles: Iterable[int]) -> List[str]:
        """The names of the objects with the given handles, in order."""
        return [self.get_object_name(handle) for handle in handles]

    # ------------------------------------------------------------ deprecated

    def disconnect(self) -> None:
        """Does nothing; kept for compatibility."""
        warnings.warn(
            "disconnect() is not required with the ZeroMQ remote API.",
            DeprecationWarning,
            stacklevel=2,
        )

    def disconnect_all(self) -> None:
        """Does nothing; kept for compatibility."""
        warnings.warn(
            "disconnect_all() is not required with the ZeroMQ remote API.",
            DeprecationWarning,
            stacklevel=2,
        )

    def set_synchronous(self, flag: bool) -> None:
        """Same as ``set_stepping_mode``."""
        warnings.warn(
            "The synchronous mode is now called stepping mode. "
            "Consider using set_stepping_mode(flag) instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        self.set_stepping_mode(flag)

    def wait_for_simulation_step_to_end(self) -> int:
        """Always 0; kept for compatibility."""
        warnings.warn(
            "wait_for_simulation_step_to_end() is not required with the ZeroMQ remote API.",
            DeprecationWarning,
            stacklevel=2,
        )
        return 0