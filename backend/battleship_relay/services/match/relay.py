import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from battleship_relay.protocol import PLAYER_CONNECTION, TIMEOUT
from .slots import SlotRegistry, SlotView
from .timer import InactivityTimer


class ConnectionState(Enum):
    REJECTED = 'rejected'
    ACTIVE = 'active'
    CLOSED = 'closed'


@dataclass
class Connection:
    sid: str
    slot: Optional[int]
    state: ConnectionState
    timer: Optional[InactivityTimer] = None


class MatchRelay:
    """Per-connection bookkeeping and forwarding between the two slots.

    Every connection gets an entry keyed by its Socket.IO sid. Only ACTIVE
    connections own a slot, receive relayed events and run a timer. The
    table is guarded by one lock so a timer and a disconnect for the same
    connection can never both release its slot.
    """

    def __init__(
        self,
        socketio,
        registry: SlotRegistry,
        namespace: str = '/',
        timeout_sec: float = 600.0,
        reset_on_activity: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.socketio = socketio
        # bound at construction so timers keep talking to the server of their own app
        self.server = socketio.server
        self.registry = registry
        self.namespace = namespace
        self.timeout_sec = timeout_sec
        self.reset_on_activity = reset_on_activity
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._connections: Dict[str, Connection] = {}

    def _active(self, sid: str) -> Optional[Connection]:
        conn = self._connections.get(sid)
        if conn is None or conn.state is not ConnectionState.ACTIVE:
            return None
        return conn

    def _touch(self, conn: Connection) -> None:
        if self.reset_on_activity and conn.timer is not None:
            conn.timer.touch()

    def attach(self, sid: str) -> Optional[int]:
        """Give the new connection a slot; None means it was rejected."""
        with self._lock:
            index = self.registry.assign()
            if index is None:
                self._connections[sid] = Connection(sid=sid, slot=None, state=ConnectionState.REJECTED)
                self.logger.info(f"[reject] sid={sid} all {len(self.registry)} slots taken")
                return None
            self._connections[sid] = Connection(sid=sid, slot=index, state=ConnectionState.ACTIVE)
        self.logger.info(f"[connect] slot={index} sid={sid}")
        return index

    def start_timer(self, sid: str) -> None:
        with self._lock:
            conn = self._active(sid)
            if conn is None or conn.timer is not None:
                return
            conn.timer = InactivityTimer(self.server, self.timeout_sec, lambda: self.expire(sid, conn))
            conn.timer.start()
        self.logger.info(f"[timer-set] slot={conn.slot} sid={sid} duration={self.timeout_sec}s")

    def mark_ready(self, sid: str) -> Optional[int]:
        with self._lock:
            conn = self._active(sid)
            if conn is None:
                self.logger.debug(f"[stale] player-ready from sid={sid} ignored")
                return None
            self.registry.set_ready(conn.slot)
            self._touch(conn)
            index = conn.slot
        self.logger.info(f"[ready] slot={index}")
        return index

    def status(self, sid: str) -> Optional[List[SlotView]]:
        with self._lock:
            conn = self._active(sid)
            if conn is None:
                self.logger.debug(f"[stale] check-players from sid={sid} ignored")
                return None
            self._touch(conn)
            return self.registry.snapshot()

    def forward(self, sid: str, event: str, *args) -> bool:
        """Relay the event arguments unchanged from ``sid`` to every other active connection."""
        with self._lock:
            conn = self._active(sid)
            if conn is None:
                self.logger.debug(f"[stale] {event} from sid={sid} ignored")
                return False
            self._touch(conn)
            index = conn.slot
        self.logger.info(f"[{event}] slot={index} payload={args!r}")
        self.broadcast_others(sid, event, *args)
        return True

    def detach(self, sid: str) -> Optional[int]:
        """Drop the connection and announce the slot it freed, if any."""
        with self._lock:
            conn = self._connections.pop(sid, None)
            if conn is None:
                return None
            if conn.state is not ConnectionState.ACTIVE:
                self.logger.info(f"[disconnect] sid={sid} state={conn.state.value}")
                return None
            conn.state = ConnectionState.CLOSED
            self.registry.release(conn.slot)
            if conn.timer is not None:
                conn.timer.cancel()
            # announced before the lock drops so a new attach cannot overtake it
            self.broadcast_others(sid, PLAYER_CONNECTION, conn.slot)
        self.logger.info(f"[disconnect] slot={conn.slot} sid={sid}")
        return conn.slot

    def expire(self, sid: str, conn: Connection) -> None:
        """Timer callback: time out ``conn`` if it still owns its slot."""
        with self._lock:
            if self._connections.get(sid) is not conn or conn.state is not ConnectionState.ACTIVE:
                self.logger.info(f"[timer-abort] sid={sid} connection already closed")
                return
            conn.state = ConnectionState.CLOSED
            self.registry.release(conn.slot)
            self.broadcast_others(sid, PLAYER_CONNECTION, conn.slot)
        self.logger.info(f"[timer-fire] slot={conn.slot} sid={sid}")
        self.server.emit(TIMEOUT, to=sid, namespace=self.namespace)
        self.logger.info(f"[timeout] slot={conn.slot} sid={sid} disconnecting")
        # The disconnect handler sees a CLOSED entry and leaves the registry alone
        self.server.disconnect(sid, namespace=self.namespace)

    def broadcast_others(self, sender_sid: str, event: str, *args) -> None:
        with self._lock:
            recipients = [
                conn.sid
                for conn in self._connections.values()
                if conn.state is ConnectionState.ACTIVE and conn.sid != sender_sid
            ]
        for sid in recipients:
            # a tuple is sent as the argument list, so a lone None still arrives as null
            self.server.emit(event, args, to=sid, namespace=self.namespace)

    def connections(self) -> Dict[str, str]:
        with self._lock:
            return {sid: conn.state.value for sid, conn in self._connections.items()}
