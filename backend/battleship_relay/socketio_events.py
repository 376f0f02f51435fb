from flask import current_app, request
from flask_socketio import emit

from battleship_relay import socketio
from battleship_relay.protocol import (
    CHECK_PLAYERS,
    ENEMY_READY,
    FIRE,
    FIRE_REPLY,
    PLAYER_CONNECTION,
    PLAYER_NUMBER,
    PLAYER_READY,
    REJECTED_SLOT,
)
from battleship_relay.services.match import MatchRelay


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _relay() -> MatchRelay:
    return current_app.extensions['match_relay']


def handle_connect(auth=None):
    relay = _relay()
    sid = _get_sid()
    index = relay.attach(sid)
    emit(PLAYER_NUMBER, REJECTED_SLOT if index is None else index)
    if index is None:
        # Rejected connections stay open but take no part in the match
        return
    relay.broadcast_others(sid, PLAYER_CONNECTION, index)
    relay.start_timer(sid)


def handle_disconnect(reason=None):
    # detach announces the freed slot itself
    _relay().detach(_get_sid())


def handle_player_ready(data=None):
    relay = _relay()
    sid = _get_sid()
    index = relay.mark_ready(sid)
    if index is not None:
        relay.broadcast_others(sid, ENEMY_READY, index)


def handle_check_players(data=None):
    players = _relay().status(_get_sid())
    if players is None:
        return
    emit(CHECK_PLAYERS, [view.to_dict() for view in players])


def handle_fire(*args):
    _relay().forward(_get_sid(), FIRE, *args)


def handle_fire_reply(*args):
    _relay().forward(_get_sid(), FIRE_REPLY, *args)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register the match event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(PLAYER_READY, handle_player_ready, namespace=namespace)
    socketio.on_event(CHECK_PLAYERS, handle_check_players, namespace=namespace)
    socketio.on_event(FIRE, handle_fire, namespace=namespace)
    socketio.on_event(FIRE_REPLY, handle_fire_reply, namespace=namespace)
