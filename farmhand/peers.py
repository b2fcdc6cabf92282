from __future__ import annotations

from typing import Any

from farmhand.constants import MAX_LATEST_PEER_MESSAGES, MAX_PENDING_PEER_MESSAGES, GameState, Severity


def add_peer(state: GameState, peer_id: str) -> GameState:
    """Register a connected peer whose state is not known yet."""
    return {**state, "peers": {**state.get("peers", {}), peer_id: None}}


def remove_peer(state: GameState, peer_id: str) -> GameState:
    peers = dict(state.get("peers", {}))
    peers.pop(peer_id, None)
    return {**state, "peers": peers}


def update_peer(state: GameState, peer_id: str, peer_state: dict[str, Any]) -> GameState:
    """
    Store a peer's broadcast state and merge its pending messages into the
    latest peer messages, newest first.
    """
    # Older clients may not send pending messages at all.
    pending = peer_state.get("pending_peer_messages", [])
    return {
        **state,
        "peers": {**state.get("peers", {}), peer_id: peer_state},
        "latest_peer_messages": [*pending, *state.get("latest_peer_messages", [])][:MAX_LATEST_PEER_MESSAGES],
    }


def prepend_pending_peer_message(state: GameState, message: str, severity: Severity = "info") -> GameState:
    entry = {"id": state.get("id", ""), "message": message, "severity": severity}
    return {
        **state,
        "pending_peer_messages": [entry, *state.get("pending_peer_messages", [])][:MAX_PENDING_PEER_MESSAGES],
    }
