from __future__ import annotations

from farmhand.constants import NOTIFICATION_LOG_SIZE, GameState, Severity


def show_notification(state: GameState, message: str, severity: Severity = "info") -> GameState:
    """Queue a notification for today, skipping exact duplicates."""
    todays = state.get("todays_notifications", [])
    if any(n["message"] == message for n in todays):
        return state
    return {**state, "todays_notifications": [*todays, {"message": message, "severity": severity}]}


def rotate_notification_logs(state: GameState) -> GameState:
    """Archive today's notifications, grouped by severity, into the log."""
    todays = state.get("todays_notifications", [])
    log = list(state.get("notification_log", []))
    if todays:
        grouped: dict[str, list[str]] = {}
        for notification in todays:
            grouped.setdefault(notification["severity"], []).append(notification["message"])
        log = [{"day": state.get("day_count", 0), "notifications": grouped}, *log][:NOTIFICATION_LOG_SIZE]
    return {**state, "notification_log": log, "todays_notifications": []}
