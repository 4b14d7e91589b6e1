from __future__ import annotations

import keyring
import streamlit as st
from keyring.errors import KeyringError

from formatos.domain.models import ERROR, SUCCESS, WARNING, Notification, UploadItem

_KEYRING_SERVICE = "formatos-file-manager"
_KEYRING_API_TOKEN = "api_token"
_PENDING_CONFIRMATION_KEY = "pending_confirmation"
_CONFIRMED_MESSAGE_KEY = "confirmed_message"
_DOWNLOAD_LINK_KEY = "download_link"


def _trigger_rerun() -> None:
    if hasattr(st, "rerun"):
        st.rerun()
    else:
        st.experimental_rerun()


def _get_saved_token() -> str | None:
    try:
        return keyring.get_password(_KEYRING_SERVICE, _KEYRING_API_TOKEN)
    except KeyringError:
        return None


def _save_token(token: str) -> bool:
    try:
        keyring.set_password(_KEYRING_SERVICE, _KEYRING_API_TOKEN, token)
        return True
    except KeyringError:
        return False


def _forget_token() -> None:
    try:
        keyring.delete_password(_KEYRING_SERVICE, _KEYRING_API_TOKEN)
    except KeyringError:
        return


def session_confirm(message: str) -> bool:
    """Confirm a destructive action only if the user approved this exact prompt."""
    confirmed = st.session_state.get(_CONFIRMED_MESSAGE_KEY) == message
    st.session_state[_CONFIRMED_MESSAGE_KEY] = None
    return confirmed


def request_confirmation(action: str, target: str, message: str) -> None:
    st.session_state[_PENDING_CONFIRMATION_KEY] = {
        "action": action,
        "target": target,
        "message": message,
    }


def pending_confirmation() -> dict | None:
    return st.session_state.get(_PENDING_CONFIRMATION_KEY)


def approve_confirmation(message: str) -> None:
    st.session_state[_CONFIRMED_MESSAGE_KEY] = message
    st.session_state[_PENDING_CONFIRMATION_KEY] = None


def dismiss_confirmation() -> None:
    st.session_state[_PENDING_CONFIRMATION_KEY] = None


def remember_download(url: str, filename: str) -> None:
    st.session_state[_DOWNLOAD_LINK_KEY] = {"url": url, "name": filename}


def pop_download() -> dict | None:
    return st.session_state.pop(_DOWNLOAD_LINK_KEY, None)


def to_upload_items(uploaded_files: list) -> list[UploadItem]:
    return [
        UploadItem(
            name=uploaded.name,
            content=uploaded.getvalue(),
            content_type=uploaded.type or "application/octet-stream",
        )
        for uploaded in uploaded_files
    ]


def render_notifications(notifications: list[Notification]) -> None:
    for notification in notifications:
        if notification.kind == SUCCESS:
            st.success(notification.message)
        elif notification.kind == ERROR:
            st.error(notification.message)
        elif notification.kind == WARNING:
            st.warning(notification.message)
        else:
            st.info(notification.message)
