from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

_SRC_ROOT = Path(__file__).resolve().parents[2]
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))
load_dotenv(_SRC_ROOT.parent / ".env", override=False)

from formatos import settings
from formatos.container import build_services
from formatos.ui_streamlit.file_manager_view import render_file_manager
from formatos.ui_streamlit.helpers import (
    _forget_token,
    _get_saved_token,
    _save_token,
    _trigger_rerun,
    remember_download,
    session_confirm,
)


def _init_state() -> None:
    st.session_state.setdefault("services", None)
    st.session_state.setdefault("services_access_token", None)
    st.session_state.setdefault("services_sqlite_path", None)
    st.session_state.setdefault("access_token", None)


def _get_services(access_token: str, sqlite_path: str):
    if (
        st.session_state["services"] is None
        or st.session_state.get("services_access_token") != access_token
        or st.session_state.get("services_sqlite_path") != sqlite_path
    ):
        previous = st.session_state.get("services")
        if previous is not None:
            previous["file_manager"].close()
        st.session_state["services"] = build_services(
            access_token,
            sqlite_path,
            confirm=session_confirm,
            opener=remember_download,
        )
        st.session_state["services_access_token"] = access_token
        st.session_state["services_sqlite_path"] = sqlite_path
    return st.session_state["services"]


def _resolve_access_token() -> str | None:
    token = st.session_state.get("access_token") or settings.API_TOKEN or _get_saved_token()
    if token:
        return token
    st.subheader("API Access Token")
    entered = st.text_input("Access Token", type="password")
    remember = st.checkbox("Remember on this computer", value=True)
    if st.button("Continue"):
        if not entered.strip():
            st.error("Access token is required.")
            return None
        st.session_state["access_token"] = entered.strip()
        if remember and not _save_token(entered.strip()):
            st.warning(
                "Saved access token for this session, but the OS keychain is unavailable. "
                "You'll need to enter it again next time."
            )
        _trigger_rerun()
    return None


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL)
    st.set_page_config(page_title="Formatos", layout="wide")
    _init_state()

    access_token = _resolve_access_token()
    if not access_token:
        return

    with st.sidebar:
        st.caption(f"API: {settings.API_BASE_URL}")
        if st.button("Sign out"):
            _forget_token()
            services = st.session_state.get("services")
            if services is not None:
                services["file_manager"].close()
            st.session_state["services"] = None
            st.session_state["access_token"] = None
            _trigger_rerun()

    services = _get_services(access_token, settings.SQLITE_PATH)
    manager = services["file_manager"]
    manager.start()
    render_file_manager(manager, settings.MAX_UPLOAD_BYTES)


if __name__ == "__main__":
    main()
