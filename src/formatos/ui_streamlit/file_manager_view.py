from __future__ import annotations

import streamlit as st

from formatos.domain.file_types import FILE_TYPE_OPTIONS, format_date, format_file_size, type_info
from formatos.domain.listing_view import ASC, DESC, SORT_CREATED_AT, SORT_NAME, SORT_SIZE, SORT_TYPE
from formatos.domain.models import WARNING, FileEntry, RenameEditing
from formatos.domain.uploads import MEGABYTE, split_by_size_limit
from formatos.services.file_manager import FileManager
from formatos.ui_streamlit.helpers import (
    _trigger_rerun,
    approve_confirmation,
    dismiss_confirmation,
    pending_confirmation,
    pop_download,
    render_notifications,
    request_confirmation,
    to_upload_items,
)

_SORT_LABELS = {
    SORT_CREATED_AT: "Date",
    SORT_NAME: "Name",
    SORT_SIZE: "Size",
    SORT_TYPE: "Type",
}


def render_file_manager(manager: FileManager, max_upload_bytes: int) -> None:
    st.title("Formatos")
    st.caption("File and folder management")

    render_notifications(manager.notifications.items)
    _render_pending_confirmation(manager)
    _render_download_link()
    _render_breadcrumbs(manager)
    if manager.navigation.loading:
        st.info("Loading files and folders...")

    _render_upload_zone(manager, max_upload_bytes)
    _render_folders(manager)
    _render_controls(manager)
    _render_files(manager)


def _render_breadcrumbs(manager: FileManager) -> None:
    crumbs = manager.navigation.breadcrumbs
    cols = st.columns(len(crumbs) + 1)
    if cols[0].button("Up", key="nav_up", disabled=not manager.navigation.current_path):
        manager.navigation.navigate_up()
        _trigger_rerun()
    for index, crumb in enumerate(crumbs, start=1):
        if cols[index].button(crumb.label, key=f"crumb_{crumb.prefix or '_root'}"):
            manager.navigation.navigate_to_breadcrumb(crumb.prefix)
            _trigger_rerun()


def _render_upload_zone(manager: FileManager, max_upload_bytes: int) -> None:
    if not manager.is_admin:
        st.warning("Restricted access: only administrators can upload and delete files.")
        return
    max_mb = max_upload_bytes // MEGABYTE
    with st.form("upload_form", clear_on_submit=True):
        uploaded_files = st.file_uploader(
            f"Drop files here or click to select (max. {max_mb}MB each)",
            accept_multiple_files=True,
        )
        submitted = st.form_submit_button("Upload", disabled=manager.files.uploading)
    if submitted and uploaded_files:
        accepted, rejected = split_by_size_limit(to_upload_items(uploaded_files), max_upload_bytes)
        for error in rejected:
            manager.notifications.push(str(error), WARNING)
        if accepted:
            with st.spinner("Uploading..."):
                manager.files.upload_batch(accepted)
        _trigger_rerun()


def _render_folders(manager: FileManager) -> None:
    st.subheader("Folders")
    if manager.is_admin:
        cols = st.columns([4, 1])
        manager.folders.new_folder_name = cols[0].text_input(
            "New folder name",
            value=manager.folders.new_folder_name,
            key="new_folder_name",
        )
        if cols[1].button("Create folder"):
            manager.folders.create_folder()
            st.session_state.pop("new_folder_name", None)
            _trigger_rerun()

    folders = manager.folder_names
    if not folders:
        st.info("No folders here.")
        return
    rename_state = manager.folders.rename_state
    for folder in folders:
        if isinstance(rename_state, RenameEditing) and rename_state.folder_name == folder:
            _render_rename_row(manager, rename_state)
            continue
        cols = st.columns([5, 1, 1, 1])
        cols[0].markdown(f"**{folder}**")
        if cols[1].button("Open", key=f"open_{folder}"):
            manager.navigation.navigate_into_folder(folder)
            _trigger_rerun()
        if manager.is_admin:
            if cols[2].button("Rename", key=f"rename_{folder}"):
                manager.folders.start_rename(folder)
                _trigger_rerun()
            if cols[3].button("Delete", key=f"delete_folder_{folder}"):
                request_confirmation(
                    "delete_folder", folder, f"Delete folder '{folder}' and all contents?"
                )
                _trigger_rerun()


def _render_rename_row(manager: FileManager, session: RenameEditing) -> None:
    cols = st.columns([5, 1, 1])
    draft = cols[0].text_input(
        "New name",
        value=session.draft,
        key=f"rename_draft_{session.folder_name}",
        label_visibility="collapsed",
    )
    manager.folders.update_rename_draft(draft)
    if cols[1].button("Save", key=f"rename_save_{session.folder_name}"):
        manager.folders.commit_rename()
        _trigger_rerun()
    if cols[2].button("Cancel", key=f"rename_cancel_{session.folder_name}"):
        manager.folders.cancel_rename()
        _trigger_rerun()


def _render_controls(manager: FileManager) -> None:
    query = manager.view.query
    cols = st.columns([3, 2, 2, 1, 1])
    search_term = cols[0].text_input("Search files", value=query.search_term)
    option_values = [option.value for option in FILE_TYPE_OPTIONS]
    type_filter = cols[1].selectbox(
        "Type",
        options=option_values,
        index=option_values.index(query.type_filter) if query.type_filter in option_values else 0,
        format_func=lambda value: next(
            option.label for option in FILE_TYPE_OPTIONS if option.value == value
        ),
    )
    sort_keys = list(_SORT_LABELS)
    sort_key = cols[2].selectbox(
        "Sort by",
        options=sort_keys,
        index=sort_keys.index(query.sort_key) if query.sort_key in sort_keys else 0,
        format_func=lambda value: _SORT_LABELS[value],
    )
    sort_order = cols[3].radio("Order", options=[DESC, ASC], index=0 if query.sort_order == DESC else 1)
    st.session_state.setdefault("view_mode", "list")
    cols[4].radio("View", options=["list", "grid"], key="view_mode")
    manager.view.update_query(
        search_term=search_term,
        type_filter=type_filter,
        sort_key=sort_key,
        sort_order=sort_order,
    )


def _render_files(manager: FileManager) -> None:
    files = manager.visible_files
    st.subheader(f"Files ({len(files)})")
    if not files:
        st.info("No files match the current filters.")
        return
    if st.session_state.get("view_mode") == "grid":
        grid = st.columns(3)
        for index, entry in enumerate(files):
            with grid[index % 3]:
                _render_file_card(manager, entry)
        return
    for entry in files:
        cols = st.columns([4, 1, 1, 2, 1, 1])
        cols[0].write(entry.name)
        cols[1].write(entry.mime_category)
        cols[2].write(format_file_size(entry.size_bytes))
        cols[3].write(format_date(entry.created_at))
        _render_file_actions(manager, entry, cols[4], cols[5])


def _render_file_card(manager: FileManager, entry: FileEntry) -> None:
    info = type_info(entry.mime_category)
    st.markdown(f"**{entry.name}**")
    st.caption(f"{info.category} · {format_file_size(entry.size_bytes)} · {format_date(entry.created_at)}")
    cols = st.columns(2)
    _render_file_actions(manager, entry, cols[0], cols[1])


def _render_file_actions(manager: FileManager, entry: FileEntry, download_col, delete_col) -> None:
    if download_col.button("Download", key=f"download_{entry.file_id}"):
        manager.files.download_file(entry.name)
        _trigger_rerun()
    if manager.is_admin and delete_col.button("Delete", key=f"delete_file_{entry.file_id}"):
        request_confirmation("delete_file", entry.name, f"Delete file '{entry.name}'?")
        _trigger_rerun()


def _render_pending_confirmation(manager: FileManager) -> None:
    pending = pending_confirmation()
    if not pending:
        return
    st.warning(pending["message"])
    cols = st.columns(2)
    if cols[0].button("Yes, delete", key="confirm_yes"):
        approve_confirmation(pending["message"])
        if pending["action"] == "delete_folder":
            manager.folders.delete_folder(pending["target"])
        else:
            manager.files.delete_file(pending["target"])
        _trigger_rerun()
    if cols[1].button("Cancel", key="confirm_no"):
        dismiss_confirmation()
        _trigger_rerun()


def _render_download_link() -> None:
    link = pop_download()
    if link:
        st.link_button(f"Open {link['name']}", link["url"])
