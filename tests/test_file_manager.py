from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from unittest.mock import Mock

from formatos.container import build_services
from formatos.domain.listing_view import ListingViewEngine
from formatos.domain.models import RenameIdle, UploadItem
from formatos.services.file_manager import FileManager
from formatos.services.file_service import FileService
from formatos.services.folder_service import FolderService
from formatos.services.navigation_service import NavigationService
from formatos.services.permission_service import PermissionService
from formatos.settings import LAST_PATH_KEY

from conftest import StaticPermissions


def _manager(store, persistence, notifications, admin=True) -> FileManager:
    navigation = NavigationService(store, persistence, notifications)
    permissions = PermissionService(StaticPermissions(admin))
    confirm = Mock(return_value=True)
    return FileManager(
        navigation,
        FolderService(store, navigation, permissions, notifications, confirm),
        FileService(store, navigation, permissions, notifications, confirm, opener=Mock()),
        permissions,
        notifications,
        view=ListingViewEngine(),
    )


def test_start_checks_role_and_restores_location(store, persistence, notifications) -> None:
    store.add_file("docs/b.pdf", size_bytes=100, created_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
    store.add_file("docs/a.jpg", size_bytes=50, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    store.folders.add("docs/sub")
    persistence.set(LAST_PATH_KEY, "docs")
    manager = _manager(store, persistence, notifications)

    manager.start()
    manager.start()

    assert manager.is_admin is True
    assert manager.navigation.current_path == "docs"
    assert manager.folder_names == ["sub"]
    assert [entry.name for entry in manager.visible_files] == ["b.pdf", "a.jpg"]
    assert store.calls == [("list", "docs")]


def test_view_tracks_navigation_and_query(store, persistence, notifications) -> None:
    store.add_file("a.jpg")
    store.add_file("b.pdf")
    store.add_file("docs/c.mp3")
    manager = _manager(store, persistence, notifications)
    manager.start()

    manager.view.update_query(type_filter="image")
    assert [entry.name for entry in manager.visible_files] == ["a.jpg"]

    manager.navigation.navigate_into_folder("docs")
    assert manager.visible_files == []
    manager.view.set_type_filter("all")
    assert [entry.name for entry in manager.visible_files] == ["c.mp3"]


def test_mutations_refresh_the_view(store, persistence, notifications) -> None:
    manager = _manager(store, persistence, notifications)
    manager.start()

    manager.folders.create_folder("Actas")
    manager.navigation.navigate_into_folder("Actas")

    manager.files.upload_batch([UploadItem("acta-enero.pdf", b"%PDF")])

    assert [entry.name for entry in manager.visible_files] == ["acta-enero.pdf"]
    manager.navigation.navigate_up()
    assert manager.folder_names == ["Actas"]


def test_read_only_user_cannot_mutate(store, persistence, notifications) -> None:
    store.folders.add("docs")
    manager = _manager(store, persistence, notifications, admin=False)
    manager.start()

    manager.folders.create_folder("X")
    manager.folders.delete_folder("docs")
    manager.folders.start_rename("docs")
    manager.folders.update_rename_draft("renamed")
    manager.folders.commit_rename()

    assert store.mutating_calls() == []
    assert [item.kind for item in notifications.items] == ["error", "error", "error"]
    assert isinstance(manager.folders.rename_state, RenameIdle)


def test_close_tears_down_session(store, persistence, notifications, scheduler) -> None:
    manager = _manager(store, persistence, notifications)
    manager.start()
    manager.folders.create_folder("X")

    manager.close()

    assert notifications.items == []
    assert all(timer.cancelled for timer in scheduler.timers)


def test_build_services_wires_file_manager(tmp_path) -> None:
    services = build_services(
        "tok",
        str(tmp_path / "formatos.db"),
        confirm=lambda message: False,
        base_url="https://api.example/api",
        user_role="CONSULTA",
    )

    manager = services["file_manager"]
    assert isinstance(manager, FileManager)
    assert manager.navigation is services["navigation_service"]
    assert manager.folders is services["folder_service"]
    assert manager.files is services["file_service"]
    assert manager.is_admin is False
    manager.close()


def test_background_listings_stay_consistent_with_ui_edits(store, persistence, notifications) -> None:
    for index in range(20):
        store.add_file(f"docs/{index:02d}.pdf")
        store.add_file(f"fotos/{index:02d}.jpg")
    with ThreadPoolExecutor(max_workers=4) as executor:
        navigation = NavigationService(store, persistence, notifications, executor=executor)
        permissions = PermissionService(StaticPermissions(True))
        confirm = Mock(return_value=True)
        manager = FileManager(
            navigation,
            FolderService(store, navigation, permissions, notifications, confirm),
            FileService(store, navigation, permissions, notifications, confirm, opener=Mock()),
            permissions,
            notifications,
            view=ListingViewEngine(),
        )
        futures = []
        for round_number in range(50):
            futures.append(navigation.navigate_to("docs" if round_number % 2 else "fotos"))
            manager.view.toggle_sort_order()
            manager.folders.start_rename("docs")
        for future in futures:
            future.result()

    assert manager.view.files == navigation.listing.files
    assert {entry.name for entry in manager.visible_files} == {
        entry.name for entry in navigation.listing.files
    }
    assert navigation.current_path == "docs"
    assert navigation.loading is False
    manager.close()
