from __future__ import annotations

import argparse
import os
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from formatos.adapters.rest_file_store import RestFileStoreAdapter
from formatos.domain.file_types import format_date, format_file_size
from formatos.domain.listing_view import SORT_KEYS, ListingQuery, build_listing_view
from formatos.domain.paths import normalize_path


def main() -> None:
    parser = argparse.ArgumentParser(description="List a folder of the remote file store.")
    parser.add_argument("path", nargs="?", default="", help="Folder path, empty for the root.")
    parser.add_argument("--search", default="", help="Case-insensitive name filter.")
    parser.add_argument("--type", dest="type_filter", default="all", help="File category filter.")
    parser.add_argument("--sort", default="name", choices=SORT_KEYS, help="Sort key.")
    parser.add_argument("--desc", action="store_true", help="Sort descending.")
    args = parser.parse_args()

    base_url = os.getenv("FORMATOS_API_BASE_URL", "http://localhost:8080/api")
    token = os.getenv("FORMATOS_API_TOKEN", "")
    if not token:
        raise SystemExit("Missing FORMATOS_API_TOKEN in .env or environment.")

    store = RestFileStoreAdapter(base_url, token)
    path = normalize_path(args.path)
    listing = store.list(path)
    view = build_listing_view(
        listing.files,
        ListingQuery(
            search_term=args.search,
            type_filter=args.type_filter,
            sort_key=args.sort,
            sort_order="desc" if args.desc else "asc",
        ),
    )

    print(f"Path: /{path}")
    print("Folders:")
    for folder in listing.folders:
        print("-", folder)
    print(f"\nFiles ({len(view.visible_files)} of {len(listing.files)}):")
    for entry in view.visible_files:
        print(
            f"- {entry.name}  [{entry.mime_category}]  "
            f"{format_file_size(entry.size_bytes)}  {format_date(entry.created_at)}"
        )


if __name__ == "__main__":
    main()
