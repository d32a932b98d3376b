"""Seed posts from JSON into the reference host and print the rendered block."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

CURRENT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = CURRENT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

load_dotenv(PROJECT_ROOT / ".env")

from more_from_widget.config import WidgetSettings
from more_from_widget.loader import load_posts_path
from more_from_widget.models.attributes import BLOCK_NAME
from more_from_widget.platform import LocalPlatform
from more_from_widget.startup import bootstrap


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the More From block for seeded posts.")
    parser.add_argument("posts", type=Path, help="JSON file holding an array of post records.")
    parser.add_argument("--category", required=True, help="Category id to list posts from.")
    parser.add_argument("--posts-to-show", type=int, default=3, help="Number of posts (default 3).")
    parser.add_argument("--layout", choices=("list", "grid"), default="list")
    parser.add_argument("--columns", type=int, default=3)
    parser.add_argument("--title", default="More From", help="Heading text; empty for none.")
    parser.add_argument("--show-date", action="store_true", help="Include post dates.")
    parser.add_argument("--show-thumbnail", action="store_true", help="Include thumbnails.")
    parser.add_argument("--escape-title", action="store_true", help="HTML-escape the heading.")
    parser.add_argument("--database-url", help="SQLAlchemy URL for the post store.")
    parser.add_argument("--sqlite-path", type=Path, help="SQLite file for the post store.")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    logging.basicConfig(
        level=logging.INFO if not args.quiet else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )
    logger = logging.getLogger("render_demo")

    settings = WidgetSettings.from_env()
    if args.database_url or args.sqlite_path:
        settings = replace(settings, database_url=args.database_url, sqlite_path=args.sqlite_path)
    if args.escape_title:
        settings = replace(settings, escape_title=True)

    widget = bootstrap(settings)
    platform = widget.platform
    if not isinstance(platform, LocalPlatform):
        raise SystemExit("The demo requires the local reference platform.")

    posts = load_posts_path(args.posts, platform.repository)
    platform.repository.upsert_posts(posts)
    logger.info("Seeded %d post(s) from %s", len(posts), args.posts)

    widget.enqueue_block_assets()
    for handle, asset in platform.styles.items():
        logger.info("Enqueued style %s -> %s (version %s)", handle, asset.url, asset.version)

    markup = platform.render_block(
        BLOCK_NAME,
        {
            "title": args.title,
            "category": args.category,
            "postsToShow": args.posts_to_show,
            "layout": args.layout,
            "columns": args.columns,
            "displayPostDate": args.show_date,
            "displayPostThumbnail": args.show_thumbnail,
        },
    )
    if not markup:
        logger.warning("Nothing rendered for category %r", args.category)
    print(markup)


if __name__ == "__main__":
    main()
