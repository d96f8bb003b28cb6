#!/usr/bin/env python3
"""Print the comment thread of a post as the given user would see it.

Usage:
    python scripts/show_thread.py <post_id> [--email EMAIL --password PASSWORD]
"""

import argparse
import asyncio
import sys
from uuid import UUID

import logfire

from quill.config import Settings
from quill.domain.value import PostId
from quill.interface.client import ClientSession, CommentThread, QuillClient
from quill.interface.error import ApiError
from quill.util.observability import configure_logfire, instrument_httpx


async def show_thread(
    settings: Settings, post_id: PostId, email: str | None, password: str | None
) -> int:
    session = ClientSession()
    async with QuillClient.from_settings(settings.client, session) as client:
        if email and password:
            await session.login(client, email, password)

        thread = await CommentThread.open(client, session, post_id)
        print(thread.render() or "(no comments yet)")

        for notification in thread.notifications:
            print(f"! {notification.message}", file=sys.stderr)
        return 1 if thread.notifications else 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("post_id", type=UUID)
    parser.add_argument("--email")
    parser.add_argument("--password")
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)
    instrument_httpx()

    try:
        return asyncio.run(
            show_thread(settings, PostId(args.post_id), args.email, args.password)
        )
    except ApiError as e:
        logfire.error("Could not show thread", status_code=e.status_code, error=e.detail)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
