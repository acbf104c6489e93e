from typing import Any, cast

from supabase import create_client, Client
from dotenv import load_dotenv
import os

load_dotenv()


def get_supabase_client() -> Client:
    """Get initialized Supabase client for the host platform's store."""
    url: str | None = os.getenv("SUPABASE_URL")
    key: str | None = os.getenv("SUPABASE_SERVICE_KEY")

    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")

    return create_client(url, key)


def first_row(response: Any) -> dict[str, Any] | None:
    """First row of a query response, or None when nothing matched."""
    if not response.data:
        return None
    return cast(dict[str, Any], response.data[0])
