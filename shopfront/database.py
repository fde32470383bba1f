# shopfront/database.py
from dataclasses import dataclass
from functools import partial

from shopfront.core.config import Settings
from shopfront.core.supabase_client import supabase_client
from shopfront.repositories.fallback_store import FallbackStore
from shopfront.repositories.local_store import LocalFileStore
from shopfront.repositories.remote_store import RemoteStore
from shopfront.repositories.store import Store

# ---------------------------------------------------------
# Store wiring
#
# DATA_SOURCE=local  : JSON files under DATA_DIR only.
# DATA_SOURCE=remote : Supabase table first; on any failure the same
#                      operation runs against the JSON file.
#
# On-disk shapes differ per entity:
#   products.json -> {"products": [...]}
#   users.json    -> [...]
# ---------------------------------------------------------


@dataclass
class Stores:
    products: Store
    users: Store


def _local_stores(settings: Settings) -> Stores:
    return Stores(
        products=LocalFileStore(settings.products_path, wrapper_key="products", name="products"),
        users=LocalFileStore(settings.users_path, name="users"),
    )


def build_stores(settings: Settings) -> Stores:
    """
    Build the product and user stores for the configured data source.

    The mode is read here once; nothing below the factory looks at it.
    """
    local = _local_stores(settings)
    if settings.DATA_SOURCE == "local":
        return local

    client_factory = partial(supabase_client, settings)
    return Stores(
        products=FallbackStore(RemoteStore(client_factory, settings.PRODUCTS_TABLE), local.products),
        users=FallbackStore(RemoteStore(client_factory, settings.USERS_TABLE), local.users),
    )
